"""
Filter kinds and their declared parameters.

Every filter the application offers is a member of the closed ``FilterKind``
enum. Each kind carries a ``FilterDescriptor`` listing which of the
recognized scalar parameters (intensity, radius, scale) its executor accepts,
together with the native default for each parameter.

Example:
    >>> kind = FilterKind.from_name("Gaussian Blur")
    >>> kind.descriptor.input_keys
    ('radius',)
    >>> kind.display_name
    'Gaussian Blur'
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from IF_Libs.constants import PARAM_INTENSITY, PARAM_RADIUS, PARAM_SCALE


@dataclass(frozen=True)
class FilterDescriptor:
    """Static description of a filter kind.

    Attributes:
        display_name: Human-readable name shown in the filter picker
        input_keys: Recognized parameter keys the filter accepts
        defaults: Native value for each key when no override is supplied
    """
    display_name: str
    input_keys: Tuple[str, ...] = ()
    defaults: Dict[str, float] = field(default_factory=dict)

    def accepts(self, key: str) -> bool:
        return key in self.input_keys

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "display_name": self.display_name,
            "input_keys": list(self.input_keys),
            "defaults": dict(self.defaults),
        }


class FilterKind(Enum):
    CRYSTALLIZE = "Crystallize"
    EDGES = "Edges"
    GAUSSIAN_BLUR = "GaussianBlur"
    PIXELLATE = "Pixellate"
    SEPIA_TONE = "SepiaTone"
    UNSHARP_MASK = "UnsharpMask"
    VIGNETTE = "Vignette"

    @property
    def descriptor(self) -> FilterDescriptor:
        return _DESCRIPTORS[self]

    @property
    def display_name(self) -> str:
        return self.descriptor.display_name

    @classmethod
    def from_name(cls, name: Any) -> "FilterKind":
        """
        Look up a filter kind by value, member name, or display name.

        Matching ignores case and spaces, so "gaussian blur",
        "GaussianBlur" and "GAUSSIAN_BLUR" all resolve to the same kind.

        Raises:
            KeyError: If no filter kind matches
        """
        if isinstance(name, cls):
            return name

        wanted = _normalize(str(name))
        for kind in cls:
            candidates = (kind.value, kind.name, kind.display_name)
            if wanted in {_normalize(candidate) for candidate in candidates}:
                return kind

        available = ", ".join(kind.display_name for kind in cls)
        raise KeyError(f"Unknown filter kind '{name}'. Available filters: {available}")


def _normalize(name: str) -> str:
    return name.replace(" ", "").replace("_", "").lower()


_DESCRIPTORS: Dict[FilterKind, FilterDescriptor] = {
    FilterKind.CRYSTALLIZE: FilterDescriptor(
        display_name="Crystallize",
        input_keys=(PARAM_RADIUS,),
        defaults={PARAM_RADIUS: 20.0},
    ),
    FilterKind.EDGES: FilterDescriptor(
        display_name="Edges",
    ),
    FilterKind.GAUSSIAN_BLUR: FilterDescriptor(
        display_name="Gaussian Blur",
        input_keys=(PARAM_RADIUS,),
        defaults={PARAM_RADIUS: 10.0},
    ),
    FilterKind.PIXELLATE: FilterDescriptor(
        display_name="Pixellate",
        input_keys=(PARAM_SCALE,),
        defaults={PARAM_SCALE: 8.0},
    ),
    FilterKind.SEPIA_TONE: FilterDescriptor(
        display_name="Sepia Tone",
        input_keys=(PARAM_INTENSITY,),
        defaults={PARAM_INTENSITY: 1.0},
    ),
    FilterKind.UNSHARP_MASK: FilterDescriptor(
        display_name="Unsharp Mask",
        input_keys=(PARAM_RADIUS, PARAM_INTENSITY),
        defaults={PARAM_RADIUS: 2.5, PARAM_INTENSITY: 0.5},
    ),
    FilterKind.VIGNETTE: FilterDescriptor(
        display_name="Vignette",
        input_keys=(PARAM_RADIUS, PARAM_INTENSITY),
        defaults={PARAM_RADIUS: 100.0, PARAM_INTENSITY: 0.0},
    ),
}


def list_filter_kinds() -> List[FilterKind]:
    """Return all filter kinds in picker order."""
    return list(FilterKind)

"""
Intensity to filter parameter mapping.

A single normalized intensity in [0, 1] drives every filter. This module
turns it into the named parameters a filter kind's executor expects:

- intensity-accepting filters: intensity = value
- radius-accepting filters: radius = value * 200
- scale-accepting filters: scale = value * 10

Filters accepting none of these (Edges) get no override at all. The scale
factors are applied uniformly; no per-filter clamping happens here.

Functions:
    map_intensity_to_parameters: Overrides derived from the intensity
    resolve_filter_parameters: Native defaults merged with the overrides
    describe_parameters: Recognized keys a filter kind accepts
"""

from typing import Any, Dict, List

from IF_Libs.constants import (
    PARAM_INTENSITY,
    PARAM_RADIUS,
    PARAM_SCALE,
    RADIUS_SCALE,
    SCALE_FACTOR,
)
from IF_Libs.FilterLib.filter_kinds import FilterKind

# Parameter key -> scale factor applied to the intensity
PARAMETER_RULES: Dict[str, float] = {
    PARAM_INTENSITY: 1.0,
    PARAM_RADIUS: RADIUS_SCALE,
    PARAM_SCALE: SCALE_FACTOR,
}


def map_intensity_to_parameters(kind: Any, intensity: float) -> Dict[str, float]:
    """
    Map an intensity value to the parameters of a filter kind.

    Args:
        kind: FilterKind member or filter name
        intensity: Normalized intensity, expected in [0, 1]

    Returns:
        Dictionary of parameter name -> value, empty when the filter
        accepts none of the recognized parameters

    Example:
        >>> map_intensity_to_parameters(FilterKind.GAUSSIAN_BLUR, 0.5)
        {'radius': 100.0}
        >>> map_intensity_to_parameters(FilterKind.EDGES, 0.75)
        {}
    """
    kind = FilterKind.from_name(kind)
    value = float(intensity)

    parameters: Dict[str, float] = {}
    for key, factor in PARAMETER_RULES.items():
        if kind.descriptor.accepts(key):
            parameters[key] = value * factor
    return parameters


def resolve_filter_parameters(kind: Any, intensity: float) -> Dict[str, float]:
    """
    Full parameter set for an executor: native defaults plus mapped overrides.
    """
    kind = FilterKind.from_name(kind)
    parameters = dict(kind.descriptor.defaults)
    parameters.update(map_intensity_to_parameters(kind, intensity))
    return parameters


def describe_parameters(kind: Any) -> List[str]:
    return list(FilterKind.from_name(kind).descriptor.input_keys)

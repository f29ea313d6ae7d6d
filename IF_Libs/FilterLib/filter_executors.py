"""
Filter Executors Registry.

This module provides a centralized registry for filter executors. It maps
each FilterKind to the callable that renders it, so the session never has to
know which imaging backend sits behind a filter.

An executor takes ``(image, parameters)`` and returns the filtered image, or
``None`` when the filter produced no output.

Classes:
    FilterExecutorRegistry: Registry for filter executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register the built-in Pillow executors
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from IF_Libs.FilterLib.filter_kinds import FilterKind

logger = logging.getLogger(__name__)

# Type alias for executor function
ExecutorFunction = Callable[[Any, Dict[str, Any]], Optional[Any]]


class FilterExecutorRegistry:
    """
    Registry for filter executors.

    Example:
        >>> registry = FilterExecutorRegistry()
        >>> registry.register(FilterKind.EDGES, execute_edges)
        >>> output = registry.execute(FilterKind.EDGES, image, {})
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._executors: Dict[FilterKind, ExecutorFunction] = {}
        self._metadata: Dict[FilterKind, Dict[str, Any]] = {}

    def register(
        self,
        kind: Any,
        executor: ExecutorFunction,
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a filter executor.

        Args:
            kind: FilterKind member or filter name
            executor: Callable accepting (image, parameters)
            description: Human-readable description of the filter
            tags: Optional list of tags for categorization (e.g., ["blur"])

        Raises:
            KeyError: If kind does not name a filter
            ValueError: If executor is not callable
            RuntimeError: If kind is already registered
        """
        kind = FilterKind.from_name(kind)

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if kind in self._executors:
            raise RuntimeError(
                f"Filter '{kind.value}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._executors[kind] = executor
        self._metadata[kind] = {
            "display_name": kind.display_name,
            "description": str(description),
            "parameters": list(kind.descriptor.input_keys),
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered executor for filter: {kind.value}")

    def unregister(self, kind: Any) -> bool:
        """
        Unregister a filter executor.

        Returns:
            True if unregistered, False if the filter was not registered
        """
        kind = FilterKind.from_name(kind)

        if kind in self._executors:
            del self._executors[kind]
            del self._metadata[kind]
            logger.debug(f"Unregistered executor for filter: {kind.value}")
            return True

        return False

    def get_executor(self, kind: Any) -> ExecutorFunction:
        """
        Get the executor for a filter kind.

        Raises:
            KeyError: If no executor is registered for the filter
        """
        kind = FilterKind.from_name(kind)

        if kind not in self._executors:
            available = ", ".join(self.list_filter_names())
            raise KeyError(
                f"No executor registered for filter '{kind.value}'. "
                f"Available filters: {available}"
            )

        return self._executors[kind]

    def has_executor(self, kind: Any) -> bool:
        try:
            return FilterKind.from_name(kind) in self._executors
        except KeyError:
            return False

    def execute(self, kind: Any, image: Any, parameters: Dict[str, Any]) -> Optional[Any]:
        """
        Run the executor registered for a filter kind.

        Args:
            kind: The filter to run
            image: Source PIL Image
            parameters: Parameter name -> value mapping

        Returns:
            Result from the executor (None when it produced no output)

        Raises:
            KeyError: If the filter is not registered
            Exception: Any exception raised by the executor
        """
        executor = self.get_executor(kind)
        return executor(image, dict(parameters))

    def list_filter_kinds(self) -> List[FilterKind]:
        """Registered filter kinds in declaration order."""
        return [kind for kind in FilterKind if kind in self._executors]

    def list_filter_names(self) -> List[str]:
        return [kind.display_name for kind in self.list_filter_kinds()]

    def get_metadata(self, kind: Any) -> Dict[str, Any]:
        """
        Get metadata for a filter kind.

        Returns:
            Dictionary with display_name, description, parameters, tags

        Raises:
            KeyError: If the filter is not registered
        """
        kind = FilterKind.from_name(kind)

        if kind not in self._metadata:
            raise KeyError(f"No metadata for filter: {kind.value}")

        return dict(self._metadata[kind])

    def filter_by_tag(self, tag: str) -> List[FilterKind]:
        """
        Get all registered filter kinds with a specific tag.
        """
        tag = str(tag).strip().lower()
        return [
            kind
            for kind in self.list_filter_kinds()
            if tag in [t.lower() for t in self._metadata[kind].get("tags", [])]
        ]

    def clear(self) -> None:
        """Clear all registered executors. Use with caution."""
        self._executors.clear()
        self._metadata.clear()
        logger.warning("Filter executor registry cleared")


# Global singleton registry
_default_registry: Optional[FilterExecutorRegistry] = None


def get_default_registry() -> FilterExecutorRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in executors.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = FilterExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: FilterExecutorRegistry) -> None:
    """
    Register the Pillow-backed executor for every filter kind.

    Args:
        registry: The registry to register executors with
    """
    from IF_Libs.FilterLib.pillow_filters import (
        execute_crystallize,
        execute_edges,
        execute_gaussian_blur,
        execute_pixellate,
        execute_sepia_tone,
        execute_unsharp_mask,
        execute_vignette,
    )

    registry.register(
        FilterKind.CRYSTALLIZE,
        execute_crystallize,
        description="Break the photo into flat-coloured polygonal cells",
        tags=["stylize", "distortion"],
    )

    registry.register(
        FilterKind.EDGES,
        execute_edges,
        description="Highlight edges on a dark background",
        tags=["stylize"],
    )

    registry.register(
        FilterKind.GAUSSIAN_BLUR,
        execute_gaussian_blur,
        description="Smooth Gaussian blur",
        tags=["blur"],
    )

    registry.register(
        FilterKind.PIXELLATE,
        execute_pixellate,
        description="Replace the photo with square colour blocks",
        tags=["stylize", "distortion"],
    )

    registry.register(
        FilterKind.SEPIA_TONE,
        execute_sepia_tone,
        description="Warm brown antique tint",
        tags=["color"],
    )

    registry.register(
        FilterKind.UNSHARP_MASK,
        execute_unsharp_mask,
        description="Sharpen detail with an unsharp mask",
        tags=["sharpen"],
    )

    registry.register(
        FilterKind.VIGNETTE,
        execute_vignette,
        description="Darken the corners of the photo",
        tags=["color"],
    )

    logger.info("Registered default filter executors")

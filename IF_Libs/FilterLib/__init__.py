"""
FilterLib - Filter kinds, parameter mapping and execution

This module provides the closed set of filters, the intensity-to-parameter
mapping table, and the Pillow-backed executors that render each filter.
"""

from IF_Libs.FilterLib.filter_kinds import FilterDescriptor, FilterKind, list_filter_kinds
from IF_Libs.FilterLib.parameter_mapper import (
    map_intensity_to_parameters,
    resolve_filter_parameters,
    describe_parameters,
)
from IF_Libs.FilterLib.filter_executors import (
    FilterExecutorRegistry,
    get_default_registry,
    register_default_executors,
)

__all__ = [
    "FilterDescriptor",
    "FilterKind",
    "list_filter_kinds",
    "map_intensity_to_parameters",
    "resolve_filter_parameters",
    "describe_parameters",
    "FilterExecutorRegistry",
    "get_default_registry",
    "register_default_executors",
]

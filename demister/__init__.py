"""
Public API for the demister sizing package.
"""

from .core import (
    K_FACTORS,
    PRESSURE_DROP_RANGES,
    CircularGeometry,
    DemisterInputs,
    DemisterResult,
    DemisterType,
    DemisterValidationError,
    LoadingStatus,
    Orientation,
    RectangularGeometry,
    VesselGeometry,
    classify_loading,
    k_factor,
    size_demister,
    sweep_margin,
)
from .steam import SaturationState, saturated_densities

__all__ = [
    "K_FACTORS",
    "PRESSURE_DROP_RANGES",
    "DemisterType",
    "Orientation",
    "VesselGeometry",
    "LoadingStatus",
    "DemisterInputs",
    "DemisterResult",
    "CircularGeometry",
    "RectangularGeometry",
    "DemisterValidationError",
    "k_factor",
    "classify_loading",
    "size_demister",
    "sweep_margin",
    "SaturationState",
    "saturated_densities",
]

"""
Core computational routines for the demister / mist eliminator sizing tool.

Sizing follows the Souders-Brown correlation. Everything here is pure: the
coefficient tables are read-only module constants and `size_demister` has no
side effects, so the CLI and any other front end can call it freely.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from math import isfinite, pi, sqrt
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union


class DemisterType(str, Enum):
    WIRE_MESH = "wire_mesh"
    WIRE_MESH_HIGH_CAPACITY = "wire_mesh_high_capacity"
    VANE = "vane"
    STRUCTURED_PACKING = "structured_packing"


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class VesselGeometry(str, Enum):
    CIRCULAR = "circular"
    RECTANGULAR = "rectangular"


class LoadingStatus(str, Enum):
    LOW = "low"
    OK = "ok"
    HIGH = "high"


# Souders-Brown K-factors [m/s]
K_FACTORS: Mapping[Tuple[DemisterType, Orientation], float] = MappingProxyType(
    {
        (DemisterType.WIRE_MESH, Orientation.HORIZONTAL): 0.107,
        (DemisterType.WIRE_MESH, Orientation.VERTICAL): 0.076,
        (DemisterType.WIRE_MESH_HIGH_CAPACITY, Orientation.HORIZONTAL): 0.140,
        (DemisterType.WIRE_MESH_HIGH_CAPACITY, Orientation.VERTICAL): 0.100,
        (DemisterType.VANE, Orientation.HORIZONTAL): 0.150,
        (DemisterType.VANE, Orientation.VERTICAL): 0.100,
        (DemisterType.STRUCTURED_PACKING, Orientation.HORIZONTAL): 0.120,
        (DemisterType.STRUCTURED_PACKING, Orientation.VERTICAL): 0.080,
    }
)

# Empirical pressure-drop bracket (min, max) [Pa]
PRESSURE_DROP_RANGES: Mapping[DemisterType, Tuple[float, float]] = MappingProxyType(
    {
        DemisterType.WIRE_MESH: (100.0, 250.0),
        DemisterType.WIRE_MESH_HIGH_CAPACITY: (80.0, 200.0),
        DemisterType.VANE: (50.0, 150.0),
        DemisterType.STRUCTURED_PACKING: (100.0, 300.0),
    }
)

HIGH_LOADING_MARGIN = 0.9  # above: close to flooding
LOW_LOADING_MARGIN = 0.4  # below: oversized pad


class DemisterValidationError(ValueError):
    """Raised when a sizing input violates a physical precondition."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class DemisterInputs:
    vapor_mass_flow: float  # [kg/s]
    vapor_density: float  # [kg/m3]
    liquid_density: float  # [kg/m3]
    demister_type: DemisterType = DemisterType.WIRE_MESH
    orientation: Orientation = Orientation.HORIZONTAL
    design_margin: float = 0.8  # fraction of flooding velocity
    geometry: VesselGeometry = VesselGeometry.CIRCULAR
    rectangle_width: Optional[float] = None  # [m], rectangular only


@dataclass(frozen=True)
class CircularGeometry:
    diameter: float  # [m]

    kind = VesselGeometry.CIRCULAR


@dataclass(frozen=True)
class RectangularGeometry:
    width: Optional[float] = None  # [m]
    height: Optional[float] = None  # [m], unset until a width is chosen

    kind = VesselGeometry.RECTANGULAR


Geometry = Union[CircularGeometry, RectangularGeometry]


@dataclass(frozen=True)
class DemisterResult:
    k_factor: float  # [m/s]
    max_velocity: float  # [m/s]
    design_velocity: float  # [m/s]
    volumetric_flow: float  # [m3/s]
    required_area: float  # [m2]
    geometry: Geometry
    pressure_drop_min: float  # [Pa]
    pressure_drop_max: float  # [Pa]
    loading_fraction: float
    loading_status: LoadingStatus

    @property
    def vessel_diameter(self) -> Optional[float]:
        if isinstance(self.geometry, CircularGeometry):
            return self.geometry.diameter
        return None

    @property
    def rectangle_height(self) -> Optional[float]:
        if isinstance(self.geometry, RectangularGeometry):
            return self.geometry.height
        return None

    @property
    def volumetric_flow_m3h(self) -> float:
        return self.volumetric_flow * 3600.0

    @property
    def vessel_diameter_mm(self) -> Optional[float]:
        d = self.vessel_diameter
        return d * 1000.0 if d is not None else None


def k_factor(demister_type: DemisterType, orientation: Orientation) -> float:
    return K_FACTORS[(DemisterType(demister_type), Orientation(orientation))]


def classify_loading(design_margin: float) -> LoadingStatus:
    """Loading state is read directly from the design margin."""
    if design_margin > HIGH_LOADING_MARGIN:
        return LoadingStatus.HIGH
    if design_margin < LOW_LOADING_MARGIN:
        return LoadingStatus.LOW
    return LoadingStatus.OK


def validate_inputs(S: DemisterInputs) -> None:
    # comparisons are written so that NaN fails them
    if not (S.vapor_mass_flow > 0.0) or not isfinite(S.vapor_mass_flow):
        raise DemisterValidationError(
            "vapor_mass_flow",
            f"Vapor mass flow must be positive and finite, got {S.vapor_mass_flow} kg/s",
        )
    if not (S.vapor_density > 0.0):
        raise DemisterValidationError(
            "vapor_density",
            f"Vapor density must be positive, got {S.vapor_density} kg/m3",
        )
    if not (S.liquid_density > S.vapor_density) or not isfinite(S.liquid_density):
        raise DemisterValidationError(
            "liquid_density",
            f"Liquid density ({S.liquid_density} kg/m3) must be greater than "
            f"vapor density ({S.vapor_density} kg/m3)",
        )
    if not (0.0 < S.design_margin <= 1.0):
        raise DemisterValidationError(
            "design_margin",
            f"Design margin must be in (0, 1], got {S.design_margin}",
        )


def _geometry(S: DemisterInputs, area: float) -> Geometry:
    if VesselGeometry(S.geometry) is VesselGeometry.CIRCULAR:
        return CircularGeometry(diameter=sqrt(4.0 * area / pi))
    width = S.rectangle_width
    if width is not None and width > 0.0:
        return RectangularGeometry(width=width, height=area / width)
    return RectangularGeometry(width=None, height=None)


def size_demister(S: DemisterInputs) -> DemisterResult:
    validate_inputs(S)

    K = k_factor(S.demister_type, S.orientation)
    rhoV = S.vapor_density
    rhoL = S.liquid_density

    v_max = K * sqrt((rhoL - rhoV) / rhoV)
    v_design = v_max * S.design_margin
    if not (v_design > 0.0):
        raise DemisterValidationError(
            "design_margin",
            f"Design margin {S.design_margin} gives a design velocity of zero",
        )
    q_vap = S.vapor_mass_flow / rhoV
    area = q_vap / v_design

    dp_min, dp_max = PRESSURE_DROP_RANGES[DemisterType(S.demister_type)]

    return DemisterResult(
        k_factor=K,
        max_velocity=v_max,
        design_velocity=v_design,
        volumetric_flow=q_vap,
        required_area=area,
        geometry=_geometry(S, area),
        pressure_drop_min=dp_min,
        pressure_drop_max=dp_max,
        loading_fraction=S.design_margin,
        loading_status=classify_loading(S.design_margin),
    )


def sweep_margin(
    S: DemisterInputs,
    margin_start: float,
    margin_step: float,
    nsteps: int,
) -> List[DemisterResult]:
    out: List[DemisterResult] = []
    for i in range(nsteps):
        margin = round(margin_start - i * margin_step, 12)
        out.append(size_demister(replace(S, design_margin=margin)))
    return out


__all__ = [
    "DemisterType",
    "Orientation",
    "VesselGeometry",
    "LoadingStatus",
    "K_FACTORS",
    "PRESSURE_DROP_RANGES",
    "DemisterValidationError",
    "DemisterInputs",
    "CircularGeometry",
    "RectangularGeometry",
    "DemisterResult",
    "k_factor",
    "classify_loading",
    "validate_inputs",
    "size_demister",
    "sweep_margin",
]

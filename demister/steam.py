"""
Saturated water/steam properties used to feed the sizing core.

Saturation pressure and temperature follow the IAPWS-IF97 Region 4
equations. Densities are engineering approximations (polynomial fit for the
liquid, corrected ideal gas for the vapor) which are adequate for demister
sizing below roughly 200 degC.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt
from typing import Optional

CRITICAL_TEMPERATURE_C = 373.946
CRITICAL_PRESSURE_BAR = 220.64
TRIPLE_POINT_TEMPERATURE_C = 0.01
TRIPLE_POINT_PRESSURE_BAR = 0.00611657

R_WATER = 0.461526  # specific gas constant [kJ/(kg*K)]

# IAPWS-IF97 Region 4 coefficients n1..n10
_N = (
    0.11670521452767e4,
    -0.72421316703206e6,
    -0.17073846940092e2,
    0.12020824702470e5,
    -0.32325550322333e7,
    0.14915108613530e2,
    -0.48232657361591e4,
    0.40511340542057e6,
    -0.23855557567849,
    0.65017534844798e3,
)


@dataclass(frozen=True)
class SaturationState:
    temperature_c: float
    pressure_bar: float
    vapor_density: float  # [kg/m3]
    liquid_density: float  # [kg/m3]


def _check_temperature(temp_c: float, lower: float = TRIPLE_POINT_TEMPERATURE_C) -> None:
    if not (lower <= temp_c <= CRITICAL_TEMPERATURE_C):
        raise ValueError(
            f"Temperature {temp_c} degC is outside valid range "
            f"({lower}-{CRITICAL_TEMPERATURE_C} degC)"
        )


def saturation_pressure(temp_c: float) -> float:
    """Saturation pressure [bar] at `temp_c` [degC]."""
    _check_temperature(temp_c)
    T = temp_c + 273.15
    theta = T + _N[8] / (T - _N[9])
    A = theta ** 2 + _N[0] * theta + _N[1]
    B = _N[2] * theta ** 2 + _N[3] * theta + _N[4]
    C = _N[5] * theta ** 2 + _N[6] * theta + _N[7]
    p_mpa = (2.0 * C / (-B + sqrt(B ** 2 - 4.0 * A * C))) ** 4
    return p_mpa * 10.0


def saturation_temperature(pressure_bar: float) -> float:
    """Saturation temperature [degC] at `pressure_bar` [bar a]."""
    if not (TRIPLE_POINT_PRESSURE_BAR <= pressure_bar <= CRITICAL_PRESSURE_BAR):
        raise ValueError(
            f"Pressure {pressure_bar} bar is outside valid range "
            f"({TRIPLE_POINT_PRESSURE_BAR}-{CRITICAL_PRESSURE_BAR} bar)"
        )
    beta = (pressure_bar / 10.0) ** 0.25
    E = beta ** 2 + _N[2] * beta + _N[5]
    F = _N[0] * beta ** 2 + _N[3] * beta + _N[6]
    G = _N[1] * beta ** 2 + _N[4] * beta + _N[7]
    D = 2.0 * G / (-F - sqrt(F ** 2 - 4.0 * E * G))
    nd = _N[9] + D
    TK = (nd - sqrt(nd ** 2 - 4.0 * (_N[8] + _N[9] * D))) / 2.0
    return TK - 273.15


def specific_volume_liquid(temp_c: float) -> float:
    _check_temperature(temp_c, lower=0.0)
    T = temp_c
    return 0.001 + 1.3e-7 * T + 2.8e-9 * T ** 2 + 2.3e-11 * T ** 3


def specific_volume_vapor(temp_c: float) -> float:
    TK = temp_c + 273.15
    p_bar = saturation_pressure(temp_c)
    Tr = TK / (CRITICAL_TEMPERATURE_C + 273.15)
    Pr = p_bar / CRITICAL_PRESSURE_BAR
    Z = 1.0 - 0.2 * Pr / Tr
    return Z * R_WATER * TK / (p_bar / 10.0 * 1000.0)


def density_liquid(temp_c: float) -> float:
    return 1.0 / specific_volume_liquid(temp_c)


def density_vapor(temp_c: float) -> float:
    return 1.0 / specific_volume_vapor(temp_c)


def saturated_densities(
    pressure_bar: Optional[float] = None,
    temp_c: Optional[float] = None,
) -> SaturationState:
    """Resolve a saturation state from either its pressure or its temperature."""
    if (pressure_bar is None) == (temp_c is None):
        raise ValueError("Give exactly one of saturation pressure or temperature")
    if pressure_bar is not None:
        t_sat = saturation_temperature(pressure_bar)
        p_sat = pressure_bar
    else:
        t_sat = temp_c
        p_sat = saturation_pressure(temp_c)
    return SaturationState(
        temperature_c=t_sat,
        pressure_bar=p_sat,
        vapor_density=density_vapor(t_sat),
        liquid_density=density_liquid(t_sat),
    )


__all__ = [
    "SaturationState",
    "saturation_pressure",
    "saturation_temperature",
    "density_liquid",
    "density_vapor",
    "saturated_densities",
]

"""
Tabular and JSON views of sizing results.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .core import (
    CircularGeometry,
    DemisterInputs,
    DemisterResult,
    LoadingStatus,
    RectangularGeometry,
)

COLUMNS = [
    "margin",
    "K [m/s]",
    "V_max [m/s]",
    "V_design [m/s]",
    "Q_v [m3/s]",
    "Q_v [m3/h]",
    "A_req [m2]",
    "D_min [m]",
    "H_rect [m]",
    "dP_min [Pa]",
    "dP_max [Pa]",
    "loading",
]


def compute_warnings(df: pd.DataFrame) -> pd.Series:
    msgs: List[str] = []
    for _, row in df.iterrows():
        warnings: List[str] = []
        if row.get("loading") == LoadingStatus.HIGH.value:
            warnings.append("near flooding")
        elif row.get("loading") == LoadingStatus.LOW.value:
            warnings.append("oversized")
        if pd.isna(row.get("D_min [m]")) and pd.isna(row.get("H_rect [m]")):
            warnings.append("geometry unset")
        msgs.append("; ".join(warnings))
    return pd.Series(msgs, index=df.index, name="Warnings", dtype=object)


def build_dataframe(results: Sequence[DemisterResult]) -> pd.DataFrame:
    records: List[Dict[str, float | str]] = []
    for r in results:
        records.append(
            {
                "margin": r.loading_fraction,
                "K [m/s]": r.k_factor,
                "V_max [m/s]": r.max_velocity,
                "V_design [m/s]": r.design_velocity,
                "Q_v [m3/s]": r.volumetric_flow,
                "Q_v [m3/h]": r.volumetric_flow_m3h,
                "A_req [m2]": r.required_area,
                "D_min [m]": _or_nan(r.vessel_diameter),
                "H_rect [m]": _or_nan(r.rectangle_height),
                "dP_min [Pa]": r.pressure_drop_min,
                "dP_max [Pa]": r.pressure_drop_max,
                "loading": r.loading_status.value,
            }
        )
    df = pd.DataFrame.from_records(records, columns=COLUMNS)
    df["Warnings"] = compute_warnings(df)
    return df


def _or_nan(value: float | None) -> float:
    return np.nan if value is None else value


def geometry_payload(result: DemisterResult) -> Dict[str, float | str | None]:
    geom = result.geometry
    if isinstance(geom, CircularGeometry):
        return {"kind": geom.kind.value, "diameter": geom.diameter}
    if isinstance(geom, RectangularGeometry):
        return {"kind": geom.kind.value, "width": geom.width, "height": geom.height}
    raise TypeError(f"Unknown geometry {geom!r}")


def result_payload(inputs: DemisterInputs, result: DemisterResult) -> Dict[str, object]:
    """JSON-ready record of one sizing run."""
    inp = {k: getattr(v, "value", v) for k, v in asdict(inputs).items()}
    res = {
        "k_factor": result.k_factor,
        "max_velocity": result.max_velocity,
        "design_velocity": result.design_velocity,
        "volumetric_flow": result.volumetric_flow,
        "required_area": result.required_area,
        "geometry": geometry_payload(result),
        "pressure_drop_min": result.pressure_drop_min,
        "pressure_drop_max": result.pressure_drop_max,
        "loading_fraction": result.loading_fraction,
        "loading_status": result.loading_status.value,
    }
    return {"inputs": inp, "result": res}


__all__ = ["build_dataframe", "compute_warnings", "result_payload", "geometry_payload"]

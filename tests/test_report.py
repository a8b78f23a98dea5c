import json
import unittest

import numpy as np
import pandas as pd

from demister.core import DemisterInputs, VesselGeometry, size_demister, sweep_margin
from demister.report import build_dataframe, result_payload


def _inputs(**kw) -> DemisterInputs:
    base = dict(vapor_mass_flow=5.0, vapor_density=2.0, liquid_density=1000.0)
    base.update(kw)
    return DemisterInputs(**base)


class DataFrameTests(unittest.TestCase):
    def test_one_row_per_result(self) -> None:
        rows = sweep_margin(_inputs(design_margin=0.95), 0.95, 0.2, 4)
        df = build_dataframe(rows)
        self.assertEqual(len(df), 4)
        np.testing.assert_allclose(df["margin"].values, [0.95, 0.75, 0.55, 0.35])
        np.testing.assert_allclose(df["A_req [m2]"].values, [r.required_area for r in rows])
        self.assertEqual(list(df["loading"]), ["high", "ok", "ok", "low"])
        self.assertEqual(df["Warnings"].iloc[0], "near flooding")
        self.assertEqual(df["Warnings"].iloc[1], "")
        self.assertEqual(df["Warnings"].iloc[3], "oversized")

    def test_unset_geometry_is_nan_and_warned(self) -> None:
        df = build_dataframe([size_demister(_inputs(geometry=VesselGeometry.RECTANGULAR))])
        self.assertTrue(pd.isna(df.loc[0, "D_min [m]"]))
        self.assertTrue(pd.isna(df.loc[0, "H_rect [m]"]))
        self.assertIn("geometry unset", df.loc[0, "Warnings"])

    def test_empty(self) -> None:
        df = build_dataframe([])
        self.assertTrue(df.empty)
        self.assertIn("Warnings", df.columns)


class PayloadTests(unittest.TestCase):
    def test_circular_payload(self) -> None:
        S = _inputs()
        payload = result_payload(S, size_demister(S))
        text = json.dumps(payload)
        back = json.loads(text)
        self.assertEqual(back["inputs"]["demister_type"], "wire_mesh")
        self.assertEqual(back["result"]["geometry"]["kind"], "circular")
        self.assertEqual(back["result"]["loading_status"], "ok")
        self.assertEqual(back["result"]["loading_fraction"], S.design_margin)

    def test_rectangular_payload(self) -> None:
        S = _inputs(geometry=VesselGeometry.RECTANGULAR, rectangle_width=1.5)
        geom = result_payload(S, size_demister(S))["result"]["geometry"]
        self.assertEqual(geom["kind"], "rectangular")
        self.assertEqual(geom["width"], 1.5)
        self.assertNotIn("diameter", geom)


if __name__ == "__main__":
    unittest.main()

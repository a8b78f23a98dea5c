import json
import subprocess
import sys
from pathlib import Path

import pandas as pd
import pytest

from demister.cli import main
from demister.presets import read_preset


def test_cli_smoke() -> None:
    cmd = [
        sys.executable,
        "-m",
        "demister.cli",
        "--mass-flow",
        "5",
        "--rho-vapor",
        "2",
        "--rho-liquid",
        "1000",
    ]
    result = subprocess.run(cmd, check=True, capture_output=True, text=True)
    lines = result.stdout.splitlines()
    assert any(line.startswith("margin") for line in lines)
    assert any(line.rstrip().endswith("ok") for line in lines)


def test_cli_validation_failure_exit_code() -> None:
    cmd = [
        sys.executable,
        "-m",
        "demister.cli",
        "--mass-flow",
        "5",
        "--rho-vapor",
        "2",
        "--rho-liquid",
        "1.5",
    ]
    result = subprocess.run(cmd, capture_output=True, text=True)
    assert result.returncode == 2
    assert "greater than vapor density" in result.stderr


def test_cli_sweep_exports(tmp_path: Path, capsys) -> None:
    csv_path = tmp_path / "sweep.csv"
    json_path = tmp_path / "point.json"
    rc = main(
        [
            "--mass-flow", "5",
            "--rho-vapor", "2",
            "--rho-liquid", "1000",
            "--margin", "0.9",
            "--nsteps", "3",
            "--margin-step", "0.1",
            "--csv", str(csv_path),
            "--json", str(json_path),
        ]
    )
    assert rc == 0
    df = pd.read_csv(csv_path)
    assert len(df) == 3
    assert df["margin"].round(6).tolist() == [0.9, 0.8, 0.7]
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["result"]["loading_fraction"] == 0.9
    assert "DEMISTER: wire_mesh" in capsys.readouterr().out


def test_cli_preset_with_steam_tables(capsys) -> None:
    rc = main(["--preset", "flash_chamber"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "vane, vertical, rectangular" in out


def test_cli_overrides_preset_fluid(capsys) -> None:
    rc = main(["--preset", "med_last_effect", "--rho-vapor", "2", "--rho-liquid", "1000"])
    assert rc == 0
    assert "rho_v=2.0000" in capsys.readouterr().out


def test_cli_bad_numeric_preset_value_exits_through_argparse(tmp_path: Path, capsys) -> None:
    preset = tmp_path / "bad_flow.yml"
    preset.write_text("mass_flow: abc\nrho_vapor: 2\nrho_liquid: 1000\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["--preset", str(preset)])
    assert exc.value.code == 2
    assert "mass flow is required" in capsys.readouterr().err


def test_cli_bad_type_tag_exits_through_argparse(tmp_path: Path, capsys) -> None:
    preset = tmp_path / "bad_type.yml"
    preset.write_text(
        "mass_flow: 5\nrho_vapor: 2\nrho_liquid: 1000\ndemister_type: 'mesh'\n",
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as exc:
        main(["--preset", str(preset)])
    assert exc.value.code == 2
    assert "'mesh' is not a valid DemisterType" in capsys.readouterr().err


@pytest.mark.parametrize("nsteps", ["0", "-3"])
def test_cli_rejects_non_positive_nsteps(nsteps: str, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--mass-flow", "5", "--rho-vapor", "2", "--rho-liquid", "1000", "--nsteps", nsteps])
    assert exc.value.code == 2
    assert "--nsteps must be at least 1" in capsys.readouterr().err


def test_cli_saves_resolved_inputs_as_preset(tmp_path: Path) -> None:
    path = tmp_path / "saved.yml"
    rc = main(
        [
            "--preset", "flash_chamber",
            "--margin", "0.6",
            "--save-preset", str(path),
        ]
    )
    assert rc == 0
    saved = read_preset(path)
    assert saved["demister_type"] == "vane"
    assert saved["geometry"] == "rectangular"
    assert saved["p_sat"] == 0.3
    assert saved["width"] == 2.0
    assert saved["margin"] == 0.6
    assert main(["--preset", str(path)]) == 0

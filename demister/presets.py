"""
Input presets stored as flat ``key: value`` YAML files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

LOGGER = logging.getLogger("demister.presets")

PRESET_KEYS = (
    "mass_flow",
    "rho_vapor",
    "rho_liquid",
    "p_sat",
    "t_sat",
    "demister_type",
    "orientation",
    "margin",
    "geometry",
    "width",
)

TEXT_KEYS = ("demister_type", "orientation", "geometry")


def builtin_preset_dir() -> Path:
    return Path(__file__).resolve().parent / "presets"


def builtin_preset_names() -> List[str]:
    preset_dir = builtin_preset_dir()
    if not preset_dir.exists():
        return []
    return sorted(path.stem for path in preset_dir.glob("*.yml"))


def read_preset(path: Path) -> Dict[str, float | str]:
    data: Dict[str, float | str] = {}
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, _, value = stripped.partition(":")
            key = key.strip()
            value_str = value.strip()
            if " #" in value_str:
                value_str = value_str.split(" #", 1)[0].strip()
            if key not in PRESET_KEYS:
                LOGGER.warning("Ignoring unknown preset key '%s' in %s", key, path)
                continue
            if len(value_str) >= 2 and value_str[0] == value_str[-1] and value_str[0] in "'\"":
                value_str = value_str[1:-1]
            if key in TEXT_KEYS:
                data[key] = value_str
                continue
            try:
                data[key] = float(value_str)
            except ValueError:
                LOGGER.warning("Skipping unparsable preset value '%s' for key '%s'", value_str, key)
    return data


def write_preset(path: Path, data: Dict[str, float | str]) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for key, value in sorted(data.items()):
            if value is None:
                continue
            if isinstance(value, str):
                fh.write(f"{key}: '{value}'\n")
            else:
                fh.write(f"{key}: {value}\n")


def resolve_preset(name_or_path: str) -> Path:
    """Return the file for a built-in preset name or an explicit path."""
    path = Path(name_or_path)
    if path.suffix in (".yml", ".yaml") and path.exists():
        return path
    builtin = builtin_preset_dir() / f"{name_or_path}.yml"
    if builtin.exists():
        return builtin
    raise FileNotFoundError(
        f"No preset '{name_or_path}' (built-in presets: {', '.join(builtin_preset_names())})"
    )


def load_preset(name_or_path: str) -> Dict[str, float | str]:
    path = resolve_preset(name_or_path)
    LOGGER.info("Loading preset %s", path)
    return read_preset(path)

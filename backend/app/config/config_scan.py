# File: backend/app/config/config_scan.py
# Version: v0.1.0
"""
Scan parameters configuration loader/saver.

- Reads defaults from: backend/app/config/scan_param_default.json
- Reads/writes current from: backend/app/config/scan_param.json
- Validates payloads with ScanParameters (Pydantic) from core/crispr/parameters.py

Usage:
    from backend.app.config.config_scan import load_current_params, save_current_params

Thread-safety:
- Uses atomic writes (tmp + replace) to avoid partial/dirty writes.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Tuple

from backend.app.core.crispr.parameters import ScanParameters

logger = logging.getLogger(__name__)

# Resolve config directory relative to this file
CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_FILE = CONFIG_DIR / "scan_param_default.json"
CURRENT_FILE = CONFIG_DIR / "scan_param.json"


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _atomic_write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    os.replace(tmp, path)


def load_params_file(path: Path) -> ScanParameters:
    """Load and validate an explicitly requested parameters JSON (used by the CLI)."""
    if not path.is_file():
        raise FileNotFoundError(f"Parameters file not found: {path}")
    return ScanParameters.model_validate(_read_json(path))


def load_default_params() -> ScanParameters:
    return ScanParameters.model_validate(_read_json(DEFAULT_FILE) or {})


def load_current_params(fallback_to_default: bool = True) -> ScanParameters:
    """
    Load current (editable) scan parameters.
    If the file is missing and fallback is True, return defaults.
    """
    payload = _read_json(CURRENT_FILE)
    if not payload and fallback_to_default:
        return load_default_params()
    return ScanParameters.model_validate(payload or {})


def save_current_params(params: ScanParameters) -> None:
    _atomic_write_json(CURRENT_FILE, params.model_dump())
    logger.info("Saved scan parameters to %s", CURRENT_FILE)


def ensure_current_exists() -> Tuple[bool, ScanParameters]:
    """
    Ensure scan_param.json exists; if not, initialize from defaults.
    Returns (created, params).
    """
    if CURRENT_FILE.exists():
        return False, load_current_params()
    defaults = load_default_params()
    save_current_params(defaults)
    return True, defaults

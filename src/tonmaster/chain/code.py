"""
Code Loader - Loads contract code cells from compiled build output.

Single source of truth: build/<Name>.compiled.json (Blueprint compilation
artifacts, `{"hex": "<boc>"}`). Python loads code at runtime from these
JSON files.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from tonsdk.boc import Cell

from ..utils import cell_from_hex


def _find_build_dir() -> Path:
    """
    Locate the build/ directory.

    CONTRACTS_BUILD_DIR wins; otherwise searches from the current working
    directory upward.
    """
    override = os.environ.get("CONTRACTS_BUILD_DIR")
    if override:
        return Path(override)

    current = Path.cwd().resolve()
    for parent in [current, *current.parents]:
        candidate = parent / "build"
        if candidate.is_dir():
            return candidate
    raise FileNotFoundError(
        "Cannot find build/. Compile the contracts or set CONTRACTS_BUILD_DIR."
    )


@lru_cache(maxsize=16)
def _load_cached(path: Path) -> Cell:
    with path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    code_hex = artifact.get("hex", "")
    if not code_hex:
        raise ValueError(f"No code in artifact {path}")

    return cell_from_hex(code_hex)


def load_code(contract_name: str, build_dir: Optional[Path] = None) -> Cell:
    """
    Load the code cell for a contract.

    Args:
        contract_name: Contract name (e.g., "Master", "SbtItem")
        build_dir: Directory with *.compiled.json files (default: auto-detect)

    Returns:
        Code cell

    Raises:
        FileNotFoundError: If the artifact is missing
        ValueError: If the artifact has no code
    """
    out_dir = build_dir or _find_build_dir()
    path = (out_dir / f"{contract_name}.compiled.json").resolve()

    if not path.exists():
        raise FileNotFoundError(
            f"Compiled code not found: {path}. Compile the contracts first."
        )

    return _load_cached(path)


def master_code(build_dir: Optional[Path] = None) -> Cell:
    """Load Master code."""
    return load_code("Master", build_dir)

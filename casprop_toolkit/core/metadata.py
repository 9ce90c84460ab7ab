"""Run metadata helpers.

A lookup run can emit a small machine-readable JSON sidecar capturing provenance (input hash, parameters, versions,
success tally) so that an annotated table can be traced back to the inventory and settings that produced it.

Convention:
- for an output table path like `compounds_results.csv`, the sidecar is `compounds_results.metadata.json`.
"""

from __future__ import annotations

import hashlib
import json
import os
import sys
from datetime import datetime
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any, Dict, Optional

SIDECAR_SUFFIX = ".metadata.json"
# Inventories above this size are recorded without a digest.
DIGEST_SIZE_LIMIT = 200 * 1024 * 1024


def get_distribution_version(name: str) -> str:
    """Return installed distribution version if available, else 'unknown'."""

    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def sha256_file(path: Path, *, max_bytes: int = DIGEST_SIZE_LIMIT) -> Optional[str]:
    try:
        size = path.stat().st_size
    except OSError:
        return None
    if size > max_bytes:
        return None

    digest = hashlib.sha256()
    try:
        with path.open("rb") as f:
            while block := f.read(1 << 20):
                digest.update(block)
    except OSError:
        return None
    return digest.hexdigest()


def metadata_sidecar_path(output_table_path: str | Path) -> Path:
    """`annotated.csv` -> `annotated.metadata.json`, in the same directory."""

    return Path(output_table_path).with_suffix(SIDECAR_SUFFIX)


def write_run_metadata(
    *,
    tool: str,
    output_table_path: str | Path,
    input_path: Optional[str | Path] = None,
    cas_columns: Optional[list[str]] = None,
    parameters: Optional[Dict[str, Any]] = None,
    summary: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write a run metadata JSON sidecar next to the output table.

    Call this after the output table has been written so its size is recorded.
    """

    out_p = Path(output_table_path)
    in_p = Path(input_path) if input_path else None

    payload: Dict[str, Any] = {
        "tool": str(tool),
        "created_at": datetime.now().isoformat(timespec="seconds"),
        "cwd": os.getcwd(),
        "argv": list(sys.argv),
        "versions": {
            "casprop_toolkit": get_distribution_version("casprop-toolkit"),
            "python": sys.version.split()[0],
            "pandas": get_distribution_version("pandas"),
            "aiohttp": get_distribution_version("aiohttp"),
        },
        "identifier_basis": {
            "cas_columns": list(cas_columns or []),
            "policy": "first non-empty of cas_number, CAS, cas, CAS Number",
        },
        "input": None,
        "output": {
            "path": str(out_p.resolve()),
            "name": out_p.name,
            "size_bytes": int(out_p.stat().st_size) if out_p.exists() else None,
        },
        "parameters": parameters or {},
        "summary": summary or {},
    }

    if in_p is not None:
        payload["input"] = {
            "path": str(in_p.resolve()),
            "name": in_p.name,
            "sha256": sha256_file(in_p),
            "size_bytes": int(in_p.stat().st_size) if in_p.exists() else None,
        }

    sidecar = metadata_sidecar_path(out_p)
    sidecar.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return sidecar

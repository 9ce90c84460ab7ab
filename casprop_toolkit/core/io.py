"""Table IO helpers for CAS inventories and lookup results.

Input tables are read with every cell as a string: CAS numbers look numeric enough (`50-00-0`) and inventories
contain tokens like `NA` that pandas would otherwise coerce to missing values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd

from casprop_toolkit.core.columns import extract_cas_number
from casprop_toolkit.models import OUTPUT_COLUMNS, OutputRow


def read_table(path: str | Path, **kwargs: Any) -> pd.DataFrame:
    """Read a CSV with string cells, no NA coercion and whitespace-trimmed header names.

    Raises FileNotFoundError for a missing file, and pandas' EmptyDataError/ParserError for content that is not CSV.
    """

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {p}")

    kwargs.setdefault("dtype", str)
    kwargs.setdefault("keep_default_na", False)
    kwargs.setdefault("skip_blank_lines", True)
    kwargs.setdefault("encoding", "utf-8")
    # A trailing delimiter on data rows must not turn the first column into the index.
    kwargs.setdefault("index_col", False)
    df = pd.read_csv(p, **kwargs)
    df.columns = [str(c).strip() for c in df.columns]
    return df


def write_table(df: pd.DataFrame, path: str | Path, **kwargs: Any) -> None:
    """Write a CSV, creating parent directories and overwriting any existing file."""

    Path(path).parent.mkdir(parents=True, exist_ok=True)
    kwargs.setdefault("encoding", "utf-8")
    df.to_csv(path, index=False, **kwargs)


def read_cas_numbers(path: str | Path) -> List[str]:
    """Return the CAS numbers of a CSV in row order.

    Rows without a recognized CAS column value are skipped.
    """

    df = read_table(path).fillna("")
    cas_numbers: List[str] = []
    for record in df.to_dict(orient="records"):
        cas = extract_cas_number(record)
        if cas:
            cas_numbers.append(cas)
    return cas_numbers


def write_results(rows: Sequence[OutputRow], path: str | Path) -> None:
    df = pd.DataFrame([r.to_dict() for r in rows], columns=list(OUTPUT_COLUMNS))
    write_table(df, path)


def derive_output_path(input_path: str | Path) -> Path:
    """`compounds.csv` -> `compounds_results.csv`; names without a .csv suffix get `_results.csv` appended."""

    p = Path(input_path)
    if p.suffix.lower() == ".csv":
        return p.with_name(f"{p.name[: -len(p.suffix)]}_results.csv")
    return p.with_name(f"{p.name}_results.csv")

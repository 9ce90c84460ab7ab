"""Column detection helpers.

Upstream inventories name the CAS registry column in several ways, so we try the common spellings in a fixed order.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union


CAS_CANDIDATES: Sequence[str] = (
    "cas_number",
    "CAS",
    "cas",
    "CAS Number",
)


def _as_columns(df_or_columns: Union[Sequence[str], object]) -> list[str]:
    # Accept a DataFrame (anything with .columns) or a plain list of names.
    if hasattr(df_or_columns, "columns"):
        cols = getattr(df_or_columns, "columns")
    else:
        cols = df_or_columns

    try:
        return list(cols)  # type: ignore[arg-type]
    except TypeError:
        return []


def detect_cas_columns(
    df_or_columns: Union[Sequence[str], object],
    priority: Sequence[str] = CAS_CANDIDATES,
) -> list[str]:
    """Return the recognized CAS columns present, in priority order.

    Matching is case-sensitive: `Cas` is not a CAS column.
    """

    cols = _as_columns(df_or_columns)
    return [c for c in priority if c in cols]


def extract_cas_number(
    row: Mapping[str, Any],
    priority: Sequence[str] = CAS_CANDIDATES,
) -> Optional[str]:
    """Pick the CAS number for a single record.

    The first candidate column whose trimmed value is non-empty wins. Returns None when no
    recognized column carries a value.
    """

    for c in priority:
        value = row.get(c)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None

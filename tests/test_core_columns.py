from __future__ import annotations

import pandas as pd

from casprop_toolkit.core.columns import detect_cas_columns, extract_cas_number


def test_detect_cas_columns_priority_order() -> None:
    df = pd.DataFrame({"CAS Number": ["50-00-0"], "cas": ["64-17-5"], "Name": ["x"]})
    assert detect_cas_columns(df) == ["cas", "CAS Number"]


def test_detect_cas_columns_is_case_sensitive() -> None:
    assert detect_cas_columns(["Cas", "CAS_NUMBER", "cas number"]) == []


def test_extract_prefers_cas_number_column() -> None:
    row = {"CAS": "64-17-5", "cas_number": "50-00-0"}
    assert extract_cas_number(row) == "50-00-0"


def test_extract_falls_through_empty_values() -> None:
    row = {"cas_number": "   ", "CAS": "", "cas": None, "CAS Number": " 7732-18-5 "}
    assert extract_cas_number(row) == "7732-18-5"


def test_extract_returns_none_without_value() -> None:
    assert extract_cas_number({"cas_number": "", "CAS": "  "}) is None
    assert extract_cas_number({"Name": "water"}) is None

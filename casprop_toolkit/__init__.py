"""CASProp Toolkit (importable package).

Annotates CAS registry numbers with PubChem compound data (name, SMILES, formula, structure image). The
`tools/cas_lookup.py` script is the command-line front end; the package holds the column detection, CSV IO,
PubChem client and the concurrent lookup pipeline it is built from.
"""

from __future__ import annotations

# ruff: noqa: F401

from .config import LookupConfig
from .models import CompoundRecord, LookupFailure, LookupResult, LookupSuccess, OutputRow

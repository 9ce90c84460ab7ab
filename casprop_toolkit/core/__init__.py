"""Shared utilities for the CAS lookup tools (column detection, CSV IO, printing, run metadata)."""

from __future__ import annotations

from .columns import CAS_CANDIDATES, detect_cas_columns, extract_cas_number
from .io import derive_output_path, read_cas_numbers, read_table, write_results, write_table
from .logging_utils import setup_logging
from .metadata import metadata_sidecar_path, sha256_file, write_run_metadata
from .printing import print_banner, print_progress

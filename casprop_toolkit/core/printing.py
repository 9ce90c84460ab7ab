"""Printing helpers for CLI tools."""

from __future__ import annotations

import sys
from typing import TextIO


def print_banner(title: str, width: int = 60, char: str = "=", file: TextIO | None = None) -> None:
    out = file or sys.stdout
    print(char * width, file=out)
    print(title, file=out)
    print(char * width, file=out)


def print_progress(index: int, total: int, cas_number: str, file: TextIO | None = None) -> None:
    print(f"Processing {index + 1}/{total}: {cas_number}", file=file or sys.stdout)

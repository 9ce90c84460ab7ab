#!/usr/bin/env python3
"""casprop-lookup: annotate a CSV of CAS numbers with PubChem compound data.

The input CSV needs a header row and a CAS column named one of:
  - cas_number
  - CAS
  - cas
  - "CAS Number"

The output CSV has one row per CAS number, in input order, with the columns
cas_number, chemical_name, smiles_code, molecular_formula, structure_image_url, status, error.
structure_image_url holds a Google Sheets =IMAGE(...) formula for the PubChem 2D depiction.

Example:
  python tools/cas_lookup.py compounds.csv
  python tools/cas_lookup.py compounds.csv results.csv --concurrency 3 --metadata

Without an explicit output path, compounds.csv is written to compounds_results.csv.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

# Allow running directly without installing the package.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from casprop_toolkit.config import LookupConfig
from casprop_toolkit.core import (
    derive_output_path,
    detect_cas_columns,
    print_banner,
    print_progress,
    read_cas_numbers,
    read_table,
    setup_logging,
    write_run_metadata,
)
from casprop_toolkit.pipeline import RunSummary, run_lookup

USAGE = """Usage: casprop-lookup <input.csv> [output.csv]

Input CSV should have a column named one of:
  - cas_number
  - CAS
  - cas
  - "CAS Number"

Example:
  casprop-lookup compounds.csv results.csv"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up CAS numbers in PubChem and write an annotated CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", nargs="?", help="Input CSV with a CAS column")
    parser.add_argument(
        "output",
        nargs="?",
        help="Output CSV (default: <input>_results.csv next to the input)",
    )
    parser.add_argument(
        "-c", "--concurrency",
        type=int,
        default=None,
        help="Parallel lookups (default: 5, env CASPROP_CONCURRENCY)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Attempts per HTTP request when PubChem throttles (default: 3)",
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=None,
        help="Base backoff in seconds; attempt n waits n * delay (default: 1.0)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds, 0 disables (default: 60)",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="PUG REST base URL (default: https://pubchem.ncbi.nlm.nih.gov/rest/pug)",
    )
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Also write <output>.metadata.json with provenance and the success tally",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log retries and per-lookup errors",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> LookupConfig:
    cfg = LookupConfig.from_env().with_overrides(
        base_url=args.base_url.rstrip("/") if args.base_url else None,
        concurrency=args.concurrency,
        max_attempts=args.max_attempts,
        retry_delay=args.retry_delay,
        timeout=args.timeout if args.timeout else None,
    )
    if args.timeout == 0:
        cfg = replace(cfg, timeout=None)
    return cfg


def print_summary(summary: RunSummary) -> None:
    print(f"Results written to: {summary.output_path}")
    print(f"\nCompleted: {summary.succeeded}/{summary.total} compounds processed successfully")
    print(f"Time elapsed: {summary.elapsed_seconds:.2f}s")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input:
        print(USAGE)
        return 1

    setup_logging(logging.DEBUG if args.verbose else None)

    input_path = Path(args.input).resolve()
    output_path = Path(args.output).resolve() if args.output else derive_output_path(input_path)

    if not input_path.exists():
        print(f"Input file not found: {input_path}", file=sys.stderr)
        return 1

    try:
        cfg = resolve_config(args)

        print_banner("CAS -> PubChem compound lookup")
        print(f"Reading CAS numbers from: {input_path}")
        cas_columns = detect_cas_columns(read_table(input_path, nrows=0))
        cas_numbers = read_cas_numbers(input_path)
        print(f"Found {len(cas_numbers)} CAS numbers to process")
        print(f"Processing with {cfg.concurrency} parallel requests...\n")

        summary = asyncio.run(
            run_lookup(
                input_path,
                output_path,
                cfg,
                cas_numbers=cas_numbers,
                on_progress=print_progress,
            )
        )
        print_summary(summary)

        if args.metadata:
            sidecar = write_run_metadata(
                tool="casprop-lookup",
                output_table_path=output_path,
                input_path=input_path,
                cas_columns=cas_columns,
                parameters=cfg.as_parameters(),
                summary=summary.as_dict(),
            )
            print(f"Run metadata written to: {sidecar}")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

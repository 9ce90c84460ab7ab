"""Concurrent CAS lookup pipeline.

Reader -> lookups -> writer. Lookups run on a fixed pool of asyncio workers that claim indices from one shared
cursor, so at most ``concurrency`` lookups are in flight and every result lands at its input position regardless of
completion order.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from casprop_toolkit.config import LookupConfig
from casprop_toolkit.core.io import read_cas_numbers, write_results
from casprop_toolkit.models import STATUS_SUCCESS, LookupResult, OutputRow
from casprop_toolkit.pubchem.client import PubChemClient

T = TypeVar("T")
R = TypeVar("R")

ProgressCallback = Callable[[int, int, str], None]


async def process_in_parallel(
    items: Sequence[T],
    processor: Callable[[T, int], Awaitable[R]],
    concurrency: int,
) -> List[R]:
    """Run ``processor(item, index)`` over ``items`` with at most ``concurrency`` in flight.

    Returns results in input order.
    """

    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")

    results: List[Optional[R]] = [None] * len(items)
    # next() on a shared counter never yields control, so claims cannot collide.
    cursor = itertools.count()

    async def worker() -> None:
        while True:
            index = next(cursor)
            if index >= len(items):
                return
            results[index] = await processor(items[index], index)

    n_workers = min(concurrency, len(items))
    await asyncio.gather(*(worker() for _ in range(n_workers)))
    return results  # type: ignore[return-value]


async def lookup_cas_numbers(
    cas_numbers: Sequence[str],
    client: PubChemClient,
    concurrency: int,
    on_progress: Optional[ProgressCallback] = None,
) -> List[LookupResult]:
    total = len(cas_numbers)

    async def process(cas_number: str, index: int) -> LookupResult:
        if on_progress is not None:
            on_progress(index, total, cas_number)
        return await client.lookup(cas_number)

    return await process_in_parallel(cas_numbers, process, concurrency)


def build_output_rows(cas_numbers: Sequence[str], results: Sequence[LookupResult]) -> List[OutputRow]:
    if len(cas_numbers) != len(results):
        raise ValueError(f"Got {len(results)} results for {len(cas_numbers)} CAS numbers")
    return [OutputRow.from_result(cas, res) for cas, res in zip(cas_numbers, results)]


@dataclass(frozen=True)
class RunSummary:
    total: int
    succeeded: int
    output_path: Path
    elapsed_seconds: float

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }


async def enrich_cas_numbers(
    cas_numbers: Sequence[str],
    config: LookupConfig,
    *,
    client: Optional[PubChemClient] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> List[OutputRow]:
    """Look up every CAS number and return output rows in input order."""

    if client is not None:
        results = await lookup_cas_numbers(cas_numbers, client, config.concurrency, on_progress)
    else:
        async with PubChemClient(config) as owned:
            results = await lookup_cas_numbers(cas_numbers, owned, config.concurrency, on_progress)
    return build_output_rows(cas_numbers, results)


async def run_lookup(
    input_path: str | Path,
    output_path: str | Path,
    config: Optional[LookupConfig] = None,
    *,
    client: Optional[PubChemClient] = None,
    on_progress: Optional[ProgressCallback] = None,
    cas_numbers: Optional[Sequence[str]] = None,
) -> RunSummary:
    """Read ``input_path``, enrich it and write ``output_path``.

    Local errors (missing input, bad CSV, unwritable output) propagate to the caller.
    """

    cfg = config or LookupConfig()
    if cas_numbers is None:
        cas_numbers = read_cas_numbers(input_path)

    start = time.perf_counter()
    rows = await enrich_cas_numbers(cas_numbers, cfg, client=client, on_progress=on_progress)
    write_results(rows, output_path)
    elapsed = time.perf_counter() - start

    succeeded = sum(1 for r in rows if r.status == STATUS_SUCCESS)
    return RunSummary(
        total=len(rows),
        succeeded=succeeded,
        output_path=Path(output_path),
        elapsed_seconds=elapsed,
    )

"""Lookup configuration.

Defaults suit PubChem's public PUG REST service. Each field can be overridden from the environment
(`CASPROP_*`) and again from the command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

PUBCHEM_BASE_URL = "https://pubchem.ncbi.nlm.nih.gov/rest/pug"
DEFAULT_CONCURRENCY = 5


@dataclass(frozen=True)
class LookupConfig:
    base_url: str = PUBCHEM_BASE_URL
    concurrency: int = DEFAULT_CONCURRENCY
    max_attempts: int = 3
    retry_delay: float = 1.0
    # Total seconds per HTTP request; None disables the transport timeout.
    timeout: Optional[float] = 60.0

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be >= 0")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LookupConfig":
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}

        if env.get("CASPROP_BASE_URL"):
            kwargs["base_url"] = env["CASPROP_BASE_URL"].rstrip("/")
        if env.get("CASPROP_CONCURRENCY"):
            kwargs["concurrency"] = int(env["CASPROP_CONCURRENCY"])
        if env.get("CASPROP_MAX_ATTEMPTS"):
            kwargs["max_attempts"] = int(env["CASPROP_MAX_ATTEMPTS"])
        if env.get("CASPROP_RETRY_DELAY"):
            kwargs["retry_delay"] = float(env["CASPROP_RETRY_DELAY"])
        if env.get("CASPROP_TIMEOUT"):
            raw = env["CASPROP_TIMEOUT"].strip().lower()
            kwargs["timeout"] = None if raw in ("0", "none", "off") else float(raw)

        return cls(**kwargs)

    def with_overrides(self, **overrides: Any) -> "LookupConfig":
        """Return a copy with every non-None override applied."""

        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def as_parameters(self) -> dict[str, Any]:
        return {
            "base_url": self.base_url,
            "concurrency": self.concurrency,
            "max_attempts": self.max_attempts,
            "retry_delay": self.retry_delay,
            "timeout": self.timeout,
        }

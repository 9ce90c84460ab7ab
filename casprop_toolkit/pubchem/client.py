"""PubChem PUG REST client for CAS number lookups.

Resolving one CAS number takes two requests:

1. ``compound/name/{cas}/cids/JSON`` maps the registry number to a PubChem CID.
2. ``compound/cid/{cid}/property/.../JSON`` fetches the name, formula and SMILES.

Every failure while resolving a single CAS number is converted into a ``LookupFailure`` so that one bad
identifier never aborts a batch.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Dict, Optional, Type
from urllib.parse import quote

import aiohttp

from casprop_toolkit.config import LookupConfig
from casprop_toolkit.models import (
    CompoundRecord,
    LookupFailure,
    LookupResult,
    LookupSuccess,
    structure_image_formula,
)
from casprop_toolkit.pubchem.retry import fetch_json_with_retry

logger = logging.getLogger(__name__)

PROPERTY_FIELDS = ("IUPACName", "Title", "MolecularFormula", "CanonicalSMILES")

NO_COMPOUND_ERROR = "No compound found for this CAS number"
NO_PROPERTIES_ERROR = "Could not retrieve compound properties"


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def extract_cid(payload: Any) -> Optional[int]:
    """Return the first CID of a ``cids`` response, or None."""

    if not isinstance(payload, dict):
        return None
    identifier_list = payload.get("IdentifierList") or {}
    if not isinstance(identifier_list, dict):
        return None
    cid = _first(identifier_list.get("CID"))
    if isinstance(cid, bool) or not isinstance(cid, int) or cid <= 0:
        return None
    return cid


def extract_properties(payload: Any) -> Optional[Dict[str, Any]]:
    """Return the first property record of a ``property`` response, or None."""

    if not isinstance(payload, dict):
        return None
    table = payload.get("PropertyTable") or {}
    if not isinstance(table, dict):
        return None
    props = _first(table.get("Properties"))
    return props if isinstance(props, dict) else None


def build_record(cid: int, props: Dict[str, Any]) -> CompoundRecord:
    # PubChem now answers CanonicalSMILES requests with ConnectivitySMILES.
    return CompoundRecord(
        cid=cid,
        chemical_name=str(props.get("Title") or props.get("IUPACName") or ""),
        smiles_code=str(props.get("CanonicalSMILES") or props.get("ConnectivitySMILES") or ""),
        molecular_formula=str(props.get("MolecularFormula") or ""),
        structure_image_url=structure_image_formula(cid),
    )


def error_message(exc: BaseException) -> str:
    # asyncio.TimeoutError and friends stringify to "".
    return str(exc) or exc.__class__.__name__


class PubChemClient:
    """Async PubChem client sharing one aiohttp session across lookups.

    Use as an async context manager. A session passed in by the caller is used as-is and never closed here.
    """

    def __init__(
        self,
        config: Optional[LookupConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or LookupConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "PubChemClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self.session

    async def _get_json(self, url: str) -> Any:
        return await fetch_json_with_retry(
            self._get_session(),
            url,
            max_attempts=self.config.max_attempts,
            retry_delay=self.config.retry_delay,
        )

    def cids_url(self, cas_number: str) -> str:
        return f"{self.base_url}/compound/name/{quote(cas_number, safe='')}/cids/JSON"

    def properties_url(self, cid: int) -> str:
        return f"{self.base_url}/compound/cid/{cid}/property/{','.join(PROPERTY_FIELDS)}/JSON"

    async def get_cid(self, cas_number: str) -> Optional[int]:
        return extract_cid(await self._get_json(self.cids_url(cas_number)))

    async def get_properties(self, cid: int) -> Optional[Dict[str, Any]]:
        return extract_properties(await self._get_json(self.properties_url(cid)))

    async def lookup(self, cas_number: str) -> LookupResult:
        """Resolve one CAS number. Never raises for per-identifier problems."""

        try:
            cid = await self.get_cid(cas_number)
            if cid is None:
                return LookupFailure(NO_COMPOUND_ERROR)

            props = await self.get_properties(cid)
            if props is None:
                return LookupFailure(NO_PROPERTIES_ERROR)

            return LookupSuccess(build_record(cid, props))
        except Exception as e:
            logger.debug(f"Lookup failed for {cas_number}: {e!r}")
            return LookupFailure(error_message(e))

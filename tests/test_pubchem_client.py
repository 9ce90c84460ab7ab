"""Tests for PubChemClient.lookup against fake aiohttp sessions."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from casprop_toolkit.config import LookupConfig
from casprop_toolkit.models import LookupFailure, LookupSuccess
from casprop_toolkit.pubchem.client import (
    NO_COMPOUND_ERROR,
    NO_PROPERTIES_ERROR,
    PubChemClient,
    build_record,
    extract_cid,
    extract_properties,
)
from tests.fakes import FORMALDEHYDE_PROPS, cids_payload, make_response, make_session, properties_payload

BASE = "https://pubchem.example/rest/pug"


def client_for(session) -> PubChemClient:
    return PubChemClient(LookupConfig(base_url=BASE), session=session)


@pytest.mark.asyncio
async def test_lookup_success_builds_record() -> None:
    session = make_session(
        make_response(200, cids_payload(712, 999)),
        make_response(200, properties_payload(**FORMALDEHYDE_PROPS)),
    )

    result = await client_for(session).lookup("50-00-0")

    assert isinstance(result, LookupSuccess)
    assert result.status == "success"
    rec = result.record
    assert rec.cid == 712
    assert rec.chemical_name == "Formaldehyde"
    assert rec.smiles_code == "C=O"
    assert rec.molecular_formula == "CH2O"
    assert rec.structure_image_url == '=IMAGE("https://pubchem.ncbi.nlm.nih.gov/rest/pug/compound/cid/712/PNG")'

    urls = [c.args[0] for c in session.get.call_args_list]
    assert urls[0] == f"{BASE}/compound/name/50-00-0/cids/JSON"
    assert urls[1] == f"{BASE}/compound/cid/712/property/IUPACName,Title,MolecularFormula,CanonicalSMILES/JSON"


@pytest.mark.asyncio
async def test_cas_number_is_url_quoted() -> None:
    session = make_session(make_response(200, cids_payload()))
    await client_for(session).lookup("50 00/0")
    assert session.get.call_args.args[0] == f"{BASE}/compound/name/50%2000%2F0/cids/JSON"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [cids_payload(), {}, {"IdentifierList": {}}, {"Fault": {"Code": "x"}}, []])
async def test_no_cid_is_failure(payload) -> None:
    session = make_session(make_response(200, payload))

    result = await client_for(session).lookup("0000-00-0")

    assert result == LookupFailure(NO_COMPOUND_ERROR)
    assert session.get.call_count == 1


@pytest.mark.asyncio
async def test_missing_properties_is_failure() -> None:
    session = make_session(
        make_response(200, cids_payload(712)),
        make_response(200, {"PropertyTable": {"Properties": []}}),
    )

    result = await client_for(session).lookup("50-00-0")

    assert result == LookupFailure(NO_PROPERTIES_ERROR)


@pytest.mark.asyncio
async def test_not_found_becomes_failure(no_sleep) -> None:
    session = make_session(make_response(404, reason="Not Found"))

    result = await client_for(session).lookup("1234-56-7")

    assert result == LookupFailure("Compound not found in PubChem")
    no_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_throttled_properties_request_is_retried(no_sleep) -> None:
    session = make_session(
        make_response(200, cids_payload(712)),
        make_response(429),
        make_response(429),
        make_response(200, properties_payload(**FORMALDEHYDE_PROPS)),
    )

    result = await client_for(session).lookup("50-00-0")

    assert isinstance(result, LookupSuccess)
    assert no_sleep.await_count == 2


@pytest.mark.asyncio
async def test_exhausted_retries_becomes_failure(no_sleep) -> None:
    session = make_session(*(make_response(503) for _ in range(3)))

    result = await client_for(session).lookup("50-00-0")

    assert result == LookupFailure("Max retries exceeded")


@pytest.mark.asyncio
async def test_other_http_status_message() -> None:
    session = make_session(make_response(400, reason="Bad Request"))

    result = await client_for(session).lookup("bad")

    assert result == LookupFailure("HTTP 400: Bad Request")


@pytest.mark.asyncio
async def test_network_error_becomes_failure() -> None:
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(side_effect=aiohttp.ClientConnectionError("Connection reset"))
    cm.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.get = MagicMock(return_value=cm)

    result = await client_for(session).lookup("50-00-0")

    assert result == LookupFailure("Connection reset")


@pytest.mark.asyncio
async def test_timeout_without_message_uses_exception_name() -> None:
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(side_effect=asyncio.TimeoutError())
    cm.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.get = MagicMock(return_value=cm)

    result = await client_for(session).lookup("50-00-0")

    assert isinstance(result, LookupFailure)
    assert result.error == "TimeoutError"


@pytest.mark.asyncio
async def test_malformed_json_becomes_failure() -> None:
    response = make_response(200)
    response.json = AsyncMock(side_effect=ValueError("Expecting value: line 1 column 1 (char 0)"))
    session = make_session(response)

    result = await client_for(session).lookup("50-00-0")

    assert result == LookupFailure("Expecting value: line 1 column 1 (char 0)")


@pytest.mark.asyncio
async def test_injected_session_is_not_closed() -> None:
    session = make_session()
    async with client_for(session):
        pass
    session.close.assert_not_awaited()


def test_extract_cid_rejects_non_integers() -> None:
    assert extract_cid(cids_payload(712)) == 712
    assert extract_cid({"IdentifierList": {"CID": ["712"]}}) is None
    assert extract_cid({"IdentifierList": {"CID": [0]}}) is None
    assert extract_cid({"IdentifierList": {"CID": [True]}}) is None


def test_extract_properties_shapes() -> None:
    assert extract_properties(properties_payload(Title="x")) == {"Title": "x"}
    assert extract_properties({"PropertyTable": None}) is None
    assert extract_properties("nonsense") is None


def test_build_record_fallbacks() -> None:
    rec = build_record(5, {"IUPACName": "oxidane", "CanonicalSMILES": "O"})
    assert rec.chemical_name == "oxidane"
    assert rec.smiles_code == "O"
    assert rec.molecular_formula == ""

    bare = build_record(6, {})
    assert (bare.chemical_name, bare.smiles_code, bare.molecular_formula) == ("", "", "")
    assert "cid/6/PNG" in bare.structure_image_url

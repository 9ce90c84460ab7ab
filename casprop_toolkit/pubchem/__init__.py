"""PubChem PUG REST access: client, retry policy and error types."""

from __future__ import annotations

from .client import NO_COMPOUND_ERROR, NO_PROPERTIES_ERROR, PubChemClient
from .errors import CompoundNotFoundError, MaxRetriesExceededError, PubChemError, PubChemHTTPError
from .retry import classify_status, fetch_json_with_retry

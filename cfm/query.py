# Search entry points: one-shot search() and the DoctorQuery builder
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from cfm.base import SearchCriteria, SearchResult
from cfm.client import CFMClient
from cfm.errors import CRMQueryError, UpstreamError
from cfm.parser import parse_response
from cfm.payload import build_payload
from cfm.validation import validate_criteria

logger = logging.getLogger(__name__)


async def _execute(criteria: SearchCriteria, client: CFMClient) -> SearchResult:
    body = build_payload(criteria)
    try:
        raw = await client.post(body)
        return parse_response(raw)
    except CRMQueryError:
        raise
    except Exception as e:
        logger.error(f"CFM search error: {e!r}")
        raise UpstreamError(f"Unexpected error: {e}", cause=e) from e


async def search(
    criteria: Union[SearchCriteria, Mapping[str, Any], None] = None,
    *,
    client: Optional[CFMClient] = None,
    **fields: Any,
) -> SearchResult:
    """Look up doctors in one call.

    Validation runs before anything touches the network. When no client is
    given, one is opened for this call and closed before returning.

        result = await search(state="RS", crm="43327")
    """
    validated = validate_criteria(criteria, **fields)
    logger.info(
        f"CFM lookup: state={validated.state} crm={validated.crm or '-'} "
        f"name={validated.name or '-'}"
    )

    if client is not None:
        return await _execute(validated, client)

    async with CFMClient() as own_client:
        return await _execute(validated, own_client)


class DoctorQuery:
    """Chainable search builder.

        result = await DoctorQuery().state("RS").crm("43327").search()

    An instance accumulates state between calls, so don't share one across
    concurrent tasks.
    """

    def __init__(self, client: Optional[CFMClient] = None):
        self._client = client
        self._state: Optional[str] = None
        self._crm: Optional[str] = None
        self._name: Optional[str] = None

    def state(self, uf: str) -> DoctorQuery:
        """Set the state (UF). Required."""
        self._state = uf.upper()
        return self

    def crm(self, number: str) -> DoctorQuery:
        self._crm = number
        return self

    def name(self, name: str) -> DoctorQuery:
        """Set the doctor's name (partial match)."""
        self._name = name
        return self

    def reset(self) -> DoctorQuery:
        """Clear every field back to unset."""
        self._state = None
        self._crm = None
        self._name = None
        return self

    def build(self) -> SearchCriteria:
        """Snapshot the current fields. Not validated until search()."""
        return SearchCriteria(state=self._state, crm=self._crm, name=self._name)

    async def search(self) -> SearchResult:
        return await search(self.build(), client=self._client)

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import httpx

from ..core.config import Settings
from ..core.logs import get_logger
from ..schemas.vehicle import MatchedVehicle, PlateSearchResponse
from .plate_query import (
    PLATE_FIELD,
    build_plate_filter,
    matched_terms,
    normalise_kenteken,
    parse_search_terms,
)

logger = get_logger(__name__)


class RegistryError(RuntimeError):
    pass


class RdwClient:
    """
    Thin async client for the RDW open data vehicle registry.

    Every call opens its own httpx client and issues exactly one GET.
    `transport` is only there so tests can plug in an httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: Optional[float] = 10.0,
        search_limit: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.search_limit = search_limit
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "RdwClient":
        return cls(
            settings.RDW_API_URL,
            timeout_s=settings.RDW_TIMEOUT_S,
            search_limit=settings.RDW_SEARCH_LIMIT,
        )

    async def _get_rows(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.get(self.base_url, params=params, headers={"Accept": "application/json"})
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise RegistryError(f"RDW API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RegistryError(f"RDW API request failed: {e}") from e
        except ValueError as e:
            raise RegistryError("RDW API returned invalid JSON") from e

        if not isinstance(data, list):
            raise RegistryError("Unexpected response from RDW: expected a list of rows")

        return data

    async def fetch_vehicle(self, kenteken: str) -> Optional[Dict[str, Any]]:
        """
        Exact lookup by plate. Returns None when RDW has no row for it.

        A plate should map to a single row; if RDW ever returns more, the
        first one is used and the rest are dropped.
        """
        plate = normalise_kenteken(kenteken)
        rows = await self._get_rows({PLATE_FIELD: plate})

        logger.info("RDW lookup %s -> %d row(s)", plate, len(rows))
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning("RDW returned %d rows for %s, using the first", len(rows), plate)

        return rows[0]

    async def search_vehicles(self, terms: Iterable[str]) -> PlateSearchResponse:
        """
        Pattern search: every plate containing at least one of the terms.

        Results are ordered by plate and capped at `search_limit`. One extra
        row is requested so `truncated` is only set when more rows exist.
        """
        search_terms = parse_search_terms(list(terms))

        params = {
            "$where": build_plate_filter(search_terms),
            "$limit": self.search_limit + 1,
            "$order": PLATE_FIELD,
        }
        rows = await self._get_rows(params)
        truncated = len(rows) > self.search_limit

        # RDW does not say which OR-branch matched, so recompute it per row.
        # Rows no term actually contains are not results.
        results: List[MatchedVehicle] = []
        for row in rows[: self.search_limit]:
            hits = matched_terms(row.get(PLATE_FIELD) or "", search_terms)
            if not hits:
                logger.warning("RDW search returned %s without a matching term", row.get(PLATE_FIELD))
                continue
            results.append(MatchedVehicle.model_validate({**row, "matchedTerms": hits}))

        logger.info("RDW search %s -> %d row(s)", ",".join(search_terms), len(results))

        return PlateSearchResponse(
            results=results,
            count=len(results),
            searchTerms=search_terms,
            limit=self.search_limit,
            truncated=truncated,
        )

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...core.logs import get_logger
from ...schemas.listing import ForSaleResponse
from ...schemas.vehicle import PlateSearchResponse
from ...services.listings import build_listing_links
from ...services.plate_query import InvalidSearchTerms, normalise_kenteken, parse_search_terms
from ...services.rdw import RdwClient, RegistryError
from ..deps import get_rdw_client

router = APIRouter()
logger = get_logger(__name__)

FETCH_FAILED = "Failed to fetch vehicle data"


# Parameters are optional at the FastAPI level so a missing one is a 400, not a 422.
@router.get("")
async def vehicle_by_plate(
    kenteken: Optional[str] = Query(None, description="License plate, with or without dashes, e.g. '91-RFH-93'"),
    client: RdwClient = Depends(get_rdw_client),
) -> Dict[str, Any]:
    """
    Exact lookup of one vehicle. Returns the raw RDW row.
    """
    if not kenteken or not normalise_kenteken(kenteken):
        raise HTTPException(status_code=400, detail="Kenteken (license plate) is required")

    try:
        row = await client.fetch_vehicle(kenteken)
    except RegistryError:
        logger.exception("RDW lookup failed for %s", kenteken)
        raise HTTPException(status_code=500, detail=FETCH_FAILED)

    if row is None:
        raise HTTPException(status_code=404, detail="No vehicle found with this license plate")

    return row


@router.get("/search", response_model=PlateSearchResponse)
async def search_plates(
    terms: Optional[str] = Query(None, description="Comma-separated plate fragments, e.g. '91,RFH'"),
    client: RdwClient = Depends(get_rdw_client),
) -> PlateSearchResponse:
    """
    Pattern search: vehicles whose plate contains any of the terms.

    At most `limit` rows come back, ordered by plate; `truncated` tells the
    caller the list is not exhaustive.
    """
    if not terms:
        raise HTTPException(status_code=400, detail="Search terms are required")

    try:
        search_terms = parse_search_terms(terms)
    except InvalidSearchTerms as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await client.search_vehicles(search_terms)
    except RegistryError:
        logger.exception("RDW search failed for %s", ",".join(search_terms))
        raise HTTPException(status_code=500, detail=FETCH_FAILED)


@router.get("/for-sale", response_model=ForSaleResponse)
def for_sale_links(
    kenteken: Optional[str] = Query(None),
    merk: Optional[str] = Query(None, description="Brand, used for the free-text marketplace search"),
    handelsbenaming: Optional[str] = Query(None, description="Model name, used with merk"),
) -> ForSaleResponse:
    if not kenteken or not normalise_kenteken(kenteken):
        raise HTTPException(status_code=400, detail="Kenteken is required")

    return ForSaleResponse(
        kenteken=normalise_kenteken(kenteken),
        listings=build_listing_links(kenteken, merk=merk, handelsbenaming=handelsbenaming),
        hasListings=False,
    )

from typing import List

from pydantic import BaseModel


class ListingLink(BaseModel):
    site: str
    name: str
    url: str
    available: bool = False


class ForSaleResponse(BaseModel):
    kenteken: str
    listings: List[ListingLink]
    hasListings: bool = False

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VehicleRecord(BaseModel):
    """
    One row of the RDW 'Gekentekende voertuigen' dataset.

    RDW returns every value as a string and leaves out empty fields, so only
    the fields the UI shows are declared; anything else is kept as-is.
    """
    model_config = ConfigDict(extra="allow")

    kenteken: Optional[str] = None
    merk: Optional[str] = None
    handelsbenaming: Optional[str] = None
    voertuigsoort: Optional[str] = None
    inrichting: Optional[str] = None
    eerste_toelating_dt: Optional[str] = None
    vervaldatum_apk_dt: Optional[str] = None
    catalogusprijs: Optional[str] = None
    wam_verzekerd: Optional[str] = None
    aantal_cilinders: Optional[str] = None
    cilinderinhoud: Optional[str] = None
    massa_ledig_voertuig: Optional[str] = None
    toegestane_maximum_massa_voertuig: Optional[str] = None
    aantal_zitplaatsen: Optional[str] = None
    aantal_deuren: Optional[str] = None
    lengte: Optional[str] = None
    breedte: Optional[str] = None
    brandstof_omschrijving: Optional[str] = None
    kleur: Optional[str] = None


class MatchedVehicle(VehicleRecord):
    matchedTerms: List[str] = Field(default_factory=list)


class PlateSearchResponse(BaseModel):
    results: List[MatchedVehicle]
    count: int
    searchTerms: List[str]
    limit: int
    truncated: bool

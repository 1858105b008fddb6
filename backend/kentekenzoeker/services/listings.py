from typing import List, Optional
from urllib.parse import quote

from ..schemas.listing import ListingLink
from .plate_query import normalise_kenteken

# (site, display name, search URL template). `{q}` is the URL-encoded query.
MARKETPLACES = [
    ("autoscout24", "AutoScout24", "https://www.autoscout24.nl/lst?searchtext={q}"),
    ("autotrader", "AutoTrader", "https://www.autotrader.nl/auto/zoeken?q={q}"),
    ("marktplaats", "Marktplaats", "https://www.marktplaats.nl/q/{q}/c/91"),
    ("gaspedaal", "Gaspedaal", "https://www.gaspedaal.nl/zoeken?q={q}"),
    ("bovag", "BOVAG", "https://www.bovag.nl/occasions?search={q}"),
]

# Marktplaats searches free text, so it gets brand + model + plate.
PHRASE_SITES = {"marktplaats"}


def search_phrase(kenteken: str, merk: Optional[str] = None, handelsbenaming: Optional[str] = None) -> str:
    if merk and handelsbenaming:
        return f"{merk} {handelsbenaming} {kenteken}"
    return kenteken


def build_listing_links(
    kenteken: str,
    merk: Optional[str] = None,
    handelsbenaming: Optional[str] = None,
) -> List[ListingLink]:
    """
    Search links for the used-car marketplaces. No site is contacted, so
    `available` is always False; the user follows the links to check.
    """
    plate = normalise_kenteken(kenteken)
    phrase = search_phrase(plate, merk, handelsbenaming)

    links: List[ListingLink] = []
    for site, name, template in MARKETPLACES:
        q = phrase if site in PHRASE_SITES else plate
        links.append(ListingLink(site=site, name=name, url=template.format(q=quote(q, safe=""))))

    return links

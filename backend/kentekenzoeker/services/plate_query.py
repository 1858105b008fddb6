from __future__ import annotations

from typing import Iterable, List, Union

# RDW stores plates without dashes, but the filter strips them anyway so
# a stray dash in either the data or the term never affects matching.
PLATE_FIELD = "kenteken"

LIKE_WILDCARDS = frozenset("%_")


class InvalidSearchTerms(ValueError):
    pass


def normalise_kenteken(raw: str) -> str:
    """
    '91-rfh-93' -> '91RFH93'. Only dashes are treated as separators.
    """
    return (raw or "").strip().replace("-", "").upper()


def soql_literal(value: str) -> str:
    """
    Quote a value as a SoQL string literal. Embedded single quotes are
    doubled, which is the only escape SoQL knows.
    """
    return "'" + str(value).replace("'", "''") + "'"


def parse_search_terms(raw: Union[str, Iterable[str], None]) -> List[str]:
    """
    Turn 'a, b,,A' (or a list of strings) into ['A', 'B'].

    Terms are trimmed and uppercased, empties are dropped and duplicates are
    removed case-insensitively while keeping the first-seen order. SoQL LIKE
    has no escape clause, so terms holding `%` or `_` are rejected.
    """
    if raw is None:
        parts: Iterable[str] = []
    elif isinstance(raw, str):
        parts = raw.split(",")
    else:
        parts = raw

    terms: List[str] = []
    for part in parts:
        term = (part or "").strip().upper()
        if not term or not term.replace("-", ""):
            continue
        if LIKE_WILDCARDS & set(term):
            raise InvalidSearchTerms(f"Search term may not contain % or _: {term}")
        if term in terms:
            continue
        terms.append(term)

    if not terms:
        raise InvalidSearchTerms("At least one search term is required")

    return terms


def _plate_contains(term: str, field: str = PLATE_FIELD) -> str:
    clean = term.replace("-", "").upper()
    return f"UPPER(REPLACE({field}, '-', '')) LIKE {soql_literal('%' + clean + '%')}"


def build_plate_filter(terms: Iterable[str], field: str = PLATE_FIELD) -> str:
    """
    Build the `$where` expression: a row matches when any term is a substring
    of its dash-stripped, uppercased plate.
    """
    clauses = [_plate_contains(t, field) for t in terms]
    if not clauses:
        raise InvalidSearchTerms("At least one search term is required")
    return " OR ".join(clauses)


def matched_terms(plate: str, terms: Iterable[str]) -> List[str]:
    # Every term is tested on its own; overlapping terms ('9', '91') can both match.
    plate_n = normalise_kenteken(plate)
    return [t for t in terms if t.replace("-", "").upper() in plate_n]

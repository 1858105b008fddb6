import re

import httpx
import pytest
from fastapi.testclient import TestClient

from kentekenzoeker.api.deps import get_rdw_client
from kentekenzoeker.main import app
from kentekenzoeker.services.rdw import RdwClient

RDW_URL = "https://rdw.test/resource/m9d7-ebf2.json"

VEHICLES = [
    {
        "kenteken": "91RFH93",
        "merk": "VOLKSWAGEN",
        "handelsbenaming": "GOLF",
        "voertuigsoort": "Personenauto",
        "kleur": "GRIJS",
        "eerste_toelating_dt": "2015-03-12T00:00:00.000",
        "catalogusprijs": "27450",
        "aantal_zitplaatsen": "5",
        "datum_tenaamstelling": "20200114",
    },
    {
        "kenteken": "X191ZZ",
        "merk": "TOYOTA",
        "handelsbenaming": "YARIS",
        "voertuigsoort": "Personenauto",
    },
    {
        "kenteken": "RFH12B",
        "merk": "DAF",
        "handelsbenaming": "XF",
        "voertuigsoort": "Bedrijfsauto",
    },
    {
        "kenteken": "TT456X",
        "merk": "FORD",
        "handelsbenaming": "FOCUS",
        "voertuigsoort": "Personenauto",
    },
]

# LIKE literals inside the $where expression; quotes inside are doubled.
LIKE_RE = re.compile(r"LIKE '((?:[^']|'')*)'")


def like_to_regex(pattern: str):
    # SoQL LIKE semantics: % is any run of characters, _ is one character.
    parts = [".*" if c == "%" else "." if c == "_" else re.escape(c) for c in pattern]
    return re.compile("".join(parts), re.DOTALL)


class FakeRdw:
    """
    Stand-in for the Socrata endpoint: answers exact `kenteken=` filters and
    the OR-of-LIKE `$where` expressions the client builds.
    """

    def __init__(self, rows):
        self.rows = rows
        self.requests = []
        self.status_code = 200
        self.error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "upstream trouble"})

        params = request.url.params
        if "kenteken" in params:
            rows = [r for r in self.rows if r["kenteken"] == params["kenteken"]]
        else:
            patterns = [like_to_regex(t.replace("''", "'")) for t in LIKE_RE.findall(params.get("$where", ""))]
            rows = [
                r for r in self.rows
                if any(p.fullmatch(r["kenteken"].replace("-", "").upper()) for p in patterns)
            ]
            rows = sorted(rows, key=lambda r: r["kenteken"])[: int(params.get("$limit", len(rows)))]

        return httpx.Response(200, json=rows)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_rdw():
    return FakeRdw(list(VEHICLES))


@pytest.fixture
def rdw_client(fake_rdw):
    return RdwClient(RDW_URL, transport=httpx.MockTransport(fake_rdw))


@pytest.fixture
def client(rdw_client):
    app.dependency_overrides[get_rdw_client] = lambda: rdw_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

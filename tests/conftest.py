import pytest
import requests

from main import create_app

TOKEN = "test-token"

SAMPLE_CSV = (
    "Internal ID,Blank Silo,Color,AW_Front,Spec_Sheet,Placement from Collar,Recipe\n"
    "1,Cotton,Red,https://img/1.png,https://spec/1.pdf,3,\n"
    "2,Wool,Blue,,,,\n"
    '3,Cotton,"Navy, Dark",www.img/3.png,https://spec/3.pdf,abc,\n'
    "4,,Red,,,2.5,\n"
)

RECIPES = [
    {"id": "r1", "blankSilo": "Cotton", "materialType": "Knit",
     "A": "Red", "B": "Blue", "C": "", "D": "Green", "E": "Black"},
    {"id": "r2", "blankSilo": "Cotton", "materialType": "Woven",
     "A": "Other", "B": "Other", "C": "Other", "D": "Other", "E": "Other"},
    {"id": "r3", "blankSilo": "Fleece", "materialType": "Knit",
     "A": "White", "B": "", "C": "", "D": "", "E": ""},
]


@pytest.fixture
def app():
    """App bound to a private in-memory database."""
    return create_app({"ARTDB_DB_URL": "sqlite://", "ARTDB_API_TOKEN": TOKEN, "TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def recipes():
    return [dict(r) for r in RECIPES]


class _FlaskResponse:
    """requests.Response look-alike over a Flask test response."""

    def __init__(self, resp):
        self._resp = resp
        self.status_code = resp.status_code
        self.ok = resp.status_code < 400

    def json(self):
        data = self._resp.get_json(silent=True)
        if data is None:
            raise ValueError("no JSON body")
        return data

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


class FlaskHTTP:
    """Routes PersistenceGateway calls into a Flask test client."""

    def __init__(self, client, host="http://testserver"):
        self.client = client
        self.host = host
        self.headers = {}
        self.calls = []

    def _path(self, url):
        return url[len(self.host):] if url.startswith(self.host) else url

    def get(self, url, timeout=None):
        self.calls.append(("GET", self._path(url)))
        return _FlaskResponse(self.client.get(self._path(url), headers=self.headers))

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", self._path(url)))
        return _FlaskResponse(self.client.post(self._path(url), json=json, headers=self.headers))


class BrokenHTTP:
    """Every request fails at the connection level."""

    def __init__(self):
        self.headers = {}

    def get(self, url, timeout=None):
        raise requests.ConnectionError("connection refused")

    def post(self, url, json=None, timeout=None):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def flask_http(client):
    return FlaskHTTP(client)

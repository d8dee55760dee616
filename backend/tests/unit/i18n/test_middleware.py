import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from content_i18n.i18n.context import get_language
from content_i18n.i18n.middleware import install_i18n_middleware


def _client() -> TestClient:
    app = FastAPI()
    install_i18n_middleware(app)

    @app.get("/lang")
    async def lang():
        return {"lang": get_language()}

    return TestClient(app)


@pytest.mark.unit
def test_language_from_accept_language_header():
    resp = _client().get("/lang", headers={"Accept-Language": "ar-SA,ar;q=0.9,en;q=0.5"})

    assert resp.status_code == 200
    assert resp.json() == {"lang": "ar"}
    assert resp.headers["Content-Language"] == "ar"
    assert resp.headers["X-Text-Direction"] == "rtl"


@pytest.mark.unit
def test_query_param_overrides_header():
    resp = _client().get("/lang?lang=so", headers={"Accept-Language": "ar"})

    assert resp.json() == {"lang": "so"}
    assert resp.headers["X-Text-Direction"] == "ltr"


@pytest.mark.unit
def test_defaults_to_english():
    resp = _client().get("/lang")

    assert resp.json() == {"lang": "en"}
    assert resp.headers["Content-Language"] == "en"


@pytest.mark.unit
def test_language_does_not_leak_between_requests():
    client = _client()
    client.get("/lang", headers={"Accept-Language": "so"})

    assert get_language() == "en"
    assert client.get("/lang").json() == {"lang": "en"}

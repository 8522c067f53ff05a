import pytest
import requests
from prometheus_client import REGISTRY

from delexi_proxy.domain.catalog import (
    AuthFailure,
    FetchSuccess,
    InternalFailure,
    PlaylistService,
    ResourceFailure,
)
from delexi_proxy.domain.credentials import AppTokenCache
from tests.support.stubs import FakeClock, FakeResponse, ScriptedSession, sample_playlist, token_response


def _service(session, **kwargs):
    cache = AppTokenCache("id", "secret", session=session, clock=FakeClock())
    kwargs.setdefault("api_base_url", "https://api.example/v1")
    return PlaylistService(cache, session=session, **kwargs)


@pytest.mark.unit
def test_fetch_success_sends_bearer_token_and_market():
    session = ScriptedSession(
        token=[token_response("T1")],
        resource=[FakeResponse(200, sample_playlist())],
    )
    service = _service(session, timeout=3)

    outcome = service.fetch_playlist("p1", "us")

    assert isinstance(outcome, FetchSuccess)
    assert outcome.playlist.name == "Mix"
    (method, url, kwargs), = session.calls_to("GET")
    assert url == "https://api.example/v1/playlists/p1"
    assert kwargs["params"] == {"market": "US"}
    assert kwargs["headers"] == {"Authorization": "Bearer T1"}
    assert kwargs["timeout"] == 3


@pytest.mark.unit
def test_invalid_market_falls_back_to_default():
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, {})])
    service = _service(session, default_market="FR")

    service.fetch_playlist("p1", "xx")
    service.fetch_playlist("p1")

    markets = [call[2]["params"]["market"] for call in session.calls_to("GET")]
    assert markets == ["FR", "FR"]


@pytest.mark.unit
def test_market_not_forwarded_when_disabled():
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, {})])
    service = _service(session, forward_market=False)

    service.fetch_playlist("p1", "US")

    assert session.calls_to("GET")[0][2]["params"] is None


@pytest.mark.unit
def test_playlist_id_is_path_quoted():
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, {})])
    service = _service(session)

    service.fetch_playlist("a/b?c", None)

    assert session.calls_to("GET")[0][1] == "https://api.example/v1/playlists/a%2Fb%3Fc"


@pytest.mark.unit
def test_token_is_reused_across_fetches():
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, {})])
    service = _service(session)

    for _ in range(3):
        service.fetch_playlist("p1")

    assert len(session.calls_to("POST")) == 1
    assert len(session.calls_to("GET")) == 3


@pytest.mark.unit
def test_upstream_error_is_forwarded_verbatim():
    body = '{"error": {"status": 404, "message": "Resource not found"}}'
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(404, text=body)])
    service = _service(session)

    outcome = service.fetch_playlist("missing")

    assert outcome == ResourceFailure(404, body)
    assert outcome.to_response() == ({"error": body}, 404)


@pytest.mark.unit
def test_auth_failure_becomes_500():
    session = ScriptedSession(token=[FakeResponse(401, text="invalid_client")])
    service = _service(session)

    outcome = service.fetch_playlist("p1")

    assert isinstance(outcome, AuthFailure)
    payload, status = outcome.to_response()
    assert status == 500
    assert payload == {"error": "Token request failed: 401 invalid_client"}
    assert session.calls_to("GET") == []


@pytest.mark.unit
def test_network_failure_becomes_internal_failure():
    session = ScriptedSession(
        token=[token_response()],
        resource=[requests.exceptions.ConnectTimeout("timed out")],
    )
    service = _service(session)

    outcome = service.fetch_playlist("p1")

    assert isinstance(outcome, InternalFailure)
    payload, status = outcome.to_response()
    assert status == 500
    assert "timed out" in payload["error"]


@pytest.mark.unit
def test_invalid_json_becomes_internal_failure():
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, text="<html>")])
    service = _service(session)

    outcome = service.fetch_playlist("p1")

    assert isinstance(outcome, InternalFailure)
    assert outcome.to_response()[1] == 500


@pytest.mark.unit
def test_wrongly_typed_upstream_fields_still_succeed():
    document = {"id": "p1", "owner": "alice", "tracks": {"items": [{"track": {"duration_ms": 1.5, "name": "S"}}, "x"]}}
    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, document)])
    service = _service(session)

    outcome = service.fetch_playlist("p1")

    assert isinstance(outcome, FetchSuccess)
    payload, status = outcome.to_response()
    assert status == 200
    assert payload["owner"] is None
    assert payload["tracks"][0]["duration_ms"] == 1.5
    assert payload["tracks"][1] == {
        "index": 2, "name": None, "artist": None, "duration_ms": None,
        "preview_url": None, "external_url": None, "id": None,
    }


def _latency_count():
    return REGISTRY.get_sample_value("delexi_upstream_playlist_seconds_count") or 0.0


@pytest.mark.unit
def test_upstream_latency_covers_only_the_playlist_request():
    failing = ScriptedSession(token=[FakeResponse(401, text="invalid_client")])
    before = _latency_count()
    _service(failing).fetch_playlist("p1")
    assert _latency_count() == before

    session = ScriptedSession(token=[token_response()], resource=[FakeResponse(200, {})])
    _service(session).fetch_playlist("p1")
    assert _latency_count() == before + 1

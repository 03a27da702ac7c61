# osrm_client/tests/test_http_adapter.py
import asyncio

import httpx
import pytest
import respx

from osrm_client.adapters.online.osrm_http_adapter import OSRMHttpAdapter
from osrm_client.config import ClientSettings
from osrm_client.core.exceptions import (
    ApiError,
    EmptyCoordinatesError,
    MalformedUrlError,
    NetworkError,
    UnknownError,
)
from osrm_client.models.requests import OSRMBearing, OSRMRequest, Service

from conftest import BASE_URL, make_coords
from data_samples import ERROR_400, ROUTE_TWO_LEGS

ROUTE_PREFIX = f"{BASE_URL}/route/v1/driving/"


def _adapter(**overrides) -> OSRMHttpAdapter:
    return OSRMHttpAdapter(settings=ClientSettings(base_url=BASE_URL, **overrides))


def _fetch(adapter: OSRMHttpAdapter, request: OSRMRequest):
    async def _run():
        try:
            return await adapter.fetch(request)
        finally:
            await adapter.aclose()

    return asyncio.run(_run())


# ---------------- URL construction ----------------


def test_build_url_path_and_query():
    req = OSRMRequest(
        coordinates=make_coords(c1={"bearing": OSRMBearing(value=90, range=10)}),
        service=Service.ROUTE,
        alternatives=False,
    )
    url = _adapter().build_url(req)
    assert url.scheme == "http" and url.host == "osrm.test"
    assert url.path == (
        "/route/v1/driving/13.38886,52.517037;13.397634,52.529407;13.428555,52.523219"
    )
    assert list(url.params.multi_items()) == [
        ("steps", "false"),
        ("geometries", "polyline"),
        ("overview", "simplified"),
        ("alternatives", "false"),
        ("bearings", ";90,10;"),
    ]


def test_build_url_keeps_list_separators_literal():
    req = OSRMRequest(
        coordinates=make_coords(
            c1={"radius": 50, "bearing": OSRMBearing(value=90, range=10)}
        ),
        service=Service.MATCH,
        exclude=["toll", "ferry"],
    )
    url = _adapter().build_url(req)
    query = url.query.decode("ascii")
    assert "radiuses=;50;" in query
    assert "exclude=toll,ferry" in query
    assert query.endswith("bearings=;90,10;")
    assert "%3B" not in str(url) and "%2C" not in str(url)


def test_build_url_without_query_has_no_question_mark():
    req = OSRMRequest(service=Service.TABLE, coordinates=make_coords()[:2])
    url = _adapter().build_url(req)
    assert "?" not in str(url)


def test_build_url_uses_service_version_profile():
    req = OSRMRequest(
        profile="cycling", service="table", version="v2", coordinates=make_coords()[:2]
    )
    url = _adapter().build_url(req)
    assert url.path.startswith("/table/v2/cycling/13.38886,52.517037;")
    assert not url.params


def test_build_url_rejects_missing_scheme():
    adapter = OSRMHttpAdapter(settings=ClientSettings(base_url="router.project-osrm.org"))
    with pytest.raises(MalformedUrlError):
        adapter.build_url(OSRMRequest(coordinates=make_coords()))


# ---------------- fetch ----------------


@respx.mock(assert_all_called=False)
def test_empty_coordinates_rejected_before_network():
    route = respx.get(url__startswith=BASE_URL).mock(return_value=httpx.Response(200))
    with pytest.raises(EmptyCoordinatesError):
        _fetch(_adapter(), OSRMRequest(coordinates=[]))
    assert not route.called


@respx.mock
def test_fetch_ok_returns_body_unchanged():
    body = httpx.Response(200, json=ROUTE_TWO_LEGS).content
    route = respx.get(url__startswith=ROUTE_PREFIX).mock(
        return_value=httpx.Response(200, content=body)
    )
    data = _fetch(_adapter(), OSRMRequest(coordinates=make_coords()))
    assert data == body
    assert route.call_count == 1

    sent = route.calls.last.request
    assert sent.method == "GET"
    assert sent.headers["Accept"] == "application/json; charset=utf-8"
    assert sent.headers["Content-Type"] == "application/json; charset=utf-8"


@respx.mock
def test_fetch_uses_custom_headers():
    route = respx.get(url__startswith=ROUTE_PREFIX).mock(
        return_value=httpx.Response(200, json={"code": "Ok"})
    )
    _fetch(
        _adapter(accept_type="application/json", content_type="text/plain"),
        OSRMRequest(coordinates=make_coords()),
    )
    sent = route.calls.last.request
    assert sent.headers["Accept"] == "application/json"
    assert sent.headers["Content-Type"] == "text/plain"


@pytest.mark.parametrize(
    "status,exc,reason",
    [
        (400, ApiError, "Error"),
        (500, ApiError, "Server error"),
        (503, ApiError, "Server error"),
        (599, ApiError, "Server error"),
        (404, NetworkError, None),
        (204, NetworkError, None),
        (302, NetworkError, None),
    ],
)
@respx.mock
def test_status_classification(status, exc, reason):
    respx.get(url__startswith=ROUTE_PREFIX).mock(
        return_value=httpx.Response(status, json=ERROR_400)
    )
    with pytest.raises(exc) as info:
        _fetch(_adapter(), OSRMRequest(coordinates=make_coords()))
    if reason is not None:
        assert info.value.reason == reason
        assert info.value.status_code == status


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("dns failure"),
        httpx.ConnectTimeout("connect timed out"),
        httpx.ReadTimeout("read timed out"),
        httpx.RemoteProtocolError("connection reset"),
    ],
)
@respx.mock
def test_transport_failures_become_network_errors(error):
    respx.get(url__startswith=ROUTE_PREFIX).mock(side_effect=error)
    with pytest.raises(NetworkError) as info:
        _fetch(_adapter(), OSRMRequest(coordinates=make_coords()))
    assert isinstance(info.value.cause, type(error))


@respx.mock
def test_unexpected_failure_becomes_unknown_error():
    boom = RuntimeError("boom")
    respx.get(url__startswith=ROUTE_PREFIX).mock(side_effect=boom)
    with pytest.raises(UnknownError) as info:
        _fetch(_adapter(), OSRMRequest(coordinates=make_coords()))
    assert isinstance(info.value.cause, RuntimeError)


class _SlowTransport(httpx.AsyncBaseTransport):
    async def handle_async_request(self, request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={"code": "Ok"})


def test_resource_timeout_is_network_error():
    async def _run():
        async with httpx.AsyncClient(transport=_SlowTransport()) as client:
            adapter = OSRMHttpAdapter(
                settings=ClientSettings(base_url=BASE_URL, resource_timeout=0.05),
                client=client,
            )
            await adapter.fetch(OSRMRequest(coordinates=make_coords()))

    with pytest.raises(NetworkError):
        asyncio.run(_run())


@respx.mock
def test_concurrent_calls_share_one_client():
    route = respx.get(url__startswith=BASE_URL).mock(
        return_value=httpx.Response(200, json={"code": "Ok"})
    )
    adapter = _adapter()
    requests = [
        OSRMRequest(coordinates=make_coords(), service=s)
        for s in (Service.ROUTE, Service.TRIP, Service.NEAREST)
    ]

    async def _run():
        async with adapter:
            return await asyncio.gather(*(adapter.fetch(r) for r in requests))

    bodies = asyncio.run(_run())
    assert len(bodies) == 3
    assert route.call_count == 3
    paths = sorted(c.request.url.path.split("/")[1] for c in route.calls)
    assert paths == ["nearest", "route", "trip"]


def test_external_client_is_not_closed():
    async def _run():
        client = httpx.AsyncClient()
        adapter = OSRMHttpAdapter(client=client)
        await adapter.aclose()
        closed = client.is_closed
        await client.aclose()
        return closed

    assert asyncio.run(_run()) is False

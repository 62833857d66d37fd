import asyncio

import httpx
import pytest

from cf_heatmap.codeforces_api import DecodeError
from cf_heatmap.codeforces_api import TransportError
from cf_heatmap.codeforces_api import fetch_user_submissions


API_URL = "https://codeforces.test/api"


def run_fetch(handler, handle: str = "tourist"):
    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_user_submissions(handle, API_URL, client=client)

    return asyncio.run(scenario())


def test_fetch_returns_submission_records() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"status": "OK", "result": [{"id": 1, "verdict": "OK"}, "junk"]}
        )

    result = run_fetch(handler)

    assert result == [{"id": 1, "verdict": "OK"}]
    assert seen[0].url.path == "/api/user.status"
    assert seen[0].url.params["handle"] == "tourist"
    assert seen[0].url.params["status"] == "OK"


def test_non_success_http_status_raises_transport_error() -> None:
    with pytest.raises(TransportError, match="HTTP 500"):
        run_fetch(lambda request: httpx.Response(500))


def test_network_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        run_fetch(handler)


def test_failed_api_status_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"status": "FAILED", "comment": "handle: User not found"}
        )

    with pytest.raises(TransportError, match="User not found"):
        run_fetch(handler)


def test_invalid_json_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        run_fetch(lambda request: httpx.Response(200, text="<html>maintenance</html>"))


@pytest.mark.parametrize("body", [[1, 2, 3], {"status": "OK"}, {"status": "OK", "result": {}}])
def test_unexpected_document_raises_decode_error(body: object) -> None:
    with pytest.raises(DecodeError):
        run_fetch(lambda request: httpx.Response(200, json=body))


def test_empty_handle_is_rejected_before_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ValueError):
        run_fetch(handler, handle="")

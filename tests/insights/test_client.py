"""Tests for the insight service client."""

import asyncio
import json

import httpx
import pytest

from liftledger.config import Settings
from liftledger.exceptions import (
    ErrorCode,
    InsightHTTPError,
    InsightNetworkError,
    InsightRequestError,
    InsightResponseError,
    InsightServiceError,
    InsightTimeoutError,
)
from liftledger.insights.client import InsightClient
from liftledger.models import ProgressPoint, ProgressRequest

URL = "https://insights.test/api/insights/progress"

VALID_RESPONSE = {
    "isNewPR": True,
    "delta": 20,
    "percentChange": 20.0,
    "firstDate": "2026-03-01",
    "latestDate": "2026-03-15",
    "insightText": "Bench Press is up 20 lbs since March 1.",
}


def make_request() -> ProgressRequest:
    return ProgressRequest(
        exercise="Bench Press",
        metric="weight",
        history=[
            ProgressPoint(date="2026-03-01", value=100),
            ProgressPoint(date="2026-03-15", value=120),
        ],
    )


class Recorder:
    """MockTransport handler that records requests and replays a response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return self.response


def client_for(handler) -> InsightClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return InsightClient(URL, http_client=http_client)


class TestFetchProgressInsight:
    """Tests for successful requests."""

    @pytest.mark.asyncio
    async def test_posts_json_and_parses_insight(self):
        handler = Recorder(httpx.Response(200, json=VALID_RESPONSE))
        client = client_for(handler)

        insight = await client.fetch_progress_insight(make_request())

        assert insight.is_new_pr is True
        assert insight.delta == 20
        assert insight.insight_text.startswith("Bench Press")

        sent = handler.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == URL
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == {
            "exercise": "Bench Press",
            "metric": "weight",
            "history": [
                {"date": "2026-03-01", "value": 100.0},
                {"date": "2026-03-15", "value": 120.0},
            ],
        }

    @pytest.mark.asyncio
    async def test_accepts_plain_mapping(self):
        handler = Recorder(httpx.Response(200, json=VALID_RESPONSE))
        client = client_for(handler)

        insight = await client.fetch_progress_insight({
            "exercise": "Bench Press",
            "metric": "weight",
            "history": [{"date": "2026-03-01", "value": 100}],
        })

        assert insight.latest_date == "2026-03-15"


class TestInvalidRequests:
    """Invalid requests fail before any network call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"exercise": "Bench Press", "metric": "weight", "history": []},
            {"exercise": "", "metric": "weight", "history": [{"date": "2026-03-01", "value": 1}]},
            {"exercise": "Bench Press", "history": [{"date": "2026-03-01", "value": 1}]},
            {"exercise": "Bench Press", "metric": "weight", "history": "lots"},
            "not-a-request",
        ],
    )
    async def test_rejected_without_calling_service(self, payload):
        handler = Recorder(httpx.Response(200, json=VALID_RESPONSE))
        client = client_for(handler)

        with pytest.raises(InsightRequestError) as exc_info:
            await client.fetch_progress_insight(payload)

        assert handler.requests == []
        assert exc_info.value.code == ErrorCode.INSIGHT_REQUEST_INVALID

    @pytest.mark.asyncio
    async def test_empty_history_message(self):
        client = client_for(Recorder(httpx.Response(200, json=VALID_RESPONSE)))

        with pytest.raises(InsightRequestError, match="history array cannot be empty"):
            await client.fetch_progress_insight({"exercise": "Bench", "metric": "weight", "history": []})


class TestFailures:
    """Remote failures map to typed errors."""

    @pytest.mark.asyncio
    async def test_timeout(self):
        client = client_for(Recorder(error=lambda request: httpx.ReadTimeout("timed out", request=request)))

        with pytest.raises(InsightTimeoutError) as exc_info:
            await client.fetch_progress_insight(make_request())

        assert exc_info.value.details["timeout_seconds"] == 10.0

    @pytest.mark.asyncio
    async def test_slow_response_is_bounded_by_total_timeout(self):
        async def stall(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json=VALID_RESPONSE)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stall))
        client = InsightClient(URL, timeout=0.05, http_client=http_client)

        with pytest.raises(InsightTimeoutError) as exc_info:
            await client.fetch_progress_insight(make_request())

        assert exc_info.value.details["timeout_seconds"] == 0.05

    @pytest.mark.asyncio
    async def test_network_error(self):
        client = client_for(Recorder(error=lambda request: httpx.ConnectError("refused", request=request)))

        with pytest.raises(InsightNetworkError):
            await client.fetch_progress_insight(make_request())

    @pytest.mark.asyncio
    async def test_bad_request(self):
        client = client_for(Recorder(httpx.Response(400)))

        with pytest.raises(InsightHTTPError) as exc_info:
            await client.fetch_progress_insight(make_request())

        assert exc_info.value.status_code == 400
        assert exc_info.value.message.startswith("Bad Request")

    @pytest.mark.asyncio
    async def test_server_error(self):
        client = client_for(Recorder(httpx.Response(503)))

        with pytest.raises(InsightHTTPError) as exc_info:
            await client.fetch_progress_insight(make_request())

        assert exc_info.value.status_code == 503
        assert exc_info.value.message.startswith("HTTP 503")

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        client = client_for(Recorder(httpx.Response(200, content=b"<html>oops</html>")))

        with pytest.raises(InsightResponseError) as exc_info:
            await client.fetch_progress_insight(make_request())

        assert "oops" in exc_info.value.details["raw_response_preview"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {**VALID_RESPONSE, "isNewPR": "yes"},
            {**VALID_RESPONSE, "delta": "20"},
            {key: value for key, value in VALID_RESPONSE.items() if key != "insightText"},
            ["not", "an", "object"],
        ],
    )
    async def test_wrong_shape(self, body):
        client = client_for(Recorder(httpx.Response(200, json=body)))

        with pytest.raises(InsightResponseError):
            await client.fetch_progress_insight(make_request())

    @pytest.mark.asyncio
    async def test_all_failures_share_a_base_class(self):
        client = client_for(Recorder(httpx.Response(500)))

        with pytest.raises(InsightServiceError):
            await client.fetch_progress_insight(make_request())


class TestClientLifecycle:
    """Tests for client construction and closing."""

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(Recorder(httpx.Response(200))))

        async with InsightClient(URL, http_client=http_client):
            pass

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        client = InsightClient(URL)
        http_client = await client._get_client()

        await client.close()

        assert http_client.is_closed

    def test_from_settings(self):
        settings = Settings(insights_api_url=URL, insights_timeout_seconds=5.0)

        client = InsightClient.from_settings(settings)

        assert client.base_url == URL
        assert client.timeout == 5.0

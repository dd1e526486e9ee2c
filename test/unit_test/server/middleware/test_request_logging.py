"""
Unit tests for the request logging middleware.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from dpf_cms.server.middleware import RequestLoggingMiddleware

pytestmark = pytest.mark.asyncio

MODULE = "dpf_cms.server.middleware.request_logging"


def _request(method="GET", path="/api/v1/programs"):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


async def test_successful_request_is_logged_and_timed():
    response = Response(content="ok", status_code=201)

    async def call_next(request):
        return response

    middleware = RequestLoggingMiddleware(app=AsyncMock())

    with patch(f"{MODULE}.log_api_request") as mock_log:
        result = await middleware.dispatch(_request("POST"), call_next)

    assert result.status_code == 201
    assert "X-Process-Time" in result.headers
    kwargs = mock_log.call_args[1]
    assert kwargs["method"] == "POST"
    assert kwargs["path"] == "/api/v1/programs"
    assert kwargs["status_code"] == 201
    assert kwargs["duration_ms"] >= 0


async def test_failed_request_is_logged_as_500_and_reraised():
    async def call_next(request):
        raise RuntimeError("boom")

    middleware = RequestLoggingMiddleware(app=AsyncMock())

    with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
        with pytest.raises(RuntimeError):
            await middleware.dispatch(_request(), call_next)

    assert mock_log.call_args[1]["status_code"] == 500
    mock_logger.error.assert_called_once()


@pytest.mark.parametrize("path, warned", [("/api/v1/programs", True), ("/api/v1/editor/tasks/stream", False)])
async def test_slow_request_warning(path, warned):
    async def call_next(request):
        return Response(status_code=200)

    middleware = RequestLoggingMiddleware(app=AsyncMock())

    with (
        patch(f"{MODULE}.log_api_request"),
        patch(f"{MODULE}.logger") as mock_logger,
        patch(f"{MODULE}.time.time", side_effect=[100.0, 102.0]),
    ):
        await middleware.dispatch(_request(path=path), call_next)

    assert mock_logger.warning.called is warned

"""HTTP client for the marketplace API with response normalization."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from src.config import get_settings

from .schemas import Failure, OutboundRequest, Success, UniformResult

logger = structlog.get_logger("gateway")


def _describe(exc: Exception) -> str:
    # httpx timeouts often stringify to an empty message
    return str(exc) or exc.__class__.__name__


def _failure_message(data: object, status_code: int) -> str:
    error = data.get("error") if isinstance(data, dict) else None
    if error:
        return error if isinstance(error, str) else str(error)
    return f"HTTP {status_code}"


@asynccontextmanager
async def _client_scope(
    client: httpx.AsyncClient | None,
    timeout: float,
) -> AsyncIterator[httpx.AsyncClient]:
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


async def execute(
    request: OutboundRequest,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> UniformResult:
    """Send a request and reduce the outcome to Success or Failure.
    
    Args:
        request: Request produced by the envelope builder.
        client: Optional HTTP client. When omitted a client is opened
            for this call only.
        timeout: Request timeout in seconds; defaults to the
            ``REQUEST_TIMEOUT_SECONDS`` setting.
        
    Returns:
        Success with the parsed body for 2xx responses, Failure otherwise.
        Transport errors and undecodable bodies never raise.
    """
    if timeout is None:
        timeout = get_settings().REQUEST_TIMEOUT_SECONDS

    try:
        async with _client_scope(client, timeout) as http:
            response = await http.request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.content,
                timeout=timeout,
            )
            # Error responses are expected to carry JSON too
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(
            "request_failed",
            method=request.method.value,
            url=request.url,
            error_type=e.__class__.__name__,
        )
        return Failure(message=f"Request failed: {_describe(e)}")

    if not response.is_success:
        logger.info(
            "api_error",
            method=request.method.value,
            url=request.url,
            status_code=response.status_code,
        )
        return Failure(message=_failure_message(data, response.status_code), details=data)

    return Success(payload=data)

"""Stdio transport: newline-delimited JSON-RPC over stdin/stdout."""

import asyncio
import json
import sys
from typing import TextIO

import httpx
import structlog

from src.config import get_settings
from src.logging_config import configure_logging

from .schemas import MCPErrorCodes, jsonrpc_error, to_wire
from .service import handle_message

logger = structlog.get_logger("mcp")


def _parse_error_reply() -> str:
    return json.dumps(to_wire(jsonrpc_error(None, MCPErrorCodes.PARSE_ERROR, "Parse error")))


async def process_line(
    line: str,
    client: httpx.AsyncClient | None = None,
) -> str | None:
    """Handle one framed message.
    
    Args:
        line: Raw line read from the client.
        client: Optional HTTP client passed through to tool calls.
        
    Returns:
        Serialized response line (without newline), or None when nothing
        should be written.
    """
    line = line.strip()
    if not line:
        return None

    try:
        payload = json.loads(line)
    except json.JSONDecodeError:
        return _parse_error_reply()

    response = await handle_message(payload, client=client)
    if response is None:
        return None
    return json.dumps(to_wire(response), ensure_ascii=False)


async def _send(reply: str, output: TextIO, lock: asyncio.Lock) -> None:
    async with lock:
        output.write(reply + "\n")
        output.flush()


async def _answer(line: str, output: TextIO, lock: asyncio.Lock) -> None:
    reply = await process_line(line)
    if reply is not None:
        await _send(reply, output, lock)


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            "stdio_reply_failed",
            error_type=exc.__class__.__name__,
            error=str(exc),
            exc_info=exc,
        )


async def serve_stdio(input_stream: TextIO | None = None, output_stream: TextIO | None = None) -> None:
    """Serve MCP requests until the input stream closes.
    
    Each message is handled in its own task so slow tool calls do not
    block later requests; responses may be written out of order. A line
    that is not valid UTF-8 is answered with a parse error, and a reply
    that cannot be written is logged without stopping the loop.
    """
    input_stream = input_stream or sys.stdin
    output_stream = output_stream or sys.stdout
    write_lock = asyncio.Lock()
    pending: set[asyncio.Task] = set()

    settings = get_settings()
    logger.info("stdio_server_started", server=settings.SERVER_NAME, api_url=settings.CLAWSLIST_API_URL)

    while True:
        try:
            line = await asyncio.to_thread(input_stream.readline)
        except UnicodeDecodeError as e:
            logger.warning("stdio_undecodable_line", reason=str(e))
            work = _send(_parse_error_reply(), output_stream, write_lock)
        else:
            if not line:
                break
            work = _answer(line, output_stream, write_lock)

        task = asyncio.create_task(work)
        pending.add(task)
        task.add_done_callback(pending.discard)
        task.add_done_callback(_log_task_failure)

    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
    logger.info("stdio_server_stopped")


def main() -> None:
    """Console entry point for the stdio transport."""
    settings = get_settings()
    configure_logging(level=settings.MCP_LOG_LEVEL, stream=sys.stderr)
    asyncio.run(serve_stdio())

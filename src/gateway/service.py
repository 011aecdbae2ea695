"""Tool dispatcher: catalog lookup, credential check, request, normalization."""

import uuid
from typing import Any, Mapping

import httpx
import structlog

from src.audit import AuditStatus, audit_tool_invocation
from src.auth.credentials import resolve_credential
from src.auth.exceptions import CredentialsMissingError
from src.auth.models import Credential
from src.config import get_settings
from src.registry.catalog import get_operation
from src.registry.models import AuthMode, OperationDescriptor

from .envelope import build_request
from .exceptions import InvalidArgumentError, MissingArgumentError, ToolNotFoundError
from .proxy import execute
from .schemas import Failure, InvokeToolRequest, UniformResult

logger = structlog.get_logger("gateway")


def generate_request_id() -> str:
    """Generate a unique request ID for tracing."""
    return str(uuid.uuid4())


def credential_for(
    descriptor: OperationDescriptor,
    arguments: Mapping[str, Any],
) -> Credential | None:
    """Pick the credential an operation is sent with.
    
    Args:
        descriptor: Routing entry for the tool.
        arguments: Raw tool arguments.
        
    Returns:
        None for public operations, otherwise the credential to attach.
        
    Raises:
        CredentialsMissingError: If the operation needs the resolved
            credential and none is available.
        MissingArgumentError: If the operation takes its key from an
            argument that was not supplied.
    """
    if descriptor.auth == AuthMode.none:
        return None

    if descriptor.auth == AuthMode.argument:
        token = arguments.get(descriptor.auth_argument)
        if not isinstance(token, str) or not token:
            raise MissingArgumentError(tool_name=descriptor.name, argument=descriptor.auth_argument)
        return Credential(token=token, source="argument")

    credential = resolve_credential()
    if credential is None:
        raise CredentialsMissingError(tool_name=descriptor.name)
    return credential


async def invoke_tool(
    request: InvokeToolRequest,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> UniformResult:
    """Invoke a marketplace tool.
    
    This is the main entry point for tool invocation. It:
    1. Looks up the tool's operation descriptor
    2. Resolves the credential for authenticated tools
    3. Builds the HTTP request
    4. Sends it and normalizes the response
    
    Unknown tools and missing credentials short-circuit before any
    network I/O. Every outcome is a Success or a Failure, with one
    exception: ``asyncio.CancelledError`` from the host is not converted
    into a transport Failure and propagates to the caller, so task
    cancellation keeps working. Timeouts are still reported as
    ``Request failed`` failures.

    Args:
        request: Tool invocation request.
        client: Optional HTTP client; a fresh one is used per call if omitted.
        timeout: Optional request timeout override.
        
    Returns:
        Success or Failure.
    """
    request_id = request.request_id or generate_request_id()

    async with audit_tool_invocation(request_id=request_id, tool_name=request.tool_name) as audit_ctx:
        try:
            descriptor = get_operation(request.tool_name)
            if descriptor is None:
                raise ToolNotFoundError(request.tool_name)

            credential = credential_for(descriptor, request.arguments)
            if credential is not None:
                audit_ctx.mark_authenticated()

            outbound = build_request(
                descriptor,
                request.arguments,
                base_url=get_settings().CLAWSLIST_API_URL,
                credential=credential,
            )
            result = await execute(outbound, client=client, timeout=timeout)

        except ToolNotFoundError as e:
            audit_ctx.mark_error(e.code, AuditStatus.not_found)
            return Failure(message=e.message)
        except CredentialsMissingError as e:
            audit_ctx.mark_error(e.code, AuditStatus.auth_required)
            return Failure(message=e.message)
        except (MissingArgumentError, InvalidArgumentError) as e:
            audit_ctx.mark_error(e.code)
            return Failure(message=e.message)
        except Exception as e:
            logger.exception("invoke_tool_failed", request_id=request_id, tool_name=request.tool_name)
            audit_ctx.mark_error("INTERNAL_ERROR")
            return Failure(message=str(e) or e.__class__.__name__)

        if isinstance(result, Failure):
            if result.details is None:
                audit_ctx.mark_error("REQUEST_FAILED", AuditStatus.transport_error)
            else:
                audit_ctx.mark_error("API_ERROR")
        return result

"""Build outbound HTTP requests from operation descriptors."""

import json
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from src.auth.models import Credential
from src.registry.models import BodyField, OperationDescriptor

from .exceptions import InvalidArgumentError, MissingArgumentError
from .schemas import OutboundRequest


def _query_value(value: Any) -> str:
    # Match how JSON clients print scalars: true/false, 50 rather than 50.0
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _render_path(descriptor: OperationDescriptor, arguments: Mapping[str, Any]) -> str:
    path = descriptor.path
    for param in descriptor.path_params:
        value = arguments.get(param)
        if value is None or value == "":
            raise MissingArgumentError(tool_name=descriptor.name, argument=param)
        # Dot segments survive quoting and get collapsed by URL normalization
        if str(value) in (".", ".."):
            raise InvalidArgumentError(
                tool_name=descriptor.name,
                argument=param,
                reason="dot segments are not allowed in path parameters",
            )
        path = path.replace("{" + param + "}", quote(str(value), safe=""))
    return path


def build_query(descriptor: OperationDescriptor, arguments: Mapping[str, Any]) -> str:
    """Encode the supplied query parameters in declaration order.
    
    Parameters that are absent, None or empty strings are left out.
    """
    params = [
        (name, _query_value(arguments[name]))
        for name in descriptor.query_params
        if arguments.get(name) is not None and arguments.get(name) != ""
    ]
    return str(httpx.QueryParams(params))


def _project(field: BodyField, value: Any) -> Any:
    if field.keys is None or not isinstance(value, Mapping):
        return value
    return {key: value[key] for key in field.keys if value.get(key) is not None}


def build_body(descriptor: OperationDescriptor, arguments: Mapping[str, Any]) -> dict[str, Any] | None:
    """Assemble the JSON body from the declared fields.
    
    Returns:
        A dict (possibly empty) for operations with body fields, None otherwise.
    """
    if not descriptor.has_body:
        return None
    return {
        field.name: _project(field, arguments[field.name])
        for field in descriptor.body_fields
        if arguments.get(field.name) is not None
    }


def build_request(
    descriptor: OperationDescriptor,
    arguments: Mapping[str, Any],
    base_url: str,
    credential: Credential | None = None,
) -> OutboundRequest:
    """Construct the outbound request for one tool invocation.
    
    Args:
        descriptor: Routing entry for the tool.
        arguments: Tool arguments, already schema-checked by the client.
        base_url: Marketplace base URL without trailing slash.
        credential: Bearer credential, if any.
        
    Returns:
        OutboundRequest ready for the transport.
        
    Raises:
        MissingArgumentError: If a path parameter is missing.
        InvalidArgumentError: If a path parameter is a dot segment.
    """
    url = base_url.rstrip("/") + _render_path(descriptor, arguments)
    query = build_query(descriptor, arguments)
    if query:
        url = f"{url}?{query}"

    headers = {"Content-Type": "application/json"}
    if credential is not None:
        headers["Authorization"] = credential.authorization_header

    body = build_body(descriptor, arguments)
    content = json.dumps(body).encode("utf-8") if body is not None else None

    return OutboundRequest(
        method=descriptor.method,
        url=url,
        headers=headers,
        content=content,
    )

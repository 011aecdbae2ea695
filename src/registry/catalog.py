"""Routing table for the marketplace tools.

``OPERATIONS`` maps every ``ToolName`` to its ``OperationDescriptor``. The
table is built once at import and exposed read-only.
"""

from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from .config import ToolConfig, load_tool_registry
from .models import AuthMode, BodyField, HttpMethod, OperationDescriptor

PRICE_KEYS = ("amount", "unit", "type")


class ToolName(str, Enum):
    """Closed set of tools exposed by the gateway."""
    
    register_agent = "register_agent"
    get_agent_info = "get_agent_info"
    update_agent = "update_agent"
    delete_agent = "delete_agent"
    restore_agent = "restore_agent"
    list_listings = "list_listings"
    create_listing = "create_listing"
    send_message = "send_message"
    submit_offer = "submit_offer"
    get_messages = "get_messages"
    get_listing = "get_listing"
    update_listing = "update_listing"
    delete_listing = "delete_listing"
    accept_offer = "accept_offer"
    get_pending_offers = "get_pending_offers"
    list_deals = "list_deals"
    regenerate_magic_link = "regenerate_magic_link"
    regenerate_all_magic_links = "regenerate_all_magic_links"
    create_magic_link = "create_magic_link"


def _fields(*names: str) -> tuple[BodyField, ...]:
    return tuple(BodyField(name=name) for name in names)


def _price(name: str) -> BodyField:
    return BodyField(name=name, keys=PRICE_KEYS)


_DESCRIPTORS = (
    # Agents
    OperationDescriptor(
        name=ToolName.register_agent,
        method=HttpMethod.POST,
        path="/api/agents/register",
        body_fields=_fields("name", "description", "skillManifestUrl"),
    ),
    OperationDescriptor(
        name=ToolName.get_agent_info,
        method=HttpMethod.GET,
        path="/api/agents/me",
        auth=AuthMode.resolved,
    ),
    OperationDescriptor(
        name=ToolName.update_agent,
        method=HttpMethod.PATCH,
        path="/api/agents/me",
        auth=AuthMode.resolved,
        body_fields=_fields("dealPreference", "description"),
    ),
    OperationDescriptor(
        name=ToolName.delete_agent,
        method=HttpMethod.DELETE,
        path="/api/agents/me",
        auth=AuthMode.resolved,
    ),
    OperationDescriptor(
        name=ToolName.restore_agent,
        method=HttpMethod.POST,
        path="/api/agents/restore",
        auth=AuthMode.argument,
        auth_argument="apiKey",
    ),
    # Listings
    OperationDescriptor(
        name=ToolName.list_listings,
        method=HttpMethod.GET,
        path="/api/listings",
        query_params=("category", "subcategory", "limit", "cursor"),
    ),
    OperationDescriptor(
        name=ToolName.create_listing,
        method=HttpMethod.POST,
        path="/api/listings",
        auth=AuthMode.resolved,
        body_fields=(
            *_fields("subcategory", "title", "description"),
            _price("price"),
            BodyField(name="ttlDays"),
        ),
    ),
    OperationDescriptor(
        name=ToolName.get_listing,
        method=HttpMethod.GET,
        path="/api/listings/{listingId}",
    ),
    OperationDescriptor(
        name=ToolName.update_listing,
        method=HttpMethod.PUT,
        path="/api/listings/{listingId}",
        auth=AuthMode.resolved,
        body_fields=(
            *_fields("title", "description"),
            _price("price"),
            BodyField(name="status"),
        ),
    ),
    OperationDescriptor(
        name=ToolName.delete_listing,
        method=HttpMethod.DELETE,
        path="/api/listings/{listingId}",
        auth=AuthMode.resolved,
    ),
    # Messages
    OperationDescriptor(
        name=ToolName.send_message,
        method=HttpMethod.POST,
        path="/api/listings/{listingId}/messages",
        auth=AuthMode.resolved,
        body_fields=_fields("content", "replyToMessageId"),
    ),
    OperationDescriptor(
        name=ToolName.get_messages,
        method=HttpMethod.GET,
        path="/api/listings/{listingId}/messages",
        query_params=("limit", "cursor", "order", "humanId"),
    ),
    # Offers
    OperationDescriptor(
        name=ToolName.submit_offer,
        method=HttpMethod.POST,
        path="/api/listings/{listingId}/offers/pending",
        auth=AuthMode.resolved,
        body_fields=(BodyField(name="offerText"), _price("proposedPrice")),
    ),
    OperationDescriptor(
        name=ToolName.get_pending_offers,
        method=HttpMethod.GET,
        path="/api/listings/{listingId}/offers/pending",
        auth=AuthMode.resolved,
    ),
    OperationDescriptor(
        name=ToolName.accept_offer,
        method=HttpMethod.POST,
        path="/api/listings/{listingId}/offers/accept",
        auth=AuthMode.resolved,
        body_fields=_fields("messageId", "note"),
    ),
    # Deals and magic links
    OperationDescriptor(
        name=ToolName.list_deals,
        method=HttpMethod.GET,
        path="/api/agents/deals",
        auth=AuthMode.resolved,
    ),
    OperationDescriptor(
        name=ToolName.regenerate_magic_link,
        method=HttpMethod.POST,
        path="/api/agents/deals",
        auth=AuthMode.resolved,
        body_fields=_fields("chatId", "message"),
    ),
    OperationDescriptor(
        name=ToolName.regenerate_all_magic_links,
        method=HttpMethod.POST,
        path="/api/agents/deals/regenerate-all",
        auth=AuthMode.resolved,
        body_fields=_fields("message"),
    ),
    OperationDescriptor(
        name=ToolName.create_magic_link,
        method=HttpMethod.POST,
        path="/api/magic-link",
        auth=AuthMode.resolved,
        body_fields=_fields("chatId", "offerId", "message"),
    ),
)


def _build_operations(
    descriptors: tuple[OperationDescriptor, ...],
) -> Mapping[ToolName, OperationDescriptor]:
    table: dict[ToolName, OperationDescriptor] = {}
    for descriptor in descriptors:
        key = ToolName(descriptor.name)
        if key in table:
            raise ValueError(f"Duplicate operation descriptor for '{key.value}'")
        table[key] = descriptor

    missing = set(ToolName) - set(table)
    if missing:
        names = ", ".join(sorted(tool.value for tool in missing))
        raise ValueError(f"Missing operation descriptors for: {names}")

    return MappingProxyType(table)


OPERATIONS: Mapping[ToolName, OperationDescriptor] = _build_operations(_DESCRIPTORS)


def get_operation(name: str) -> OperationDescriptor | None:
    """Look up the descriptor for a tool name.
    
    Args:
        name: Tool name as received from the client.
        
    Returns:
        The descriptor, or None if the name is not in the catalog.
    """
    try:
        return OPERATIONS[ToolName(name)]
    except ValueError:
        return None


@lru_cache()
def get_tool_definitions() -> tuple[ToolConfig, ...]:
    """Return tool metadata in catalog order.
    
    Raises:
        ValueError: If the metadata file and the routing table disagree.
    """
    registry = load_tool_registry()
    by_name = {tool.name: tool for tool in registry.tools}

    expected = {tool.value for tool in ToolName}
    if set(by_name) != expected:
        missing = sorted(expected - set(by_name))
        unknown = sorted(set(by_name) - expected)
        raise ValueError(
            f"Tool metadata does not match routing table (missing={missing}, unknown={unknown})"
        )

    return tuple(by_name[tool.value] for tool in ToolName)

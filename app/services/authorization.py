"""Role -> capability mapping consulted by protected routes."""

from enum import Enum


class Capability(str, Enum):
    CATALOG_WRITE = "catalog:write"


# Every role may currently write to the catalog; narrow a role here to restrict it.
ROLE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    "user": frozenset({Capability.CATALOG_WRITE}),
    "admin": frozenset({Capability.CATALOG_WRITE}),
}


def has_capability(role: str | None, capability: Capability) -> bool:
    """True if role grants capability. Unknown roles grant nothing."""
    if role is None:
        return False
    return capability in ROLE_CAPABILITIES.get(role, frozenset())

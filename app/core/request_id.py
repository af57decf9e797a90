"""Request ID generation and management."""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

# Context variable to store request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Caller-supplied IDs are reused only when short and header-safe
_INCOMING_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse a well-formed incoming X-Request-ID, otherwise generate one."""
    if incoming and _INCOMING_ID.match(incoming):
        return incoming
    return generate_request_id()


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_var.get("")


def set_request_id(request_id: str) -> None:
    """Set request ID in context."""
    request_id_var.set(request_id)

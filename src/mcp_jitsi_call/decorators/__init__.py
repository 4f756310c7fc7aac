# mcp_jitsi_call/decorators/__init__.py

from .ensure import ensure_call_page_ready
from .locking import exclusive_session_access
from .envelope import tool_envelope

__all__ = [
    "ensure_call_page_ready",
    "exclusive_session_access",
    "tool_envelope",
]

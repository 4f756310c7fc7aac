# mcp_jitsi_call/tools/__init__.py
"""
MCP tool implementations - async wrappers that return JSON responses.

This package contains high-level tool implementations that:
- Wrap the CallPage page object
- Return JSON-serialized responses
- Include error handling and diagnostics
"""

from .session import (
    start_session,
    close_session,
)

from .call import (
    join_call,
    leave_call,
    get_call_stats,
    track_participants,
    get_participants,
    count_remote_participants,
    update_presence,
    send_endpoint_message,
    listen_for_request_data,
    get_request_data,
)

from .debugging import (
    get_debug_diagnostics_info,
)

__all__ = [
    # Session
    'start_session',
    'close_session',
    # Call
    'join_call',
    'leave_call',
    'get_call_stats',
    'track_participants',
    'get_participants',
    'count_remote_participants',
    'update_presence',
    'send_endpoint_message',
    'listen_for_request_data',
    'get_request_data',
    # Debugging
    'get_debug_diagnostics_info',
]

#region Overview
"""
## Session Lifecycle

Call `start_session` first. It creates the browser (a local Chrome, or a
Remote session when SELENIUM_REMOTE_URL is set) and binds a call page to it.
Every other call tool answers `session_not_started` until then.

`close_session` leaves the conference, cancels endpoint messages that are
still retrying, and quits the browser.

## Endpoint Messages

`send_endpoint_message` returns right away. Delivery is retried in the
background (5 attempts, 2 seconds apart by default). Pass `wait_sec` to wait
for the outcome.
"""
#endregion

#region Imports
import logging
from mcp.server.fastmcp import FastMCP
#endregion

#region Import from your package __init__.py
import mcp_jitsi_call as MJC
from mcp_jitsi_call.decorators import (
    tool_envelope,
    exclusive_session_access,
    ensure_call_page_ready,
)
from mcp_jitsi_call.tools import session, call, debugging
#endregion

#region Logger
logger = logging.getLogger(__name__)
#endregion

#region FastMCP Initialization
mcp = FastMCP("mcp_jitsi_call")
#endregion

#region Tools -- Session management
@mcp.tool()
@tool_envelope
@exclusive_session_access
async def mcp_jitsi_call__start_session() -> str:
    """
    Start the browser session and bind a call page to it.
    Calling it again reuses the existing session.
    """
    return await session.start_session()

@mcp.tool()
@tool_envelope
@exclusive_session_access
async def mcp_jitsi_call__close_session(leave_first: bool = True) -> str:
    """
    Leave the conference (unless leave_first is False), cancel pending
    endpoint messages and quit the browser.
    """
    return await session.close_session(leave_first=leave_first)
#endregion

#region Tools -- Conference
@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__join_call(url: str) -> str:
    """
    Load a conference url and wait (up to CALL_JOIN_TIMEOUT_SECS) until the
    conference is joined.

    Args:
        url (str): The conference url, including any config fragment.
    """
    return await call.join_call(url)

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__leave_call() -> str:
    """Leave the conference and wait briefly until we are alone in the room."""
    return await call.leave_call()

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__get_call_stats() -> str:
    """Participant count and current bitrates of the conference."""
    return await call.get_call_stats()
#endregion

#region Tools -- Participants
@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__track_participants() -> str:
    """
    Start recording the identities of participants, seeded with the current
    members. Read them with get_participants.
    """
    return await call.track_participants()

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__get_participants() -> str:
    """Identities recorded since track_participants was called."""
    return await call.get_participants()

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__count_remote_participants(kind: str = "jigasi") -> str:
    """
    Count remote participants.

    Args:
        kind (str): 'jigasi' for SIP gateway clients, 'muted' for participants
            with both audio and video muted.
    """
    return await call.count_remote_participants(kind)
#endregion

#region Tools -- Signaling
@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__update_presence(key: str, value: str) -> str:
    """Add a key/value pair to our presence and send the new presence."""
    return await call.update_presence(key, value)

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__send_endpoint_message(text: str, wait_sec: float = 0) -> str:
    """
    Send a text message to all endpoints. Delivery is retried in the
    background; set wait_sec to wait for the outcome.
    """
    return await call.send_endpoint_message(text, wait_sec=wait_sec)

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__listen_for_request_data() -> str:
    """
    Capture url / jwt / roomId fields sent to us in endpoint text messages.
    """
    return await call.listen_for_request_data()

@mcp.tool()
@tool_envelope
@exclusive_session_access
@ensure_call_page_ready
async def mcp_jitsi_call__get_request_data() -> str:
    """The url, jwt and room id captured by listen_for_request_data."""
    return await call.get_request_data()
#endregion

#region Tools -- Debugging
@mcp.tool()
@tool_envelope
@exclusive_session_access
async def mcp_jitsi_call__get_debug_diagnostics_info() -> str:
    """Environment, driver and call state. Works without a session."""
    return await debugging.get_debug_diagnostics_info()
#endregion


def main():
    logger.warning(f"mcp_jitsi_call from: {getattr(MJC, '__file__', '<namespace>')}")
    mcp.run()


if __name__ == "__main__":
    main()

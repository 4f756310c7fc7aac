"""
Drive a jitsi-meet conference from a Selenium session.

The CallPage page object runs small scripts against the conference page
(`APP.conference`) and turns whatever comes back into typed results. When the
page is not in the expected state the operations return a safe default
(False, 0, an empty list, ...) and log what the browser reported instead of
raising.

The MCP server in __main__ exposes the same operations as tools. One MCP
connection drives one browser session; tool calls over that connection are
serialized.
"""

from .pageobjects import CallPage, ScriptResult

__all__ = ["CallPage", "ScriptResult"]

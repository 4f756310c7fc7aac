"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

import os

# ============================================================================
# Call Page Timing
# ============================================================================

CALL_JOIN_TIMEOUT_SECS = float(os.getenv("CALL_JOIN_TIMEOUT_SECS", "30"))
"""How long to poll for the conference to report it has been joined."""

CALL_LEAVE_TIMEOUT_SECS = float(os.getenv("CALL_LEAVE_TIMEOUT_SECS", "2"))
"""How long to wait for the room to empty after leaving."""

CALL_POLL_INTERVAL_SECS = float(os.getenv("CALL_POLL_INTERVAL_SECS", "0.5"))
"""Poll frequency used by the bounded waits."""


# ============================================================================
# Endpoint Message Retry
# ============================================================================

ENDPOINT_MESSAGE_MAX_ATTEMPTS = int(os.getenv("ENDPOINT_MESSAGE_MAX_ATTEMPTS", "5"))
"""Maximum number of attempts to send one endpoint message."""

ENDPOINT_MESSAGE_RETRY_DELAY_SECS = float(os.getenv("ENDPOINT_MESSAGE_RETRY_DELAY_SECS", "2"))
"""Fixed delay between two endpoint message attempts."""


# ============================================================================
# Chrome Flags
# ============================================================================

DEFAULT_CHROME_ARGS = (
    "--use-fake-ui-for-media-stream",
    "--autoplay-policy=no-user-gesture-required",
    "--disable-infobars",
)
"""Flags every call page browser is started with."""


__all__ = [
    "CALL_JOIN_TIMEOUT_SECS",
    "CALL_LEAVE_TIMEOUT_SECS",
    "CALL_POLL_INTERVAL_SECS",
    "ENDPOINT_MESSAGE_MAX_ATTEMPTS",
    "ENDPOINT_MESSAGE_RETRY_DELAY_SECS",
    "DEFAULT_CHROME_ARGS",
]

"""Page objects for the jitsi-meet web application."""

from .abstract_page import AbstractPageObject
from .call_page import CallPage
from .results import ScriptResult

__all__ = [
    "AbstractPageObject",
    "CallPage",
    "ScriptResult",
]

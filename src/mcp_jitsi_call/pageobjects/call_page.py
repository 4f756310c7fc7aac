"""
Page object for the in-call page of a jitsi-meet server.

All calls that execute javascript may raise WebDriverException (for example
when chrome has crashed). Those are propagated: the caller decides whether
the session is still usable. Only the shape of the returned value is checked
here, falling back to a per-operation default.
"""

import time
from typing import Any, Dict, List

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import WebDriverWait

from . import scripts
from .abstract_page import AbstractPageObject
from .results import is_boolean, is_list, is_mapping, is_not_string, is_number
from ..constants import (
    CALL_JOIN_TIMEOUT_SECS,
    CALL_LEAVE_TIMEOUT_SECS,
    CALL_POLL_INTERVAL_SECS,
    ENDPOINT_MESSAGE_MAX_ATTEMPTS,
    ENDPOINT_MESSAGE_RETRY_DELAY_SECS,
)
from ..utils.retry import RetryTask

import logging
logger = logging.getLogger(__name__)


class CallPage(AbstractPageObject):
    def __init__(
        self,
        driver: WebDriver,
        join_timeout: float = CALL_JOIN_TIMEOUT_SECS,
        leave_timeout: float = CALL_LEAVE_TIMEOUT_SECS,
        poll_interval: float = CALL_POLL_INTERVAL_SECS,
        message_attempts: int = ENDPOINT_MESSAGE_MAX_ATTEMPTS,
        message_retry_delay: float = ENDPOINT_MESSAGE_RETRY_DELAY_SECS,
    ):
        super().__init__(driver)
        self.join_timeout = join_timeout
        self.leave_timeout = leave_timeout
        self.poll_interval = poll_interval
        self.message_attempts = message_attempts
        self.message_retry_delay = message_retry_delay

    # ------------------------------------------------------------------
    # Joining
    # ------------------------------------------------------------------

    def _is_joined(self, _driver=None) -> bool:
        result = self.run_script(scripts.IS_JOINED, is_boolean)
        if not result.ok:
            logger.debug(f"Not joined yet: {result.error}")
            return False
        return result.value

    def visit(self, url: str) -> bool:
        """
        Load the conference url and wait until the conference reports it has
        been joined. Returns False on timeout instead of raising.
        """
        if not super().visit(url):
            return False

        started = time.monotonic()
        try:
            WebDriverWait(self.driver, self.join_timeout, poll_frequency=self.poll_interval).until(self._is_joined)
        except TimeoutException:
            logger.error("Timed out waiting for call page to load")
            return False

        logger.info(f"Waited {time.monotonic() - started:.2f}s to join the conference")
        return True

    # ------------------------------------------------------------------
    # Counts and stats
    # ------------------------------------------------------------------

    def get_num_participants(self) -> int:
        """Number of members in the conference, 1 (ourselves) if unknown."""
        result = self.run_script(scripts.MEMBERS_COUNT, is_number)
        if not result.ok:
            return 1
        return int(result.value)

    def get_stats(self) -> Dict[str, Any]:
        result = self.run_script(scripts.GET_STATS, is_mapping)
        if not result.ok:
            logger.debug(f"No conference stats: {result.error}")
            return {}
        return result.value

    def get_bitrates(self) -> Dict[str, Any]:
        bitrate = self.get_stats().get("bitrate", {})
        return bitrate if isinstance(bitrate, dict) else {}

    def _count_remote_participants(self, script: str, name: str) -> int:
        result = self.run_script(script, is_number)
        if not result.ok:
            logger.error(f"error running {name} script: {result.error}")
            return 0
        return int(result.value)

    def num_remote_participants_jigasi(self) -> int:
        """Return how many of the participants are Jigasi clients"""
        return self._count_remote_participants(scripts.NUM_REMOTE_PARTICIPANTS_JIGASI, "numRemoteParticipantsJigasi")

    def num_remote_participants_muted(self) -> int:
        """
        Returns a count of how many remote participants are totally muted
        (audio and video).
        """
        return self._count_remote_participants(scripts.NUM_REMOTE_PARTICIPANTS_MUTED, "numRemoteParticipantsMuted")

    # ------------------------------------------------------------------
    # Participant tracking
    # ------------------------------------------------------------------

    def inject_participant_tracker_script(self) -> bool:
        result = self.run_script(scripts.INJECT_PARTICIPANT_TRACKER, is_boolean)
        if not result.ok:
            logger.error(f"Error injecting participant tracker: {result.error}")
            return False
        return result.value

    def get_participants(self) -> List[Dict[str, Any]]:
        return self.run_script(scripts.GET_PARTICIPANTS, is_list).value_or([])

    # ------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------

    def add_to_presence(self, key: str, value: str) -> bool:
        """
        Add the given key, value pair to the presence map. The new presence
        is only sent by send_presence().
        """
        result = self.run_script(scripts.ADD_TO_PRESENCE, is_not_string, key, value)
        if not result.ok:
            logger.error(f"Error adding {key} to presence: {result.error}")
        return result.ok

    def send_presence(self) -> bool:
        result = self.run_script(scripts.SEND_PRESENCE, is_not_string)
        if not result.ok:
            logger.error(f"Error sending presence: {result.error}")
        return result.ok

    # ------------------------------------------------------------------
    # Leaving
    # ------------------------------------------------------------------

    def leave(self) -> bool:
        result = self.run_script(scripts.LEAVE, is_not_string)

        # Wait till we are alone in the room so the leave promise can finish
        # before the driver is quit.
        try:
            WebDriverWait(self.driver, self.leave_timeout, poll_frequency=self.poll_interval).until(
                lambda _: self.get_num_participants() == 1
            )
        except TimeoutException:
            logger.warning(f"Still not alone in the room {self.leave_timeout}s after leaving")

        if not result.ok:
            logger.error(f"Error leaving the conference: {result.error}")
        return result.ok

    # ------------------------------------------------------------------
    # Endpoint messages
    # ------------------------------------------------------------------

    def _send_endpoint_message_once(self, msg: str) -> bool:
        result = self.run_script(scripts.SEND_ENDPOINT_MESSAGE, is_boolean, msg)
        if not result.ok:
            logger.error(f"Error sending endpoint message: {result.error}")
        return result.ok

    def send_endpoint_message(self, msg: str) -> RetryTask:
        """
        Broadcast `msg` to every endpoint as an 'endpoint-text-message'.

        Returns immediately; the attempts run on a background thread. Use the
        returned task to wait for, inspect, or cancel the delivery.
        """
        def attempt() -> bool:
            return self._send_endpoint_message_once(msg)

        task = RetryTask(
            attempt,
            attempts=self.message_attempts,
            delay=self.message_retry_delay,
            name="send-endpoint-message",
        )
        return task.start()

    # ------------------------------------------------------------------
    # Request data side channel
    # ------------------------------------------------------------------

    def add_request_data_listener(self) -> bool:
        result = self.run_script(scripts.ADD_REQUEST_DATA_LISTENER, is_boolean)
        if not result.ok:
            logger.error(f"Error adding request data listener: {result.error}")
            return False
        return True

    def get_request_data(self) -> List[str]:
        """
        Returns [url, jwt, room_id] as captured by the request data listener.
        On error the result is a single empty string.
        """
        result = self.run_script(scripts.GET_REQUEST_DATA, is_list)
        if not result.ok:
            logger.error(f"Error getting request data: {result.error}")
            return [""]
        return result.value


__all__ = ["CallPage"]

import logging
import threading
import time

import pytest
from selenium.common.exceptions import WebDriverException

from mcp_jitsi_call import constants
from mcp_jitsi_call.pageobjects import CallPage, scripts

from _utils import Answers, FakeDriver, make_page


class TestVisit:
    """Joining waits for APP.conference._room.isJoined()."""

    def test_joined_on_first_poll(self):
        driver = FakeDriver({"isJoined()": True})
        page = make_page(driver, join_timeout=30)

        started = time.monotonic()
        assert page.visit("https://meet.example.com/room") is True
        assert time.monotonic() - started < 5

        assert driver.visited == ["https://meet.example.com/room"]
        assert len(driver.calls("isJoined()")) == 1

    def test_keeps_polling_until_joined(self):
        driver = FakeDriver({"isJoined()": Answers("APP is not defined", False, True)})
        page = make_page(driver, join_timeout=5)

        assert page.visit("https://meet.example.com/room") is True
        assert len(driver.calls("isJoined()")) == 3

    def test_non_boolean_results_time_out_as_failure(self, caplog):
        driver = FakeDriver({"isJoined()": "TypeError: x is undefined"})
        page = make_page(driver)

        with caplog.at_level(logging.DEBUG, logger="mcp_jitsi_call.pageobjects.call_page"):
            assert page.visit("https://meet.example.com/room") is False

        assert "Not joined yet: TypeError: x is undefined" in caplog.text
        assert "Timed out waiting for call page to load" in caplog.text

    @pytest.mark.parametrize("raw", [1, 0, None, [], {"joined": True}])
    def test_other_shapes_never_count_as_joined(self, raw):
        page = make_page(FakeDriver({"isJoined()": raw}), join_timeout=0.1)
        assert page.visit("https://meet.example.com/room") is False

    def test_navigation_failure_skips_join_poll(self):
        driver = FakeDriver({"isJoined()": True})
        driver.get_error = WebDriverException("net::ERR_NAME_NOT_RESOLVED")
        page = make_page(driver)

        assert page.visit("https://nowhere.invalid/room") is False
        assert driver.calls("isJoined()") == []


class TestCounts:

    @pytest.mark.parametrize("raw, expected", [(3, 3), (2.0, 2), (1, 1)])
    def test_num_participants(self, raw, expected):
        page = make_page(FakeDriver({"membersCount": raw}))
        assert page.get_num_participants() == expected

    @pytest.mark.parametrize("raw", ["TypeError: x is undefined", None, True, [2]])
    def test_num_participants_defaults_to_self(self, raw):
        page = make_page(FakeDriver({"membersCount": raw}))
        assert page.get_num_participants() == 1

    def test_jigasi_count(self):
        page = make_page(FakeDriver({"features_jigasi": 2}))
        assert page.num_remote_participants_jigasi() == 2

    def test_jigasi_count_error_is_zero_and_logged(self, caplog):
        page = make_page(FakeDriver({"features_jigasi": "Cannot read properties of undefined"}))
        with caplog.at_level(logging.ERROR):
            assert page.num_remote_participants_jigasi() == 0
        assert "numRemoteParticipantsJigasi" in caplog.text
        assert "Cannot read properties of undefined" in caplog.text

    def test_muted_count(self):
        driver = FakeDriver({"isAudioMuted()": 4})
        page = make_page(driver)
        assert page.num_remote_participants_muted() == 4
        assert len(driver.calls("isVideoMuted()")) == 1

    def test_muted_count_error_is_zero(self, caplog):
        page = make_page(FakeDriver({"isAudioMuted()": False}))
        with caplog.at_level(logging.ERROR):
            assert page.num_remote_participants_muted() == 0
        assert "numRemoteParticipantsMuted" in caplog.text


class TestStats:

    def test_error_string_gives_empty_stats_and_bitrates(self):
        page = make_page(FakeDriver({"getStats()": "TypeError: x is undefined"}))
        assert page.get_stats() == {}
        assert page.get_bitrates() == {}

    def test_bitrates(self):
        stats = {"bitrate": {"upload": 120, "download": 900}, "packetLoss": {"total": 0}}
        page = make_page(FakeDriver({"getStats()": stats}))
        assert page.get_stats() == stats
        assert page.get_bitrates() == {"upload": 120, "download": 900}

    @pytest.mark.parametrize("stats", [{}, {"bitrate": None}, {"bitrate": 12}])
    def test_missing_or_odd_bitrate(self, stats):
        page = make_page(FakeDriver({"getStats()": stats}))
        assert page.get_bitrates() == {}


class TestParticipantTracking:

    def test_inject_tracker(self):
        driver = FakeDriver({"_jibriParticipants = []": True})
        page = make_page(driver)
        assert page.inject_participant_tracker_script() is True
        script, _ = driver.scripts[0]
        assert "xmpp.muc_member_joined" in script

    @pytest.mark.parametrize("raw", ["APP is not defined", None, False])
    def test_inject_tracker_failure(self, raw):
        page = make_page(FakeDriver({"_jibriParticipants = []": raw}))
        assert page.inject_participant_tracker_script() is False

    def test_get_participants(self):
        identities = [{"user": {"id": "abc", "name": "Alice"}}, {"user": {"id": "def"}}]
        page = make_page(FakeDriver({"return window._jibriParticipants": identities}))
        assert page.get_participants() == identities

    def test_get_participants_without_tracker(self):
        # window._jibriParticipants is undefined -> null
        page = make_page(FakeDriver())
        assert page.get_participants() == []


class TestPresence:

    def test_add_to_presence_passes_key_and_value_as_arguments(self):
        driver = FakeDriver()
        page = make_page(driver)
        assert page.add_to_presence("mode", "it's recording") is True
        assert driver.calls("addToPresence") == [("mode", "it's recording")]

    def test_add_to_presence_error(self):
        page = make_page(FakeDriver({"addToPresence": "room is null"}))
        assert page.add_to_presence("mode", "recording") is False

    def test_send_presence(self):
        assert make_page(FakeDriver()).send_presence() is True
        assert make_page(FakeDriver({"sendPresence()": "room is null"})).send_presence() is False


class TestLeave:

    def test_waits_until_alone(self):
        driver = FakeDriver({"_room.leave()": {}, "membersCount": Answers(3, 2, 1)})
        page = make_page(driver, leave_timeout=2)
        assert page.leave() is True
        assert len(driver.calls("membersCount")) == 3

    def test_poll_timeout_does_not_raise(self, caplog):
        driver = FakeDriver({"membersCount": 3})
        page = make_page(driver)
        with caplog.at_level(logging.WARNING):
            assert page.leave() is True
        assert "Still not alone" in caplog.text

    def test_leave_error(self):
        driver = FakeDriver({"_room.leave()": "conference is null", "membersCount": "conference is null"})
        page = make_page(driver)
        assert page.leave() is False


class TestEndpointMessage:

    def test_sent_on_first_attempt(self):
        driver = FakeDriver({"sendEndpointMessage": True})
        task = make_page(driver).send_endpoint_message('{"url": "rtmp://x"}')

        assert task.result(timeout=2) is True
        assert task.attempts_made == 1
        assert driver.calls("sendEndpointMessage") == [('{"url": "rtmp://x"}',)]

    def test_retries_until_sent(self):
        driver = FakeDriver({"sendEndpointMessage": Answers("not joined", "not joined", True)})
        task = make_page(driver).send_endpoint_message("hi")

        assert task.result(timeout=2) is True
        assert task.attempts_made == 3

    def test_gives_up_after_max_attempts_without_raising(self, caplog):
        driver = FakeDriver({"sendEndpointMessage": "APP is not defined"})
        page = make_page(driver, message_attempts=5, message_retry_delay=0.05)

        started = time.monotonic()
        with caplog.at_level(logging.ERROR):
            task = page.send_endpoint_message("hi")
            assert task.result(timeout=5) is False
        elapsed = time.monotonic() - started

        assert task.attempts_made == 5
        assert len(driver.calls("sendEndpointMessage")) == 5
        assert task.error is None
        # four gaps between five attempts
        assert elapsed >= 4 * 0.05
        assert caplog.text.count("Error sending endpoint message: APP is not defined") == 5
        assert "gave up after 5 attempt(s)" in caplog.text

    def test_returns_before_the_send_completes(self):
        release = threading.Event()

        def slow_send(msg):
            release.wait(2)
            return True

        driver = FakeDriver({"sendEndpointMessage": slow_send})
        task = make_page(driver).send_endpoint_message("hi")

        assert task.done() is False
        release.set()
        assert task.result(timeout=2) is True

    def test_cancel_stops_retrying(self):
        driver = FakeDriver({"sendEndpointMessage": "not joined"})
        task = make_page(driver, message_retry_delay=10).send_endpoint_message("hi")

        deadline = time.monotonic() + 2
        while task.attempts_made < 1 and time.monotonic() < deadline:
            time.sleep(0.01)
        task.cancel()

        assert task.wait(2) is True
        assert task.cancelled() is True
        assert task.succeeded is False
        assert len(driver.calls("sendEndpointMessage")) == 1

    def test_driver_failure_ends_task_with_error(self):
        driver = FakeDriver({"sendEndpointMessage": Answers(WebDriverException("chrome not reachable"))})
        task = make_page(driver).send_endpoint_message("hi")

        assert task.result(timeout=2) is False
        assert isinstance(task.error, WebDriverException)


class TestRequestData:

    def test_listener(self):
        driver = FakeDriver({"rtc.endpoint_message_received": True})
        assert make_page(driver).add_request_data_listener() is True

    def test_listener_error(self, caplog):
        page = make_page(FakeDriver({"rtc.endpoint_message_received": "rtc is undefined"}))
        with caplog.at_level(logging.ERROR):
            assert page.add_request_data_listener() is False
        assert "Error adding request data listener: rtc is undefined" in caplog.text

    def test_request_data(self):
        data = ["https://meet.example.com/other", "eyJhbGciOi", "room-1"]
        page = make_page(FakeDriver({"return [window._requestUrl": data}))
        assert page.get_request_data() == data

    def test_request_data_error_has_one_element(self):
        page = make_page(FakeDriver({"return [window._requestUrl": "window is gone"}))
        assert page.get_request_data() == [""]

    @pytest.mark.parametrize("field, global_name", [
        ("url", "_requestUrl"),
        ("jwt", "_requestJWT"),
        ("roomId", "_requestRoomId"),
    ])
    def test_listener_keeps_captured_values_on_empty_fields(self, field, global_name):
        # absent fields are undefined in the page, so a truthiness check is required
        script = scripts.ADD_REQUEST_DATA_LISTENER
        assert f"if (msg.{field}) window.{global_name} = msg.{field};" in script
        assert "!= \"\"" not in script


def test_defaults_come_from_constants():
    page = CallPage(FakeDriver())
    assert page.join_timeout == constants.CALL_JOIN_TIMEOUT_SECS
    assert page.leave_timeout == constants.CALL_LEAVE_TIMEOUT_SECS
    assert page.poll_interval == constants.CALL_POLL_INTERVAL_SECS
    assert page.message_attempts == constants.ENDPOINT_MESSAGE_MAX_ATTEMPTS
    assert page.message_retry_delay == constants.ENDPOINT_MESSAGE_RETRY_DELAY_SECS


def test_driver_errors_propagate_from_sync_operations():
    driver = FakeDriver({"membersCount": Answers(WebDriverException("chrome not reachable"))})
    with pytest.raises(WebDriverException):
        make_page(driver).get_num_participants()

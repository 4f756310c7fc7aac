"""In-call tool implementations."""

import json
import asyncio
from ..context import get_context


async def join_call(url: str) -> str:
    """Load the conference url and wait until the conference is joined."""
    page = get_context().call_page
    joined = page.visit(url)
    payload = {"ok": joined, "action": "join_call", "url": url}
    if not joined:
        payload["error"] = "join_failed"
        payload["num_participants"] = page.get_num_participants()
    return json.dumps(payload)


async def leave_call() -> str:
    page = get_context().call_page
    left = page.leave()
    return json.dumps({
        "ok": left,
        "action": "leave_call",
        "num_participants": page.get_num_participants(),
    })


async def get_call_stats() -> str:
    page = get_context().call_page
    return json.dumps({
        "ok": True,
        "num_participants": page.get_num_participants(),
        "bitrates": page.get_bitrates(),
    }, default=repr)


async def track_participants() -> str:
    installed = get_context().call_page.inject_participant_tracker_script()
    payload = {"ok": installed, "action": "track_participants"}
    if not installed:
        payload["error"] = "tracker_not_installed"
    return json.dumps(payload)


async def get_participants() -> str:
    participants = get_context().call_page.get_participants()
    return json.dumps({"ok": True, "count": len(participants), "participants": participants}, default=repr)


_REMOTE_FILTERS = {
    "jigasi": "num_remote_participants_jigasi",
    "muted": "num_remote_participants_muted",
}


async def count_remote_participants(kind: str = "jigasi") -> str:
    """
    Count remote participants matching a filter: 'jigasi' (SIP gateway
    clients) or 'muted' (audio and video muted).
    """
    method = _REMOTE_FILTERS.get((kind or "").lower())
    if method is None:
        return json.dumps({
            "ok": False,
            "error": "unknown_participant_filter",
            "message": f"kind must be one of {sorted(_REMOTE_FILTERS)}",
        })
    count = getattr(get_context().call_page, method)()
    return json.dumps({"ok": True, "kind": kind.lower(), "count": count})


async def update_presence(key: str, value: str) -> str:
    """Add key/value to the presence and send it."""
    page = get_context().call_page
    added = page.add_to_presence(key, value)
    sent = page.send_presence() if added else False
    payload = {"ok": added and sent, "action": "update_presence", "added": added, "sent": sent}
    if not payload["ok"]:
        payload["error"] = "presence_not_updated"
    return json.dumps(payload)


async def send_endpoint_message(text: str, wait_sec: float = 0) -> str:
    """
    Queue an endpoint text message. With wait_sec > 0, wait that long for
    the retries to finish and report the outcome.
    """
    ctx = get_context()
    task = ctx.call_page.send_endpoint_message(text)
    ctx.track_message(task)

    if wait_sec and wait_sec > 0:
        await asyncio.to_thread(task.wait, wait_sec)

    done = task.done()
    payload = {
        "ok": True,
        "action": "send_endpoint_message",
        "done": done,
        "delivered": task.succeeded if done else None,
        "attempts": task.attempts_made,
    }
    if done and not task.succeeded:
        payload["ok"] = False
        payload["error"] = str(task.error) if task.error else "endpoint_message_not_delivered"
    return json.dumps(payload)


async def listen_for_request_data() -> str:
    installed = get_context().call_page.add_request_data_listener()
    payload = {"ok": installed, "action": "listen_for_request_data"}
    if not installed:
        payload["error"] = "listener_not_installed"
    return json.dumps(payload)


async def get_request_data() -> str:
    data = get_context().call_page.get_request_data()
    # The page object answers [""] when the data could not be read
    if len(data) != 3:
        return json.dumps({"ok": False, "error": "request_data_unavailable", "raw": data})
    url, jwt, room_id = data
    if url is None and jwt is None and room_id is None:
        # window._request* are only defined once the listener is installed
        return json.dumps({"ok": False, "error": "listener_not_installed", "raw": data})
    return json.dumps({"ok": True, "url": url, "jwt": jwt, "room_id": room_id})


__all__ = [
    "join_call",
    "leave_call",
    "get_call_stats",
    "track_participants",
    "get_participants",
    "count_remote_participants",
    "update_presence",
    "send_endpoint_message",
    "listen_for_request_data",
    "get_request_data",
]

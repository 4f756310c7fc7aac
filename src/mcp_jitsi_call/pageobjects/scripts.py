"""
JavaScript snippets run inside the jitsi-meet page.

Every snippet catches its own exceptions and returns e.message instead, so a
failure comes back as a string. Values supplied by the caller are passed as
execute_script arguments (arguments[0], ...).
"""

IS_JOINED = """
try {
    return APP.conference._room.isJoined();
} catch (e) {
    return e.message;
}
"""

MEMBERS_COUNT = """
try {
    return APP.conference.membersCount;
} catch (e) {
    return e.message;
}
"""

GET_STATS = """
try {
    return APP.conference.getStats();
} catch (e) {
    return e.message;
}
"""

INJECT_PARTICIPANT_TRACKER = """
try {
    window._jibriParticipants = [];
    const existingMembers = APP.conference._room.room.members || {};
    const existingMemberJids = Object.keys(existingMembers);
    console.log("There were " + existingMemberJids.length + " existing members");
    existingMemberJids.forEach(jid => {
        const existingMember = existingMembers[jid];
        if (existingMember.identity) {
            console.log("Member ", existingMember, " has identity, adding");
            window._jibriParticipants.push(existingMember.identity);
        } else {
            console.log("Member ", existingMember.jid, " has no identity, skipping");
        }
    });
    APP.conference._room.room.addListener(
        "xmpp.muc_member_joined",
        (from, nick, role, hidden, statsid, status, identity) => {
            console.log("Got MUC_MEMBER_JOINED: ", from, identity);
            if (identity) {
                window._jibriParticipants.push(identity);
            }
        }
    );
    return true;
} catch (e) {
    return e.message;
}
"""

GET_PARTICIPANTS = """
try {
    return window._jibriParticipants;
} catch (e) {
    return e.message;
}
"""

NUM_REMOTE_PARTICIPANTS_JIGASI = """
try {
    return APP.conference._room.getParticipants()
        .filter(participant => participant.getProperty("features_jigasi") == true)
        .length;
} catch (e) {
    return e.message;
}
"""

NUM_REMOTE_PARTICIPANTS_MUTED = """
try {
    return APP.conference._room.getParticipants()
        .filter(participant => participant.isAudioMuted() && participant.isVideoMuted())
        .length;
} catch (e) {
    return e.message;
}
"""

ADD_TO_PRESENCE = """
try {
    APP.conference._room.room.addToPresence(
        arguments[0],
        {
            value: arguments[1]
        }
    );
} catch (e) {
    return e.message;
}
"""

SEND_PRESENCE = """
try {
    APP.conference._room.room.sendPresence();
} catch (e) {
    return e.message;
}
"""

LEAVE = """
try {
    return APP.conference._room.leave();
} catch (e) {
    return e.message;
}
"""

SEND_ENDPOINT_MESSAGE = """
try {
    APP.conference.sendEndpointMessage('', {name: 'endpoint-text-message', text: arguments[0]});
    return true;
} catch (e) {
    return e.message;
}
"""

ADD_REQUEST_DATA_LISTENER = """
try {
    window._requestUrl = "";
    window._requestJWT = "";
    window._requestRoomId = "";
    APP.conference._room.rtc.addListener(
        "rtc.endpoint_message_received",
        (participant, message) => {
            if (message.name == "endpoint-text-message") {
                const msg = JSON.parse(message.text);
                // absent or empty fields keep the previously captured value
                if (msg.url) window._requestUrl = msg.url;
                if (msg.jwt) window._requestJWT = msg.jwt;
                if (msg.roomId) window._requestRoomId = msg.roomId;
            }
        }
    );
    return true;
} catch (e) {
    return e.message;
}
"""

GET_REQUEST_DATA = """
try {
    return [window._requestUrl, window._requestJWT, window._requestRoomId];
} catch (e) {
    return e.message;
}
"""

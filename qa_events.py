"""Push channel: fans every store event out to all connected clients.

Clients connect over Socket.IO. The store publishes through a Broadcaster,
which emits on the app's ``SocketIO`` server to every connected client and
also hands the event to in-process listeners (the demo script and the tests
use those to watch the board without a socket).
"""

import logging
import threading
from typing import Any, Callable, Optional

from flask_socketio import SocketIO

logger = logging.getLogger(__name__)

NEW_QUESTION = "new-question"
NEW_ANSWER = "new-answer"
VOTE_UPDATE = "vote-update"

Listener = Callable[[str, Any], None]


class Broadcaster:
    """Publishes store events and keeps track of connected sessions.

    The lock only guards the session and listener sets; it is never held
    while emitting.
    """

    def __init__(self, socketio: Optional[SocketIO] = None) -> None:
        self.socketio = socketio
        self._sessions = set()
        self._listeners = []
        self._lock = threading.Lock()

    def attach(self, socketio: SocketIO) -> None:
        self.socketio = socketio

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def connected(self, sid: str) -> None:
        with self._lock:
            self._sessions.add(sid)
        logger.info("a user connected %s", sid)

    def disconnected(self, sid: str) -> None:
        with self._lock:
            self._sessions.discard(sid)
        logger.info("user disconnected %s", sid)

    def add_listener(self, listener: Listener) -> Listener:
        with self._lock:
            self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, event: str, payload: Any) -> None:
        """Emit ``event`` to every connected client, then to local listeners."""
        if self.socketio is not None:
            # no ``to``: broadcast to the whole default namespace
            self.socketio.emit(event, payload)
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            listener(event, payload)
        logger.debug("published %s", event)

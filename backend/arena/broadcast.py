from arena.sessions import SessionRegistry


class Broadcaster:
    """Outbound events in the three delivery scopes.

    Uses ``socketio.emit`` rather than the request-bound ``flask_socketio.emit``
    so events can also be sent outside a handler. Delivery is fire-and-forget.
    """

    def __init__(self, socketio, sessions: SessionRegistry, namespace: str = '/'):
        self.socketio = socketio
        self.sessions = sessions
        self.namespace = namespace

    def unicast(self, sid: str, event: str, payload) -> bool:
        if not self.sessions.is_live(sid):
            return False
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)
        return True

    def broadcast_except_sender(self, sid: str, event: str, payload) -> None:
        self.socketio.emit(event, payload, skip_sid=sid, namespace=self.namespace)

    def broadcast_all(self, event: str, payload) -> None:
        self.socketio.emit(event, payload, namespace=self.namespace)

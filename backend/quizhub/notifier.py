import logging

logger = logging.getLogger(__name__)


class PlayerNotifier:
    """Delivers server messages to a single player's live connection."""

    def send(self, player_id, message) -> None:
        raise NotImplementedError


class SocketIONotifier(PlayerNotifier):
    """Emits to the Socket.IO room every connection joins under its own sid.

    Delivery is fire-and-forget: a player who already disconnected simply has
    no room, and emit errors are logged instead of reaching the game engine.
    """

    def __init__(self, socketio, namespace='/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, player_id, message) -> None:
        try:
            self.socketio.emit(message.event, message.to_dict(), to=player_id, namespace=self.namespace)
        except Exception:
            logger.warning(f"[notify-failed] player={player_id} event={message.event}", exc_info=True)

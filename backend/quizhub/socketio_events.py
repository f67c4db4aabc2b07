from flask import current_app, request
from flask_socketio import emit
from quizhub import socketio, get_engine
from quizhub.errors import QuizhubError
from quizhub.services.games.commands import LeaveGameCommand, parse_command


def _get_sid() -> str:
    # request.sid exists in Socket.IO context; it doubles as the player id
    return request.sid  # type: ignore


def handle_connect():
    emit('connected', {'player_id': _get_sid()})


def handle_disconnect(*args):
    # No session recovery: a dropped connection leaves its game
    player_id = _get_sid()
    get_engine().handle(player_id, LeaveGameCommand())
    current_app.logger.info(f"[disconnect] player={player_id}")


def _dispatch(event, data):
    """Run one player command, reporting failures back to that player only."""
    player_id = _get_sid()
    try:
        command = parse_command(event, data)
        get_engine().handle(player_id, command)
    except QuizhubError as exc:
        current_app.logger.info(f"[command-failed] player={player_id} event={event} error={exc.message}")
        emit('error', exc.to_dict())


def handle_join_game(data=None):
    _dispatch('join_game', data)


def handle_pick_answer(data=None):
    _dispatch('pick_answer', data)


def handle_leave_game(data=None):
    _dispatch('leave_game', data)


def handle_create_game(data=None):
    _dispatch('create_game', data)


def handle_change_game_state(data=None):
    _dispatch('change_game_state', data)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the player namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join_game', handle_join_game, namespace=namespace)
    socketio.on_event('pick_answer', handle_pick_answer, namespace=namespace)
    socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
    socketio.on_event('create_game', handle_create_game, namespace=namespace)
    socketio.on_event('change_game_state', handle_change_game_state, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)

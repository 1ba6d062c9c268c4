from flask_socketio import join_room, leave_room, emit
from highscores import socketio
from highscores.api.scores import LEADERBOARD_ROOM


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_watch_leaderboard(data=None):
    # Subscribers receive a leaderboard_update for every accepted score
    join_room(LEADERBOARD_ROOM)
    emit('watching', {'room': LEADERBOARD_ROOM})


def handle_unwatch_leaderboard(data=None):
    leave_room(LEADERBOARD_ROOM)
    emit('unwatched', {'room': LEADERBOARD_ROOM})


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('watch_leaderboard', handle_watch_leaderboard, namespace=namespace)
        socketio.on_event('unwatch_leaderboard', handle_unwatch_leaderboard, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)

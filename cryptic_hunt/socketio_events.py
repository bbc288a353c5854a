from flask_socketio import join_room, leave_room, emit
from cryptic_hunt import socketio
from cryptic_hunt.services.progression import ranking
from cryptic_hunt.services.progression.errors import ValidationError

LEADERBOARD_ROOM = 'leaderboard'


def handle_connect(auth=None):
    emit('connected', {'message': 'Connected to /ws'})


def handle_watch_leaderboard(data=None):
    if data is not None and not isinstance(data, dict):
        emit('error', ValidationError('bad_limit').to_dict())
        return
    try:
        entries = ranking.leaderboard((data or {}).get('limit'))
    except ValidationError as exc:
        emit('error', exc.to_dict())
        return
    join_room(LEADERBOARD_ROOM)
    emit('leaderboard', {'leaderboard': [e.to_dict() for e in entries]})


def handle_unwatch_leaderboard(data=None):
    leave_room(LEADERBOARD_ROOM)
    emit('left', {'room': LEADERBOARD_ROOM})


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'watch_leaderboard': handle_watch_leaderboard,
        'unwatch_leaderboard': handle_unwatch_leaderboard,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace=namespace)

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from cryptic_hunt import socketio
from cryptic_hunt.services.progression import engine, ranking
from cryptic_hunt.socketio_events import LEADERBOARD_ROOM
from cryptic_hunt.utils import request_data

puzzles = Blueprint('puzzles', __name__)


@puzzles.route('/level/<level>', methods=['GET'])
@login_required
def get_level(level):
    return jsonify(engine.get_level(current_user, level))


@puzzles.route('/answer', methods=['POST'])
@login_required
def submit_answer():
    data = request_data()
    result = engine.submit_answer(current_user, data.get('level'), data.get('answer'))
    if result.newly_solved:
        # Watchers refetch the ranking on this signal
        socketio.emit(
            'leaderboard_update',
            {'username': current_user.username, 'level': result.level},
            to=LEADERBOARD_ROOM,
            namespace='/ws',
        )
    return jsonify({'correct': result.correct})


@puzzles.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    entries = ranking.leaderboard(request.args.get('limit'))
    return jsonify({'leaderboard': [e.to_dict() for e in entries]})

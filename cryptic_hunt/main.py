from flask import Blueprint, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from cryptic_hunt.services import accounts
from cryptic_hunt.services.progression import engine
from cryptic_hunt.utils import request_data

main = Blueprint('main', __name__)


def _credentials():
    data = request_data()
    return data.get('username'), data.get('password')


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the cryptic hunt server!'})


@main.route('/api/register', methods=['POST'])
def register():
    username, password = _credentials()
    user = accounts.register(username, password)
    login_user(user, remember=True)
    return jsonify({'ok': True, 'user': user.to_dict()}), 201


@main.route('/api/login', methods=['POST'])
def login():
    username, password = _credentials()
    user = accounts.authenticate(username, password)
    login_user(user, remember=True)
    return jsonify({'ok': True, 'user': user.to_dict()})


@main.route('/api/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'ok': True})


@main.route('/api/me')
@login_required
def me():
    return jsonify(engine.progress_summary(current_user))

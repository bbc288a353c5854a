from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from flask_talisman import Talisman
from sqlalchemy.exc import SQLAlchemyError
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)
talisman = Talisman()
content_security_policy = {
    "default-src": "'self'",
    "script-src": "'self'",
    "style-src": ["'self'", "'unsafe-inline'"],
    "img-src": ["'self'", "data:"],
}

DEMO_USERS = ['demo1', 'demo2', 'demo3']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)
    talisman.init_app(
        flask_app,
        force_https=flask_app.config.get('FORCE_HTTPS', False),
        session_cookie_secure=flask_app.config.get('SESSION_COOKIE_SECURE', False),
        content_security_policy=content_security_policy,
    )

    # Level table is fixed for the lifetime of the process
    from cryptic_hunt.levels import EXTENSION_KEY, load_levels
    flask_app.extensions[EXTENSION_KEY] = load_levels(flask_app.config.get('LEVELS_FILE'))

    from cryptic_hunt.main import main
    flask_app.register_blueprint(main)

    from cryptic_hunt.api.puzzles import puzzles
    flask_app.register_blueprint(puzzles, url_prefix='/api')

    from cryptic_hunt.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from cryptic_hunt.models import User
    from cryptic_hunt.services.progression.errors import ProgressionError, Unauthenticated

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify(Unauthenticated().to_dict()), Unauthenticated.status

    @flask_app.errorhandler(ProgressionError)
    def handle_progression_error(exc):
        return jsonify(exc.to_dict()), exc.status

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc):
        db.session.rollback()
        flask_app.logger.error(f"[store-error] {request.method} {request.path}", exc_info=exc)
        return jsonify({'error': 'server_error'}), 500

    @flask_app.errorhandler(500)
    def handle_internal_error(exc):
        return jsonify({'error': 'server_error'}), 500

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from cryptic_hunt.services.accounts import register
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users through the normal registration path so each
            # one gets its full set of progress rows
            for username in DEMO_USERS:
                register(username, 'password')

            click.echo('Database has been reset and seeded!')

    @click.command('leaderboard')
    @click.option('--limit', default=None, type=click.IntRange(min=1), help='Number of entries to show.')
    def leaderboard_command(limit):
        """Prints the current leaderboard."""
        from cryptic_hunt.services.progression.ranking import leaderboard
        with flask_app.app_context():
            for position, entry in enumerate(leaderboard(limit), start=1):
                click.echo(f"{position:>3}. {entry.username} ({entry.solved_levels})")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(leaderboard_command)

    return flask_app

import re

import click
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from flask_sqlalchemy import SQLAlchemy

from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def parse_origins(raw):
    """Split a comma separated origin list; ``/pattern/`` entries become regexes."""
    origins = []
    for entry in (raw or '').split(','):
        entry = entry.strip()
        if not entry:
            continue
        if len(entry) > 2 and entry.startswith('/') and entry.endswith('/'):
            origins.append(re.compile(entry[1:-1]))
        else:
            origins.append(entry)
    return origins


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = parse_origins(flask_app.config.get('CORS_ORIGINS'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(
        flask_app,
        origins=allowed_origins,
        methods=['GET', 'POST'],
        allow_headers=['Content-Type'],
    )
    socketio_origins = [o.strip() for o in flask_app.config.get('SOCKETIO_CORS_ORIGINS', '*').split(',') if o.strip()]
    socketio.init_app(flask_app, cors_allowed_origins='*' if socketio_origins == ['*'] else socketio_origins)

    from highscores import models  # noqa: F401
    from highscores.services.scores import build_services

    # Secret, strategy and store handle are created once and shared by every request
    flask_app.extensions['highscores'] = build_services(flask_app.config, db, logger=flask_app.logger)

    from highscores.api.scores import scores
    flask_app.register_blueprint(scores)

    from highscores.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    if flask_app.config.get('AUTO_CREATE_TABLES', True):
        with flask_app.app_context():
            db.create_all()

    @click.command('init-db')
    def init_db_command():
        """Creates the scores table if it does not exist."""
        with flask_app.app_context():
            db.create_all()
        click.echo('Scores table is ready.')

    @click.command('sign-score')
    @click.option('--initials', required=True)
    @click.option('--score', required=True, type=int)
    @click.option('--uniqueid', required=True)
    @click.option('--timestamp', required=True, help='DD/MM/YYYY HH:MM:SS')
    def sign_score_command(initials, score, uniqueid, timestamp):
        """Prints the hash a client must send for these fields."""
        verifier = flask_app.extensions['highscores'].verifier
        click.echo(verifier.expected_digest(initials, score, uniqueid, timestamp))

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(sign_score_command)

    return flask_app

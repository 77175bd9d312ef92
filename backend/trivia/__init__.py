from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
import click
from trivia.config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()


def _token_from_header(header_value):
    """Accept both ``<token>`` and ``Bearer <token>`` Authorization values."""
    if not header_value:
        return None
    value = header_value.strip()
    if value.lower().startswith('bearer '):
        value = value[7:].strip()
    return value or None


def reseed_questions(flask_app, seed_data=None):
    from trivia.services import QuestionCatalog, load_seed

    count = QuestionCatalog(db.session).reseed(seed_data if seed_data is not None else load_seed())
    flask_app.logger.info(f"[reseed] loaded {count} questions")
    return count


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', '*'))

    from trivia.routes import main
    flask_app.register_blueprint(main)

    from trivia.api.users import users
    flask_app.register_blueprint(users)

    from trivia.api.highscores import highscores
    flask_app.register_blueprint(highscores)

    from trivia.api.questions import questions
    flask_app.register_blueprint(questions)

    from trivia.errors import AuthError, TriviaError
    from trivia.models import Account
    from trivia.services import AccountService

    @flask_app.errorhandler(TriviaError)
    def handle_trivia_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    # Protected routes authenticate with the access token, not a session cookie
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Account, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        token = _token_from_header(req.headers.get('Authorization'))
        try:
            return AccountService(db.session, bcrypt).authenticate(token)
        except AuthError:
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Login failed, try again'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            reseed_questions(flask_app)
            click.echo('Database has been reset and seeded!')

    @click.command('reset-questions')
    @click.option('--seed', 'seed_path', type=click.Path(exists=True, dir_okay=False), default=None,
                  help='JSON file to load instead of the bundled questions.')
    def reset_questions_command(seed_path):
        """Replaces the question catalog with the seed data."""
        from trivia.services import load_seed
        with flask_app.app_context():
            count = reseed_questions(flask_app, load_seed(seed_path))
            click.echo(f'Loaded {count} questions.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(reset_questions_command)

    if flask_app.config.get('RESET_DATABASE'):
        with flask_app.app_context():
            db.create_all()
            reseed_questions(flask_app)

    return flask_app

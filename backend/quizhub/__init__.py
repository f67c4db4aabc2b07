from flask import Flask, current_app, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def get_engine():
    return current_app.extensions['game_engine']


def get_quiz_store():
    return current_app.extensions['quiz_store']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Game state lives on the app instance, one engine per app
    from quizhub.notifier import SocketIONotifier
    from quizhub.services.games import GameEngine
    from quizhub.services.quizzes import QuizStore, load_seed_quizzes
    quiz_store = QuizStore()
    flask_app.extensions['quiz_store'] = quiz_store
    flask_app.extensions['game_engine'] = GameEngine(
        quiz_store,
        SocketIONotifier(socketio, namespace='/ws'),
        reveal_answers_during_question=flask_app.config.get('REVEAL_ANSWERS_DURING_QUESTION', True),
        score_repeat_answers=flask_app.config.get('SCORE_REPEAT_ANSWERS', True),
    )

    seed_path = flask_app.config.get('QUIZ_SEED_PATH')
    if seed_path:
        loaded = load_seed_quizzes(quiz_store, seed_path)
        flask_app.logger.info(f"[seed] loaded {len(loaded)} quiz(zes) from {seed_path}")

    from quizhub.errors import QuizhubError

    @flask_app.errorhandler(QuizhubError)
    def handle_quizhub_error(exc):
        return jsonify({'error': exc.message}), exc.status_code

    from quizhub.main import main
    flask_app.register_blueprint(main)

    from quizhub.api.quizzes import quizzes
    flask_app.register_blueprint(quizzes, url_prefix='/quizzes')

    from quizhub.api.games import games
    flask_app.register_blueprint(games, url_prefix='/games')

    from quizhub.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('validate-quiz')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def validate_quiz_command(path):
        """Parses a quiz JSON file and prints a summary."""
        from quizhub.services.quizzes import read_quiz_file
        try:
            quiz = read_quiz_file(path)
        except QuizhubError as exc:
            raise click.ClickException(exc.message)
        click.echo(f'{quiz.title}: {len(quiz.questions)} question(s)')
        for question in quiz.questions:
            right = sum(1 for a in question.answers if a.is_right)
            click.echo(f'  [{question.id}] {question.text} ({len(question.answers)} answers, {right} right)')

    flask_app.cli.add_command(validate_quiz_command)

    return flask_app

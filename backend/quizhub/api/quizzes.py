from flask import Blueprint, jsonify, request

from quizhub import get_engine, get_quiz_store

quizzes = Blueprint('quizzes', __name__)


@quizzes.route('', methods=['POST'])
def create_quiz():
    """
    Creates a quiz from {title, questions: [{text, answers: [{text, is_right}]}]}.
    """
    quiz = get_quiz_store().create(request.get_json(silent=True))
    return jsonify(quiz.to_dict()), 201


@quizzes.route('/<string:quiz_id>', methods=['PUT'])
def edit_quiz(quiz_id):
    """
    Replaces the content of an existing quiz. Games already running keep the old version.
    """
    quiz = get_quiz_store().edit(quiz_id, request.get_json(silent=True))
    return jsonify(quiz.to_dict())


@quizzes.route('/<string:quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    return jsonify(get_quiz_store().get(quiz_id).to_dict())


@quizzes.route('/<string:quiz_id>/start', methods=['POST'])
def start_game(quiz_id):
    """
    Starts a game of the quiz without a host; players join it over the socket.
    """
    game = get_engine().start_game(quiz_id)
    return jsonify(game.to_dict()), 201

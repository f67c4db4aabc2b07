from flask import Blueprint, current_app, jsonify, request

from quizhub import get_engine
from quizhub.errors import InvalidPayload

games = Blueprint('games', __name__)


@games.route('/<string:game_id>', methods=['GET'])
def get_game(game_id):
    return jsonify(get_engine().get_game(game_id).to_dict())


@games.route('/<string:game_id>', methods=['POST'])
def update_game(game_id):
    """
    Moves the game to {question_id, state} and pushes the new state to every player.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'payload must be a JSON object'}), 400
    question_id = data.get('question_id')
    state = data.get('state')
    if not all([question_id, state]):
        return jsonify({'error': 'question_id and state are required'}), 400
    game = get_engine().update_game(game_id, str(question_id), state)
    return jsonify(game.to_dict())


@games.route('/<string:game_id>/scores', methods=['GET'])
def get_scores(game_id):
    try:
        limit = int(request.args.get('limit', current_app.config.get('DEFAULT_SCORE_LIMIT', 5)))
    except ValueError:
        raise InvalidPayload('limit must be an integer')
    if limit < 0:
        raise InvalidPayload('limit must not be negative')
    return jsonify(get_engine().get_high_score(game_id, limit).to_dict())

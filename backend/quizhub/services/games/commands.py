"""Commands a connected player can send, and parsing from socket payloads."""
from dataclasses import dataclass

from quizhub.errors import InvalidPayload
from quizhub.models import GameState


@dataclass(frozen=True)
class JoinGameCommand:
    game_id: str
    name: str


@dataclass(frozen=True)
class PickAnswerCommand:
    question_id: str
    answer_id: str


@dataclass(frozen=True)
class LeaveGameCommand:
    pass


@dataclass(frozen=True)
class CreateGameCommand:
    quiz_id: str


@dataclass(frozen=True)
class ChangeGameStateCommand:
    game_id: str
    question_id: str
    state: GameState


def _require(data, *keys):
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidPayload('payload must be a JSON object')
    missing = [k for k in keys if not data.get(k)]
    if missing:
        raise InvalidPayload(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")
    return [str(data[k]) for k in keys]


def parse_command(event, data):
    """Turn a socket event name and its JSON payload into a command."""
    if event == 'join_game':
        game_id, name = _require(data, 'game_id', 'name')
        return JoinGameCommand(game_id=game_id, name=name)
    if event == 'pick_answer':
        question_id, answer_id = _require(data, 'question_id', 'answer_id')
        return PickAnswerCommand(question_id=question_id, answer_id=answer_id)
    if event == 'leave_game':
        return LeaveGameCommand()
    if event == 'create_game':
        quiz_id, = _require(data, 'quiz_id')
        return CreateGameCommand(quiz_id=quiz_id)
    if event == 'change_game_state':
        game_id, question_id, state = _require(data, 'game_id', 'question_id', 'state')
        return ChangeGameStateCommand(game_id=game_id, question_id=question_id,
                                      state=GameState.parse(state))
    raise InvalidPayload(f'Unknown command: {event}')

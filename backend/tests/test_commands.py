import pytest

from quizhub.errors import InvalidPayload
from quizhub.models import GameState
from quizhub.services.games.commands import (
    ChangeGameStateCommand,
    CreateGameCommand,
    JoinGameCommand,
    LeaveGameCommand,
    PickAnswerCommand,
    parse_command,
)


@pytest.mark.parametrize('event, data, expected', [
    ('join_game', {'game_id': 'g1', 'name': 'Alice'}, JoinGameCommand('g1', 'Alice')),
    ('pick_answer', {'question_id': 'q1', 'answer_id': 'a1'}, PickAnswerCommand('q1', 'a1')),
    ('leave_game', None, LeaveGameCommand()),
    ('create_game', {'quiz_id': 'z'}, CreateGameCommand('z')),
    ('change_game_state', {'game_id': 'g1', 'question_id': 'q2', 'state': 'answer'},
     ChangeGameStateCommand('g1', 'q2', GameState.ANSWER)),
])
def test_parse_command(event, data, expected):
    assert parse_command(event, data) == expected


def test_parse_command_missing_fields():
    with pytest.raises(InvalidPayload) as excinfo:
        parse_command('join_game', {'game_id': 'g1'})
    assert 'name is required' in str(excinfo.value)


def test_parse_command_bad_state():
    with pytest.raises(InvalidPayload):
        parse_command('change_game_state', {'game_id': 'g1', 'question_id': 'q1', 'state': 'over'})


def test_parse_command_unknown_event():
    with pytest.raises(InvalidPayload):
        parse_command('shout', {})


@pytest.mark.parametrize('data', [['x'], 'game', 42])
def test_parse_command_rejects_non_object_payload(data):
    with pytest.raises(InvalidPayload) as excinfo:
        parse_command('join_game', data)
    assert 'JSON object' in str(excinfo.value)

from dataclasses import dataclass
from typing import List, Optional

from quizhub.models import Game, GameState, Player, Question
from .scoring import right_answer_ids


@dataclass(frozen=True)
class GameStateMessage:
    event = 'game_state'

    game_id: str
    state: GameState
    quiz_title: str
    current_question: Optional[Question]
    right_answer_ids: Optional[List[str]]
    last_answer_id: Optional[str]

    def to_dict(self):
        return {
            'game_id': self.game_id,
            'state': self.state.value,
            'quiz_title': self.quiz_title,
            'current_question': self.current_question.to_dict() if self.current_question else None,
            'right_answer_ids': self.right_answer_ids,
            'last_answer_id': self.last_answer_id,
        }


@dataclass(frozen=True)
class PlayerJoinedMessage:
    event = 'player_joined'

    player_id: str
    name: str

    def to_dict(self):
        return {'player_id': self.player_id, 'name': self.name}


def build_game_state_message(game: Game, player: Optional[Player] = None,
                             reveal_during_question: bool = True) -> GameStateMessage:
    """Snapshot of a game as seen by one player (or by nobody in particular).

    A current question id that no longer resolves is sent as a null question.
    With reveal_during_question off, right answer ids are only sent once the
    game is in the ANSWER state.
    """
    question = game.current_question
    answer_ids = right_answer_ids(question) if question is not None else None
    if not reveal_during_question and game.state == GameState.QUESTION:
        answer_ids = None
    return GameStateMessage(
        game_id=game.id,
        state=game.state,
        quiz_title=game.quiz.title,
        current_question=question,
        right_answer_ids=answer_ids,
        last_answer_id=player.last_answer_id if player is not None else None,
    )


def player_joined_message(player: Player) -> PlayerJoinedMessage:
    return PlayerJoinedMessage(player_id=player.id, name=player.name)

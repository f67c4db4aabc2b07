import enum
import random
from dataclasses import dataclass, field
from typing import List, Optional

from quizhub.errors import InvalidPayload


def generate_id() -> str:
    """Random hex token used for game ids and for quiz parts created without one."""
    return format(random.getrandbits(32), 'x')


class GameState(str, enum.Enum):
    QUESTION = 'QUESTION'
    ANSWER = 'ANSWER'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidPayload(f'Invalid game state: {value!r}')
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise InvalidPayload(f'Invalid game state: {value!r}') from None


@dataclass
class Answer:
    id: str
    text: str
    is_right: bool = False

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or not data.get('text'):
            raise InvalidPayload('Every answer needs a text')
        is_right = data.get('is_right', False)
        if not isinstance(is_right, bool):
            raise InvalidPayload(f'is_right must be true or false, got {is_right!r}')
        return cls(
            id=str(data.get('id') or generate_id()),
            text=data['text'],
            is_right=is_right,
        )

    def to_dict(self):
        return {'id': self.id, 'text': self.text, 'is_right': self.is_right}


@dataclass
class Question:
    id: str
    text: str
    answers: List[Answer] = field(default_factory=list)

    def find_answer(self, answer_id) -> Optional[Answer]:
        return next((a for a in self.answers if a.id == answer_id), None)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or not data.get('text'):
            raise InvalidPayload('Every question needs a text')
        answers = data.get('answers') or []
        if not isinstance(answers, list):
            raise InvalidPayload('Question answers must be a list')
        return cls(
            id=str(data.get('id') or generate_id()),
            text=data['text'],
            answers=[Answer.from_dict(a) for a in answers],
        )

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
            'answers': [a.to_dict() for a in self.answers],
        }


@dataclass
class Quiz:
    id: str
    title: str
    questions: List[Question] = field(default_factory=list)

    def find_question(self, question_id) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)

    @classmethod
    def from_dict(cls, data, quiz_id=None):
        """Build a quiz from a request payload.

        Questions and answers without an id get a generated one. A quiz must
        have a title and at least one question, since the first question is
        where every game starts.
        """
        if not isinstance(data, dict):
            raise InvalidPayload('Quiz payload must be a JSON object')
        title = data.get('title')
        questions = data.get('questions')
        if not title:
            raise InvalidPayload('Quiz title is required')
        if not isinstance(questions, list) or not questions:
            raise InvalidPayload('A quiz needs at least one question')
        quiz = cls(
            id=str(quiz_id or data.get('id') or generate_id()),
            title=title,
            questions=[Question.from_dict(q) for q in questions],
        )
        question_ids = [q.id for q in quiz.questions]
        if len(set(question_ids)) != len(question_ids):
            raise InvalidPayload('Question ids must be unique within a quiz')
        return quiz

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'questions': [q.to_dict() for q in self.questions],
        }


@dataclass
class Game:
    id: str
    quiz: Quiz
    current_question_id: str
    state: GameState = GameState.QUESTION
    host_id: Optional[str] = None
    player_ids: List[str] = field(default_factory=list)  # unique, join order

    @property
    def current_question(self) -> Optional[Question]:
        return self.quiz.find_question(self.current_question_id)

    def to_dict(self):
        return {
            'id': self.id,
            'quiz': self.quiz.to_dict(),
            'current_question_id': self.current_question_id,
            'state': self.state.value,
            'host_id': self.host_id,
            'player_ids': list(self.player_ids),
        }


@dataclass
class Player:
    id: str
    name: str
    game_id: str
    score: int = 0
    last_question_id: Optional[str] = None
    last_answer_id: Optional[str] = None
    # Questions this player already scored on, only consulted when repeat scoring is off
    scored_question_ids: set = field(default_factory=set)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'game_id': self.game_id,
            'score': self.score,
            'last_question_id': self.last_question_id,
            'last_answer_id': self.last_answer_id,
        }


@dataclass(frozen=True)
class PlayerScore:
    name: str
    score: int

    def to_dict(self):
        return {'name': self.name, 'score': self.score}


@dataclass(frozen=True)
class HighScore:
    scores: List[PlayerScore]

    def to_dict(self):
        return {'scores': [s.to_dict() for s in self.scores]}

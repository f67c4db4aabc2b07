import json
import logging
import os
import threading
from typing import Dict, List, Optional

from quizhub.errors import InvalidPayload, QuizExists, QuizNotFound
from quizhub.models import Quiz

logger = logging.getLogger(__name__)


class QuizStore:
    """In-memory quiz authoring store. Quizzes live as long as the process."""

    def __init__(self):
        self._quizzes: Dict[str, Quiz] = {}
        self._lock = threading.Lock()

    def get(self, quiz_id) -> Quiz:
        with self._lock:
            quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise QuizNotFound(quiz_id)
        return quiz

    def create(self, payload) -> Quiz:
        quiz = Quiz.from_dict(payload)
        with self._lock:
            if quiz.id in self._quizzes:
                raise QuizExists(quiz.id)
            self._quizzes[quiz.id] = quiz
        logger.info(f"[quiz-create] quiz={quiz.id} questions={len(quiz.questions)}")
        return quiz

    def put(self, quiz: Quiz) -> Optional[Quiz]:
        """Store a quiz under its own id, returning the quiz it replaced, if any."""
        with self._lock:
            previous = self._quizzes.get(quiz.id)
            self._quizzes[quiz.id] = quiz
        return previous

    def edit(self, quiz_id, payload) -> Quiz:
        quiz = Quiz.from_dict(payload, quiz_id=quiz_id)
        with self._lock:
            if quiz_id not in self._quizzes:
                raise QuizNotFound(quiz_id)
            # Running games keep the Quiz object they started with
            self._quizzes[quiz_id] = quiz
        logger.info(f"[quiz-edit] quiz={quiz_id} questions={len(quiz.questions)}")
        return quiz


def read_quiz_file(path) -> Quiz:
    with open(path, encoding='utf-8') as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise InvalidPayload(f'{path}: not valid JSON ({exc})') from exc
    return Quiz.from_dict(data)


def load_seed_quizzes(store: QuizStore, path) -> List[Quiz]:
    """Load a quiz JSON file, or every *.json file of a directory, into the store."""
    if os.path.isdir(path):
        files = sorted(
            os.path.join(path, name) for name in os.listdir(path) if name.endswith('.json')
        )
    else:
        files = [path]
    loaded = []
    for file_path in files:
        quiz = read_quiz_file(file_path)
        if store.put(quiz) is not None:
            logger.warning(f"[seed-replace] quiz={quiz.id} from {file_path} replaces an earlier quiz")
        loaded.append(quiz)
    return loaded

import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    PORT = int(os.environ.get('QUIZHUB_PORT', '8080'))
    # Size of the leaderboard when the client does not pass ?limit=
    DEFAULT_SCORE_LIMIT = int(os.environ.get('DEFAULT_SCORE_LIMIT', '5'))
    # False withholds right answer ids while a question is still open
    REVEAL_ANSWERS_DURING_QUESTION = _env_flag('REVEAL_ANSWERS_DURING_QUESTION', True)
    # False awards at most one point per player per question
    SCORE_REPEAT_ANSWERS = _env_flag('SCORE_REPEAT_ANSWERS', True)
    # Optional: directory or single JSON file of quizzes loaded on startup
    QUIZ_SEED_PATH = os.environ.get('QUIZ_SEED_PATH')

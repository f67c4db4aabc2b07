class QuizhubError(Exception):
    """Base class for failures reported back to the caller of a request or command."""

    status_code = 400
    kind = 'error'

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'message': self.message, 'kind': self.kind}


class GameNotFound(QuizhubError):
    status_code = 404
    kind = 'game_not_found'

    def __init__(self, game_id):
        super().__init__(f'Game {game_id} not found')
        self.game_id = game_id


class QuizNotFound(QuizhubError):
    status_code = 404
    kind = 'quiz_not_found'

    def __init__(self, quiz_id):
        super().__init__(f'Quiz {quiz_id} not found')
        self.quiz_id = quiz_id


class PlayerNotFound(QuizhubError):
    status_code = 404
    kind = 'player_not_found'

    def __init__(self, player_id):
        super().__init__(f'Player {player_id} has not joined a game')
        self.player_id = player_id


class GameUpdateError(QuizhubError):
    kind = 'game_update'


class InvalidPayload(QuizhubError):
    kind = 'invalid_payload'


class QuizExists(QuizhubError):
    status_code = 409
    kind = 'quiz_exists'

    def __init__(self, quiz_id):
        super().__init__(f'Quiz {quiz_id} already exists')
        self.quiz_id = quiz_id

import logging
import threading
from typing import Dict, List, Optional, Tuple

from quizhub.errors import GameNotFound, GameUpdateError, PlayerNotFound
from quizhub.models import Game, GameState, HighScore, Player, generate_id
from .commands import (
    ChangeGameStateCommand,
    CreateGameCommand,
    JoinGameCommand,
    LeaveGameCommand,
    PickAnswerCommand,
)
from .messages import build_game_state_message, player_joined_message
from .scoring import apply_pick, rank_players

logger = logging.getLogger(__name__)


class GameEngine:
    """Owns every running game and its players.

    Each game has its own re-entrant lock, held for any mutation of the game
    or of its members; ``_registry_lock`` only guards the two dictionaries.
    Locks are always taken game first, registry second. Messages are collected
    while the game lock is held and sent after it is released.
    """

    def __init__(self, quiz_store, notifier, reveal_answers_during_question=True,
                 score_repeat_answers=True):
        self.quiz_store = quiz_store
        self.notifier = notifier
        self.reveal_answers_during_question = reveal_answers_during_question
        self.score_repeat_answers = score_repeat_answers
        self._games: Dict[str, Game] = {}
        self._players: Dict[str, Player] = {}
        self._game_locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    # ---- registry helpers ----

    def _game_lock(self, game_id) -> threading.RLock:
        with self._registry_lock:
            lock = self._game_locks.get(game_id)
        if lock is None:
            raise GameNotFound(game_id)
        return lock

    def _find_player(self, player_id) -> Optional[Player]:
        with self._registry_lock:
            return self._players.get(player_id)

    def _members(self, game: Game) -> List[Player]:
        # Members without a registry entry are skipped
        with self._registry_lock:
            return [self._players[pid] for pid in game.player_ids if pid in self._players]

    def _message_for(self, game: Game, player: Optional[Player]):
        return build_game_state_message(game, player, self.reveal_answers_during_question)

    def _deliver(self, outbox: List[Tuple[str, object]]) -> None:
        for player_id, message in outbox:
            self.notifier.send(player_id, message)

    # ---- lifecycle ----

    def start_game(self, quiz_id, host_id=None) -> Game:
        quiz = self.quiz_store.get(quiz_id)
        game = Game(
            id=generate_id(),
            quiz=quiz,
            current_question_id=quiz.questions[0].id,
            state=GameState.QUESTION,
            host_id=host_id,
        )
        with self._registry_lock:
            self._game_locks[game.id] = threading.RLock()
            self._games[game.id] = game
        logger.info(f"[start] game={game.id} quiz={quiz.id} host={host_id}")
        if host_id is not None:
            self._deliver([(host_id, self._message_for(game, None))])
        return game

    def get_game(self, game_id) -> Game:
        with self._registry_lock:
            game = self._games.get(game_id)
        if game is None:
            raise GameNotFound(game_id)
        return game

    def update_game(self, game_id, question_id, state) -> Game:
        state = GameState.parse(state)
        game = self.get_game(game_id)
        with self._game_lock(game_id):
            if game.quiz.find_question(question_id) is None:
                raise GameUpdateError(f'Question {question_id} does not belong to game {game_id}')
            game.current_question_id = question_id
            game.state = state
            outbox = [(p.id, self._message_for(game, p)) for p in self._members(game)]
        logger.info(f"[update] game={game_id} question={question_id} state={state.value} notified={len(outbox)}")
        # TODO: drop finished games once a game-over state exists
        self._deliver(outbox)
        return game

    def get_high_score(self, game_id, limit) -> HighScore:
        game = self.get_game(game_id)
        with self._game_lock(game_id):
            return rank_players(self._members(game), limit)

    # ---- player commands ----

    def handle(self, player_id, command) -> None:
        if isinstance(command, JoinGameCommand):
            self.join_game(command.game_id, player_id, command.name)
        elif isinstance(command, PickAnswerCommand):
            self.pick_answer(player_id, command.question_id, command.answer_id)
        elif isinstance(command, LeaveGameCommand):
            self.leave_game(player_id)
        elif isinstance(command, CreateGameCommand):
            self.start_game(command.quiz_id, host_id=player_id)
        elif isinstance(command, ChangeGameStateCommand):
            self.update_game(command.game_id, command.question_id, command.state)
        else:
            raise TypeError(f'Unsupported command: {command!r}')

    def join_game(self, game_id, player_id, name) -> Player:
        game = self.get_game(game_id)
        previous = self._find_player(player_id)
        if previous is not None and previous.game_id != game_id:
            self.leave_game(player_id)
        with self._game_lock(game_id):
            player = Player(id=player_id, name=name, game_id=game_id)
            if player_id not in game.player_ids:
                game.player_ids.append(player_id)
            with self._registry_lock:
                self._players[player_id] = player
            outbox = [(player_id, self._message_for(game, player))]
            if game.host_id is not None:
                outbox.append((game.host_id, player_joined_message(player)))
        logger.info(f"[join] game={game_id} player={player_id} name={name!r}")
        self._deliver(outbox)
        return player

    def pick_answer(self, player_id, question_id, answer_id) -> Player:
        player = self._find_player(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        game = self.get_game(player.game_id)
        with self._game_lock(game.id):
            # The player may have left while we waited for the lock
            player = self._find_player(player_id)
            if player is None or player.game_id != game.id:
                raise PlayerNotFound(player_id)
            scored = apply_pick(player, game.current_question, question_id, answer_id,
                                repeat_scoring=self.score_repeat_answers)
        logger.info(
            f"[pick] game={game.id} player={player_id} question={question_id} answer={answer_id} "
            f"scored={scored} score={player.score}"
        )
        return player

    def leave_game(self, player_id) -> None:
        player = self._find_player(player_id)
        if player is None:
            return
        with self._registry_lock:
            lock = self._game_locks.get(player.game_id)
            game = self._games.get(player.game_id)
        if game is None:
            with self._registry_lock:
                self._players.pop(player_id, None)
            return
        with lock:
            with self._registry_lock:
                current = self._players.get(player_id)
                if current is player:
                    del self._players[player_id]
            # Keep the membership when the player re-joined this game meanwhile
            rejoined = current is not None and current is not player and current.game_id == game.id
            if not rejoined and player_id in game.player_ids:
                game.player_ids.remove(player_id)
        logger.info(f"[leave] game={game.id} player={player_id}")

from typing import Iterable, List, Optional

from quizhub.models import HighScore, Player, PlayerScore, Question


def right_answer_ids(question: Question) -> List[str]:
    """Ids of every answer flagged right. Nothing enforces exactly one."""
    return [a.id for a in question.answers if a.is_right]


def is_right(question: Optional[Question], answer_id) -> bool:
    if question is None:
        return False
    answer = question.find_answer(answer_id)
    return answer is not None and answer.is_right


def apply_pick(player: Player, current_question: Optional[Question], question_id, answer_id,
               repeat_scoring: bool = True) -> bool:
    """Record a player's pick and award a point when it scores.

    The pick is remembered whatever it is. A point is awarded only for the
    right answer to the game's current question; with repeat_scoring off a
    player scores at most once per question.
    """
    player.last_question_id = question_id
    player.last_answer_id = answer_id
    if current_question is None or question_id != current_question.id:
        return False
    if not is_right(current_question, answer_id):
        return False
    if not repeat_scoring:
        if question_id in player.scored_question_ids:
            return False
        player.scored_question_ids.add(question_id)
    player.score += 1
    return True


def rank_players(players: Iterable[Player], limit: int) -> HighScore:
    # sorted() is stable, so equal scores keep join order
    top = sorted(players, key=lambda p: p.score, reverse=True)[:max(0, limit)]
    return HighScore([PlayerScore(p.name, p.score) for p in top])

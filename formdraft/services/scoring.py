from collections.abc import Mapping
from typing import Any

from formdraft.models.forms import FormQuestion, QuizScore
from formdraft.services.progress import check_unique_ids


def is_correct(question: FormQuestion, response: Any) -> bool:
    if isinstance(question.correct_answer, list):
        return isinstance(response, list) and list(response) == question.correct_answer
    return response == question.correct_answer


def score_quiz(responses: Mapping[str, Any], questions: list[FormQuestion]) -> QuizScore:
    """Grade questions that carry both points and a correct answer.

    Parsed questions have no correct answer until an author sets one, so a
    freshly parsed quiz grades nothing.
    """
    check_unique_ids(questions)
    earned = possible = correct = graded = 0
    for q in questions:
        if not q.points or q.correct_answer is None:
            continue
        graded += 1
        possible += q.points
        if is_correct(q, responses.get(q.id)):
            correct += 1
            earned += q.points
    return QuizScore(earned=earned, possible=possible, correct=correct, graded=graded)

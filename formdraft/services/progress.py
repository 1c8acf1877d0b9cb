import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from formdraft.exceptions import InvalidFormError
from formdraft.models.forms import FormQuestion, ProgressResponse

TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


def _is_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str) or not value:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def is_answered(question: FormQuestion, response: Any) -> bool:
    """Whether ``response`` counts as an answer for the question's type."""
    if question.type in ("short_answer", "paragraph"):
        return isinstance(response, str) and response.strip() != ""
    if question.type in ("multiple_choice", "dropdown"):
        return isinstance(response, str) and response != ""
    if question.type == "checkboxes":
        return isinstance(response, list) and len(response) > 0
    if question.type == "file_upload":
        return isinstance(response, (Mapping, bytes))
    if question.type == "date":
        return _is_date(response)
    if question.type == "time":
        return isinstance(response, str) and bool(TIME_RE.match(response))
    return False


def check_unique_ids(questions: list[FormQuestion]) -> None:
    seen = set()
    for q in questions:
        if q.id in seen:
            raise InvalidFormError(f"Duplicate question id '{q.id}'. Ids must be unique within a form.")
        seen.add(q.id)


def summarize_progress(responses: Mapping[str, Any], questions: list[FormQuestion]) -> ProgressResponse:
    """Count answered required questions. Optional questions never affect progress."""
    check_unique_ids(questions)
    required = [q for q in questions if q.required]
    answered = sum(1 for q in required if is_answered(q, responses.get(q.id)))
    if not questions:
        progress = 0
    elif not required:
        progress = 100
    else:
        # Round half up, not to even
        progress = (answered * 200 + len(required)) // (len(required) * 2)
    return ProgressResponse(progress=progress, answered=answered, required=len(required))


def calculate_progress(responses: Mapping[str, Any], questions: list[FormQuestion]) -> int:
    """Completion percentage (0-100) over required questions."""
    return summarize_progress(responses, questions).progress

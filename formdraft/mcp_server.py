from fastmcp import FastMCP
from pydantic import ValidationError

from formdraft.config import get_settings
from formdraft.exceptions import InputTooLargeError, InvalidFormError
from formdraft.models.forms import FormQuestion
from formdraft.services import parser as parser_service
from formdraft.services import progress as progress_service
from formdraft.services import scoring as scoring_service

mcp = FastMCP("Formdraft")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, InputTooLargeError):
        return {"error": "input_too_large", "message": str(e), "action": "Split the text and parse it in parts"}
    if isinstance(e, InvalidFormError):
        return {"error": "invalid_form", "message": str(e)}
    if isinstance(e, ValidationError):
        return {"error": "validation_error", "message": str(e), "action": "Fix the question list and retry"}
    return {"error": "unknown_error", "message": str(e)}


def _load_questions(questions: list[dict]) -> list[FormQuestion]:
    return [FormQuestion.model_validate(q) for q in questions]


@mcp.tool
def forms_parse_questions(text: str) -> dict:
    """Turn pasted text into draft form questions, one per non-blank line.
    Lines like 'Gender? Male, Female' become choice questions; 'Q? A) x B) y' becomes a 1-point quiz question.
    Returned ids are unique across calls so results can be merged into one form."""
    try:
        limit = get_settings().max_input_chars
        if len(text) > limit:
            raise InputTooLargeError(f"Pasted text is {len(text)} characters; the limit is {limit}.")
        questions = parser_service.parse_questions(text, id_factory=parser_service.random_ids())
        return {
            "questions": [q.model_dump(exclude_none=True) for q in questions],
            "count": len(questions),
        }
    except InputTooLargeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def forms_calculate_progress(questions: list[dict], responses: dict) -> dict:
    """Compute completion progress (0-100) over required questions.
    responses maps question id to answer: a string, a list of strings for checkboxes, or an ISO date."""
    try:
        return progress_service.summarize_progress(responses, _load_questions(questions)).model_dump()
    except (InvalidFormError, ValidationError) as e:
        return _handle_mcp_error(e)


@mcp.tool
def forms_score_quiz(questions: list[dict], responses: dict) -> dict:
    """Score quiz answers. Only questions with points and a correct_answer are graded."""
    try:
        return scoring_service.score_quiz(responses, _load_questions(questions)).model_dump()
    except (InvalidFormError, ValidationError) as e:
        return _handle_mcp_error(e)

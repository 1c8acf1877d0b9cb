import logging

from fastapi import APIRouter

from formdraft.config import get_settings
from formdraft.exceptions import InputTooLargeError
from formdraft.models.forms import (
    ParseRequest,
    ParseResponse,
    ProgressRequest,
    ProgressResponse,
    QuizScore,
    ScoreRequest,
)
from formdraft.services import parser as parser_service
from formdraft.services import progress as progress_service
from formdraft.services import scoring as scoring_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["forms"])


def _id_factory():
    if get_settings().id_strategy == "random":
        return parser_service.random_ids()
    return parser_service.sequential_ids()


@router.post("/parse", response_model_exclude_none=True)
def parse_questions(request: ParseRequest) -> ParseResponse:
    limit = get_settings().max_input_chars
    if len(request.text) > limit:
        raise InputTooLargeError(f"Pasted text is {len(request.text)} characters; the limit is {limit}.")
    questions = parser_service.parse_questions(request.text, id_factory=_id_factory())
    logger.info("Parsed %d questions from %d characters", len(questions), len(request.text))
    return ParseResponse(questions=questions, count=len(questions))


@router.post("/progress")
def calculate_progress(request: ProgressRequest) -> ProgressResponse:
    return progress_service.summarize_progress(request.responses, request.questions)


@router.post("/score")
def score_quiz(request: ScoreRequest) -> QuizScore:
    return scoring_service.score_quiz(request.responses, request.questions)

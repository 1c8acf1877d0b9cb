from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

QuestionType = Literal[
    "short_answer",
    "paragraph",
    "multiple_choice",
    "dropdown",
    "checkboxes",
    "file_upload",
    "date",
    "time",
]

CHOICE_TYPES = frozenset({"multiple_choice", "dropdown", "checkboxes"})


class FormQuestion(BaseModel):
    id: str
    type: QuestionType
    question: str = Field(min_length=1)
    options: list[str] | None = None  # Non-empty exactly for CHOICE_TYPES
    required: bool = True
    points: int | None = None  # Quiz scoring metadata
    # Manual authoring only, never produced by the text parser
    correct_answer: str | list[str] | None = None
    feedback: str | None = None

    @model_validator(mode="after")
    def _check_options(self) -> "FormQuestion":
        if self.type in CHOICE_TYPES and not self.options:
            raise ValueError(f"{self.type} question requires at least one option")
        if self.type not in CHOICE_TYPES and self.options:
            raise ValueError(f"{self.type} question cannot carry options")
        return self


class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    questions: list[FormQuestion]
    count: int


class ProgressRequest(BaseModel):
    questions: list[FormQuestion]
    responses: dict[str, Any] = Field(default_factory=dict)


class ProgressResponse(BaseModel):
    progress: int  # 0-100
    answered: int
    required: int


class ScoreRequest(BaseModel):
    questions: list[FormQuestion]
    responses: dict[str, Any] = Field(default_factory=dict)


class QuizScore(BaseModel):
    earned: int
    possible: int
    correct: int
    graded: int  # Questions with both points and a correct answer

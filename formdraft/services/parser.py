"""Heuristic parser that turns pasted free text into draft form questions.

Each non-blank line becomes exactly one question. A line goes through five
stages: segmentation, stem/option splitting, option extraction, type
classification and assembly. Nothing here raises on odd input; the worst
case is a ``short_answer`` question whose text is the line itself.
"""

import itertools
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Callable, Literal

from formdraft.models.forms import FormQuestion, QuestionType

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
Tier = Literal["question_mark", "lettered", "whitespace", "plain"]

ENUMERATION_RE = re.compile(r"^\d+[.)]\s*")
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
QUESTION_MARK_RUN_RE = re.compile(r"\?+")
# A marker must start the text or follow whitespace or a comma
LETTER_MARKER_RE = re.compile(r"(?<![^\s,])[A-D]\)\s*[^\s,]")
OPTION_MARKER_RE = re.compile(r"(?<![^\s,])[A-D]\)")
VALUE_END_RE = re.compile(r"[,\n]")
WHITESPACE_SEPARATOR_RE = re.compile(r"\t| {2,}")
OPTION_DELIMITER_RE = re.compile(r"[,\t]")

PARAGRAPH_KEYWORDS = ("describe", "explain", "elaborate")
RATING_KEYWORDS = ("satisfied", "dissatisfied", "rating")


# --- Identifiers ---

def sequential_ids(prefix: str = "q") -> IdFactory:
    """Counter-backed factory yielding q1, q2, ... Deterministic per instance."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def random_ids() -> IdFactory:
    """uuid4-backed factory, for callers merging several parses into one form."""
    return lambda: uuid.uuid4().hex


# --- Line segmenter ---

def segment_lines(raw_text: str) -> list[str]:
    return [line.strip() for line in LINE_BREAK_RE.split(raw_text or "") if line.strip()]


# --- Stem/option splitter ---

@dataclass(frozen=True)
class SplitLine:
    stem: str
    payload: str
    tier: Tier
    lettered: bool = False


def strip_enumeration(line: str) -> str:
    """Drop a leading "1. " / "2) " prefix, unless nothing would be left."""
    stripped = ENUMERATION_RE.sub("", line, count=1).strip()
    return stripped or line


def split_stem(line: str) -> SplitLine:
    """Separate the question stem from its option payload.

    Tiers are tried in order and the first match wins:
    trailing text after a ``?``, lettered ``A)``-``D)`` markers, a tab or
    a run of two or more spaces, and finally the whole line as the stem.
    A ``?`` payload that opens with a lettered marker ("Capital? A) Paris
    B) Rome") is flagged as lettered so it extracts like a quiz line.
    """
    line = strip_enumeration(line.strip())

    question_marks = QUESTION_MARK_RUN_RE.search(line)
    if question_marks:
        payload = line[question_marks.end():].strip()
        if payload:
            return SplitLine(
                stem=f"{line[:question_marks.start()].strip()}?",
                payload=payload,
                tier="question_mark",
                lettered=bool(LETTER_MARKER_RE.match(payload)),
            )
        return SplitLine(stem=line, payload="", tier="plain")

    marker = LETTER_MARKER_RE.search(line)
    if marker and line[:marker.start()].strip():
        return SplitLine(
            stem=line[:marker.start()].strip(),
            payload=line[marker.start():],
            tier="lettered",
            lettered=True,
        )

    separator = WHITESPACE_SEPARATOR_RE.search(line)
    if separator:
        return SplitLine(
            stem=line[:separator.start()].strip(),
            payload=line[separator.end():],
            tier="whitespace",
        )

    return SplitLine(stem=line, payload="", tier="plain")


# --- Option extractor ---

def extract_options(payload: str, lettered: bool = False) -> list[str]:
    """Tokenize an option payload. Order and duplicates are preserved."""
    if not payload:
        return []
    if lettered:
        markers = list(OPTION_MARKER_RE.finditer(payload))
        ends = [m.start() for m in markers[1:]] + [len(payload)]
        # A value runs to the next marker, comma or newline
        values = [
            VALUE_END_RE.split(payload[marker.end():end], maxsplit=1)[0]
            for marker, end in zip(markers, ends)
        ]
    else:
        values = OPTION_DELIMITER_RE.split(payload)
    return [value.strip() for value in values if value.strip()]


# --- Type classifier ---

def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    applies: Callable[[str, list[str], bool], bool]
    question_type: QuestionType
    points: int | None = None


# Order matters: conditions overlap and the first match wins.
CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "lettered_quiz",
        lambda stem, options, lettered: bool(options) and lettered,
        "multiple_choice",
        points=1,
    ),
    ClassificationRule(
        "open_ended_prompt",
        lambda stem, options, lettered: not options and _contains_any(stem, PARAGRAPH_KEYWORDS),
        "paragraph",
    ),
    ClassificationRule(
        "free_text",
        lambda stem, options, lettered: not options,
        "short_answer",
    ),
    ClassificationRule(
        "rating_scale",
        lambda stem, options, lettered: any(_contains_any(opt, RATING_KEYWORDS) for opt in options),
        "multiple_choice",
    ),
    ClassificationRule(
        "ranges",
        lambda stem, options, lettered: any("years" in opt or "-" in opt for opt in options),
        "dropdown",
    ),
    ClassificationRule(
        "binary_choice",
        lambda stem, options, lettered: len(options) == 2,
        "multiple_choice",
    ),
    ClassificationRule(
        "long_list",
        lambda stem, options, lettered: len(options) > 4,
        "dropdown",
    ),
    ClassificationRule(
        "choice_default",
        lambda stem, options, lettered: True,
        "multiple_choice",
    ),
)


def classify(stem: str, options: list[str], lettered: bool = False) -> ClassificationRule:
    """Return the first rule in CLASSIFICATION_RULES that applies.

    ``choice_default`` always applies, so a rule is always found; it is only
    reached with options because ``free_text`` takes every empty list first.
    """
    return next(rule for rule in CLASSIFICATION_RULES if rule.applies(stem, options, lettered))


# --- Question assembler ---

def assemble_question(
    question_id: str,
    stem: str,
    options: list[str],
    rule: ClassificationRule,
) -> FormQuestion:
    return FormQuestion(
        id=question_id,
        type=rule.question_type,
        question=stem,
        options=options or None,
        required=True,
        points=rule.points,
    )


def parse_questions(raw_text: str, id_factory: IdFactory | None = None) -> list[FormQuestion]:
    """Infer one draft question per non-blank line of ``raw_text``.

    ``id_factory`` defaults to a fresh ``sequential_ids()`` per call, so ids
    are q1..qN and reproducible. Pass ``random_ids()`` when the result will be
    merged with the output of other calls.
    """
    next_id = id_factory or sequential_ids()
    questions = []
    for line in segment_lines(raw_text):
        split = split_stem(line)
        options = extract_options(split.payload, split.lettered)
        rule = classify(split.stem, options, split.lettered)
        logger.debug("tier=%s rule=%s options=%d line=%r", split.tier, rule.name, len(options), line[:80])
        questions.append(assemble_question(next_id(), split.stem, options, rule))
    return questions

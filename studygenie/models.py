"""Pydantic models for study bundles, preferences and generation requests.

Every model is frozen: a bundle is never edited once generated, only created,
loaded and deleted. Field names are snake_case in Python and camelCase on the
wire (Gemini output and the stored JSON records).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

BLANK_MARKER = "_____"
_BLANK_RUN = re.compile(r"_{3,}")

GRADES = tuple(str(g) for g in range(1, 12))


class Subject(str, Enum):
    MATHEMATICS = "Mathematics"
    SCIENCE = "Science"
    ENGLISH = "English"
    URDU = "Urdu"
    SOCIAL_STUDIES = "Social Studies"
    ISLAMIAT = "Islamiat"
    COMPUTER_SCIENCE = "Computer Science"
    GENERAL_KNOWLEDGE = "General Knowledge"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class Flashcard(_Model):
    front: str
    back: str
    explanation: Optional[str] = None


class FillInBlank(_Model):
    sentence: str
    answer: str

    @field_validator("sentence")
    @classmethod
    def _single_blank(cls, value: str) -> str:
        if len(_BLANK_RUN.findall(value)) != 1:
            raise ValueError("sentence must contain exactly one blank")
        return _BLANK_RUN.sub(BLANK_MARKER, value)

    def parts(self) -> tuple[str, str]:
        """Text before and after the blank."""
        before, after = self.sentence.split(BLANK_MARKER, 1)
        return before, after


class TrueFalseQuestion(_Model):
    statement: str
    is_true: bool
    explanation: str


class ScenarioQuestion(_Model):
    scenario: str
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer_index: int = Field(ge=0, le=3)
    explanation: str


class GeneratedBundle(_Model):
    """The structure Gemini is asked to return, before id and timestamp."""

    topic: str
    grade: str
    subject: str
    summary: str
    flashcards: list[Flashcard] = Field(min_length=5, max_length=10)
    fill_in_the_blanks: list[FillInBlank] = Field(min_length=5, max_length=5)
    true_false: list[TrueFalseQuestion] = Field(min_length=5, max_length=5)
    scenarios: list[ScenarioQuestion] = Field(min_length=3, max_length=3)

    @field_validator("grade", mode="before")
    @classmethod
    def _grade_as_text(cls, value):
        # Gemini sometimes answers a STRING field with a bare number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class StudyBundle(GeneratedBundle):
    id: str = Field(min_length=1)
    created_at: int
    subject: Subject

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Preferences(_Model):
    theme: Theme = Theme.DARK
    custom_instruction: str = ""


class GenerationRequest(_Model):
    topic: str
    grade: str
    subject: Subject
    publisher: str = ""

    @field_validator("topic")
    @classmethod
    def _topic_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("topic is required")
        return value

    @field_validator("grade")
    @classmethod
    def _known_grade(cls, value: str) -> str:
        if value not in GRADES:
            raise ValueError(f"grade must be one of {', '.join(GRADES)}")
        return value

"""Interaction state for one displayed study guide.

None of this touches the guide itself; it is rebuilt whenever a different
guide is shown and dropped when the results view goes away.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from studygenie.models import StudyBundle


class Tab(str, Enum):
    SUMMARY = "summary"
    FLASHCARDS = "flashcards"
    PRACTICE = "practice"


class OptionStatus(str, Enum):
    IDLE = "idle"  # nothing selected yet
    CORRECT = "correct"
    INCORRECT = "incorrect"
    MUTED = "muted"


@dataclass
class FlashcardDeck:
    count: int
    index: int = 0
    flipped: bool = False

    def flip(self):
        self.flipped = not self.flipped

    def next(self):
        self.flipped = False
        self.index = (self.index + 1) % self.count

    def previous(self):
        self.flipped = False
        self.index = (self.index - 1) % self.count


@dataclass
class BlankItem:
    revealed: bool = False

    def toggle(self):
        self.revealed = not self.revealed


@dataclass
class TrueFalseItem:
    is_true: bool
    guess: Optional[bool] = None

    @property
    def answered(self):
        return self.guess is not None

    @property
    def is_correct(self):
        return self.answered and self.guess == self.is_true

    def answer(self, guess: bool):
        if not self.answered:
            self.guess = guess

    def reset(self):
        self.guess = None


@dataclass
class ScenarioItem:
    correct_index: int
    option_count: int = 4
    selected: Optional[int] = None

    @property
    def answered(self):
        return self.selected is not None

    def select(self, index: int):
        """Record the first selection only."""
        if self.answered or not 0 <= index < self.option_count:
            return
        self.selected = index

    def option_status(self, index: int) -> OptionStatus:
        if not self.answered:
            return OptionStatus.IDLE
        if index == self.correct_index:
            return OptionStatus.CORRECT
        if index == self.selected:
            return OptionStatus.INCORRECT
        return OptionStatus.MUTED


@dataclass
class BundleViewState:
    bundle_id: str
    deck: FlashcardDeck
    blanks: list[BlankItem] = field(default_factory=list)
    true_false: list[TrueFalseItem] = field(default_factory=list)
    scenarios: list[ScenarioItem] = field(default_factory=list)
    tab: Tab = Tab.SUMMARY

    @classmethod
    def for_bundle(cls, bundle: StudyBundle) -> "BundleViewState":
        return cls(
            bundle_id=bundle.id,
            deck=FlashcardDeck(count=len(bundle.flashcards)),
            blanks=[BlankItem() for _ in bundle.fill_in_the_blanks],
            true_false=[TrueFalseItem(is_true=q.is_true) for q in bundle.true_false],
            scenarios=[
                ScenarioItem(correct_index=s.correct_answer_index, option_count=len(s.options))
                for s in bundle.scenarios
            ],
        )

    def matches(self, bundle: StudyBundle) -> bool:
        return self.bundle_id == bundle.id

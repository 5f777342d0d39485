import copy

import pytest

from studygenie.models import GenerationRequest, StudyBundle, Subject

PAYLOAD = {
    "topic": "Photosynthesis",
    "grade": "5",
    "subject": "Science",
    "summary": "Plants make food from sunlight.\nThey release oxygen.",
    "flashcards": [
        {"front": f"Term {i}", "back": f"Meaning {i}", "explanation": f"Hint {i}"}
        for i in range(6)
    ],
    "fillInTheBlanks": [
        {"sentence": f"Plants need _____ number {i}.", "answer": "light"} for i in range(5)
    ],
    "trueFalse": [
        {"statement": f"Statement {i}", "isTrue": i % 2 == 0, "explanation": f"Because {i}"}
        for i in range(5)
    ],
    "scenarios": [
        {
            "scenario": f"Scenario {i}",
            "question": f"Question {i}?",
            "options": ["A", "B", "C", "D"],
            "correctAnswerIndex": 2,
            "explanation": f"C is right {i}",
        }
        for i in range(3)
    ],
}


class FakeResponse:
    def __init__(self, text):
        self._text = text

    @property
    def text(self):
        if isinstance(self._text, Exception):
            raise self._text
        return self._text


class FakeModel:
    """Stands in for genai.GenerativeModel; records every call."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, contents, **kwargs):
        self.calls.append((contents, kwargs))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.text)


@pytest.fixture
def payload():
    return copy.deepcopy(PAYLOAD)


@pytest.fixture
def request_():
    return GenerationRequest(topic="Photosynthesis", grade="5", subject=Subject.SCIENCE, publisher="Oxford")


def make_bundle(bundle_id="b-1", topic="Photosynthesis", created_at=1_700_000_000_000):
    data = copy.deepcopy(PAYLOAD)
    data.update(id=bundle_id, topic=topic, createdAt=created_at)
    return StudyBundle.model_validate(data)


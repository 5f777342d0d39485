import json
import uuid

import pytest
from google.api_core import exceptions

from conftest import FakeModel
from studygenie import gemini
from studygenie.errors import GenerationFailure
from studygenie.models import BLANK_MARKER, GenerationRequest, Subject


def test_create_study_bundle_stamps_fresh_id_and_timestamp(payload, request_):
    payload["id"] = "model-made-this-up"
    payload["createdAt"] = 1
    model = FakeModel(json.dumps(payload))

    bundle = gemini.create_study_bundle(request_, model=model)

    assert bundle.id != "model-made-this-up"
    uuid.UUID(bundle.id)
    assert bundle.created_at > 1
    assert bundle.subject is Subject.SCIENCE
    assert 5 <= len(bundle.flashcards) <= 10
    assert len(bundle.fill_in_the_blanks) == 5
    assert len(bundle.true_false) == 5
    assert len(bundle.scenarios) == 3


def test_create_study_bundle_requests_structured_json(payload, request_):
    model = FakeModel(json.dumps(payload))
    gemini.create_study_bundle(request_, "Use football examples", model=model)

    (prompt, kwargs), = model.calls
    config = kwargs["generation_config"]
    assert config.response_mime_type == "application/json"
    assert config.response_schema is gemini.BUNDLE_SCHEMA
    assert "Use football examples" in prompt
    assert "Grade 5" in prompt


def test_each_bundle_gets_its_own_id(payload, request_):
    model = FakeModel(json.dumps(payload))
    first = gemini.create_study_bundle(request_, model=model)
    second = gemini.create_study_bundle(request_, model=model)
    assert first.id != second.id


def test_subject_comes_from_request(payload):
    payload["subject"] = "اردو"
    request = GenerationRequest(topic="Ghazal", grade="8", subject=Subject.URDU)
    bundle = gemini.create_study_bundle(request, model=FakeModel(json.dumps(payload)))
    assert bundle.subject is Subject.URDU


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p["flashcards"].__delitem__(slice(1, None)),
        lambda p: p["flashcards"].extend(p["flashcards"]),
        lambda p: p["trueFalse"].pop(),
        lambda p: p["scenarios"][0]["options"].pop(),
        lambda p: p["scenarios"][0].update(correctAnswerIndex=4),
        lambda p: p["fillInTheBlanks"][0].update(sentence="No blank here."),
        lambda p: p.pop("summary"),
    ],
)
def test_shape_mismatch_is_a_generation_failure(payload, request_, mutate):
    mutate(payload)
    with pytest.raises(GenerationFailure):
        gemini.create_study_bundle(request_, model=FakeModel(json.dumps(payload)))


@pytest.mark.parametrize("text", ["", "   ", "not json", '{"topic": "x"', ValueError("blocked")])
def test_missing_or_unparseable_text_fails(request_, text):
    with pytest.raises(GenerationFailure):
        gemini.create_study_bundle(request_, model=FakeModel(text))


def test_fenced_json_is_accepted(payload, request_):
    text = "```json\n" + json.dumps(payload) + "\n```"
    bundle = gemini.create_study_bundle(request_, model=FakeModel(text))
    assert bundle.topic == "Photosynthesis"


def test_blank_markers_are_normalised(payload, request_):
    payload["fillInTheBlanks"][0]["sentence"] = "Leaves are ___ in colour."
    bundle = gemini.create_study_bundle(request_, model=FakeModel(json.dumps(payload)))
    assert bundle.fill_in_the_blanks[0].sentence == f"Leaves are {BLANK_MARKER} in colour."


def test_upstream_error_keeps_its_message(request_):
    model = FakeModel(error=RuntimeError("API key not valid"))
    with pytest.raises(GenerationFailure, match="API key not valid"):
        gemini.create_study_bundle(request_, model=model)


def test_quota_error_gets_friendly_message(request_):
    model = FakeModel(error=exceptions.ResourceExhausted("429 quota"))
    with pytest.raises(GenerationFailure, match="quota exceeded"):
        gemini.create_study_bundle(request_, model=model)


def test_blank_upstream_message_becomes_generic(request_):
    model = FakeModel(error=RuntimeError(""))
    with pytest.raises(GenerationFailure, match=gemini.GENERIC_FAILURE):
        gemini.create_study_bundle(request_, model=model)


def test_upstream_error_is_not_retried(request_):
    model = FakeModel(error=RuntimeError("boom"))
    with pytest.raises(GenerationFailure):
        gemini.create_study_bundle(request_, model=model)
    assert len(model.calls) == 1


def test_bundle_prompt_urdu_mandate_only_for_urdu():
    urdu = GenerationRequest(topic="Ghazal", grade="8", subject=Subject.URDU)
    science = GenerationRequest(topic="Cells", grade="8", subject=Subject.SCIENCE)
    assert "URDU" in gemini.build_bundle_prompt(urdu)
    assert "Urdu" not in gemini.build_bundle_prompt(science)


def test_bundle_prompt_skips_blank_custom_instruction(request_):
    assert "Additional user instructions" not in gemini.build_bundle_prompt(request_, "   ")
    assert "Additional user instructions: Be brief" in gemini.build_bundle_prompt(request_, "Be brief")


def test_solve_question_text_only():
    model = FakeModel("  A long answer.  ")
    answer = gemini.solve_question(Subject.SCIENCE, "5", "Why is the sky blue?", model=model)

    assert answer == "A long answer."
    (contents, kwargs), = model.calls
    assert len(contents) == 1
    assert "Why is the sky blue?" in contents[0]
    assert "generation_config" not in kwargs


def test_solve_question_attaches_image_part():
    model = FakeModel("answer")
    gemini.solve_question(Subject.MATHEMATICS, "7", "", image_bytes=b"jpeg-bytes", model=model)

    (contents, _), = model.calls
    assert contents[1] == {"mime_type": "image/jpeg", "data": b"jpeg-bytes"}


def test_solve_question_urdu_and_custom_instruction():
    model = FakeModel("جواب")
    gemini.solve_question(Subject.URDU, "6", "غزل کیا ہے؟", custom_instruction="Use poems", model=model)
    prompt = model.calls[0][0][0]
    assert "Urdu script" in prompt
    assert "Additional user instructions: Use poems" in prompt


def test_solve_question_empty_text_uses_fallback():
    assert gemini.solve_question(Subject.SCIENCE, "5", "What is mass?", model=FakeModel("")) == gemini.FALLBACK_ANSWER


def test_solve_question_needs_text_or_image():
    model = FakeModel("unused")
    with pytest.raises(GenerationFailure):
        gemini.solve_question(Subject.SCIENCE, "5", "   ", model=model)
    assert model.calls == []


def test_solve_question_upstream_failure():
    with pytest.raises(GenerationFailure, match="network down"):
        gemini.solve_question(Subject.SCIENCE, "5", "Q", model=FakeModel(error=ConnectionError("network down")))

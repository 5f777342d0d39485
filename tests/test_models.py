import pytest
from pydantic import ValidationError

from conftest import make_bundle
from studygenie.models import FillInBlank, GenerationRequest, StudyBundle, Subject


def test_request_strips_topic():
    request = GenerationRequest(topic="  Fractions ", grade="4", subject=Subject.MATHEMATICS)
    assert request.topic == "Fractions"


@pytest.mark.parametrize("topic, grade", [("   ", "4"), ("Fractions", "13"), ("Fractions", "0")])
def test_request_rejects_bad_input(topic, grade):
    with pytest.raises(ValidationError):
        GenerationRequest(topic=topic, grade=grade, subject=Subject.MATHEMATICS)


def test_fill_in_blank_parts():
    item = FillInBlank(sentence="Water boils at _____ degrees.", answer="100")
    assert item.parts() == ("Water boils at ", " degrees.")


def test_fill_in_blank_needs_exactly_one_blank():
    with pytest.raises(ValidationError):
        FillInBlank(sentence="Two _____ blanks _____ here.", answer="x")


def test_bundle_is_immutable():
    bundle = make_bundle()
    with pytest.raises(ValidationError):
        bundle.topic = "Changed"


def test_bundle_record_round_trip():
    bundle = make_bundle("abc")
    assert StudyBundle.model_validate(bundle.to_record()) == bundle


def test_numeric_grade_is_accepted():
    record = make_bundle().to_record()
    record["grade"] = 5
    assert StudyBundle.model_validate(record).grade == "5"

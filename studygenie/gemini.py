from __future__ import annotations

import re
import time
import uuid
from typing import Any, Optional

import google.generativeai as genai
from google.api_core import exceptions
from pydantic import ValidationError

from studygenie import config
from studygenie.errors import GenerationFailure
from studygenie.logging import get_logger
from studygenie.models import GeneratedBundle, GenerationRequest, StudyBundle, Subject

logger = get_logger(__name__)

FALLBACK_ANSWER = "I couldn't generate a detailed answer. Please try again."
GENERIC_FAILURE = "Something went wrong. Please try again."
QUOTA_FAILURE = "Gemini API quota exceeded. Wait a little and try again."


# --- RESPONSE SCHEMA ---
def _string(description: str) -> dict:
    return {"type": "STRING", "description": description}


BUNDLE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "topic": _string("The topic provided by the user"),
        "grade": _string("The grade level"),
        "subject": _string("The subject"),
        "summary": _string("A comprehensive yet simple summary of the topic suitable for the grade level."),
        "flashcards": {
            "type": "ARRAY",
            "description": "Between 5 and 10 flashcards for study.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "front": _string("Question or term on the front"),
                    "back": _string("Answer or definition on the back"),
                    "explanation": _string("Extra context, a mnemonic, or a simple explanation that helps memorize the answer."),
                },
                "required": ["front", "back", "explanation"],
            },
        },
        "fillInTheBlanks": {
            "type": "ARRAY",
            "description": "Exactly 5 fill-in-the-blank exercises.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "sentence": _string("The sentence with a single '_____' standing for the missing word."),
                    "answer": _string("The missing word."),
                },
                "required": ["sentence", "answer"],
            },
        },
        "trueFalse": {
            "type": "ARRAY",
            "description": "Exactly 5 true or false questions.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "statement": _string("The statement to evaluate."),
                    "isTrue": {"type": "BOOLEAN", "description": "Whether the statement is true."},
                    "explanation": _string("Brief explanation of why."),
                },
                "required": ["statement", "isTrue", "explanation"],
            },
        },
        "scenarios": {
            "type": "ARRAY",
            "description": "Exactly 3 scenario-based multiple choice questions.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "scenario": _string("A short real-world scenario related to the topic."),
                    "question": _string("The question based on the scenario."),
                    "options": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": "Exactly 4 possible answers.",
                    },
                    "correctAnswerIndex": {"type": "INTEGER", "description": "The index (0-3) of the correct answer."},
                    "explanation": _string("Why the answer is correct."),
                },
                "required": ["scenario", "question", "options", "correctAnswerIndex", "explanation"],
            },
        },
    },
    "required": ["topic", "grade", "subject", "summary", "flashcards", "fillInTheBlanks", "trueFalse", "scenarios"],
}


# --- MODEL ACCESS ---
def configure(api_key: str) -> None:
    genai.configure(api_key=api_key)


def _build_model() -> genai.GenerativeModel:
    return genai.GenerativeModel(config.model_name())


def _describe(exc: Exception) -> str:
    if isinstance(exc, exceptions.ResourceExhausted):
        return QUOTA_FAILURE
    return str(exc).strip() or GENERIC_FAILURE


def _text_of(response: Any) -> str:
    # .text raises ValueError when the candidate carries no parts (e.g. blocked)
    try:
        return response.text or ""
    except ValueError:
        return ""


def _generate(model: Any, contents: Any, **kwargs: Any) -> str:
    """Single Gemini call. Every upstream error becomes a GenerationFailure."""
    try:
        response = model.generate_content(contents, **kwargs)
    except Exception as e:
        logger.error("Gemini call failed: %s", e)
        raise GenerationFailure(_describe(e)) from e
    return _text_of(response)


def _extra_instructions(custom_instruction: str) -> str:
    if custom_instruction and custom_instruction.strip():
        return f"Additional user instructions: {custom_instruction}"
    return ""


# --- STUDY BUNDLES ---
def build_bundle_prompt(request: GenerationRequest, custom_instruction: str = "") -> str:
    language = f"Ensure the tone and complexity are perfect for Grade {request.grade}."
    if request.subject == Subject.URDU:
        language += (
            "\nCRITICAL INSTRUCTION: Since the subject is Urdu, the ENTIRE OUTPUT MUST BE "
            "GENERATED IN THE URDU LANGUAGE (Urdu script), including every flashcard, "
            "question, option and explanation."
        )
    return f"""
    You are an expert curriculum developer for {request.publisher or "school"} publications.
    Create a study course for a Grade {request.grade} student in the subject of {request.subject.value}.
    The specific topic is: "{request.topic}".

    {language}

    {_extra_instructions(custom_instruction)}

    Generate the following:
    1. A simple summary.
    2. Between 5 and 10 flashcards with explanations.
    3. Exactly 5 fill-in-the-blank sentences, each with exactly one '_____' blank.
    4. Exactly 5 true/false questions.
    5. Exactly 3 scenario-based questions with exactly 4 options each.
    """


def _strip_fences(text: str) -> str:
    match = re.search(r"```(?:json)?\s*(\{.*\})\s*```", text, re.DOTALL)
    return match.group(1) if match else text


def parse_bundle(text: str, request: GenerationRequest) -> StudyBundle:
    """Validate Gemini's JSON against the bundle shape and stamp id/createdAt.

    The result's subject is always the requested Subject member; any id or
    timestamp in the model output is discarded.
    """
    if not text or not text.strip():
        raise GenerationFailure("No response received from Gemini.")
    try:
        generated = GeneratedBundle.model_validate_json(_strip_fences(text.strip()))
    except ValidationError as e:
        logger.error("Study guide did not match the expected structure: %s", e)
        raise GenerationFailure(
            "Gemini returned a study guide in an unexpected format. Please try again."
        ) from e
    return StudyBundle(
        **generated.model_dump(exclude={"subject"}),
        subject=request.subject,
        id=str(uuid.uuid4()),
        created_at=int(time.time() * 1000),
    )


def create_study_bundle(request: GenerationRequest, custom_instruction: str = "", model: Optional[Any] = None) -> StudyBundle:
    model = model or _build_model()
    prompt = build_bundle_prompt(request, custom_instruction)
    logger.info("Generating study guide: topic=%r grade=%s subject=%s", request.topic, request.grade, request.subject.value)
    text = _generate(
        model,
        prompt,
        generation_config=genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=BUNDLE_SCHEMA,
        ),
    )
    bundle = parse_bundle(text, request)
    logger.info("Study guide %s ready with %d flashcards", bundle.id, len(bundle.flashcards))
    return bundle


# --- DEEPMIND TUTOR ---
def build_solve_prompt(subject: Subject, grade: str, question_text: str, custom_instruction: str = "") -> str:
    language = ""
    if subject == Subject.URDU:
        language = "IMPORTANT: Answer extensively in Urdu script. Use clear, educational Urdu."
    question = question_text.strip() or "Solve and explain the problem shown in the attached image."
    return f"""
    You are a highly detailed and helpful tutor.
    Explain the following question or problem in great detail for a Grade {grade} student.
    Subject: {Subject(subject).value}
    Topic/Question: {question}

    {language}

    {_extra_instructions(custom_instruction)}

    Your answer should include:
    1. A detailed explanation of the concept.
    2. Step-by-step reasoning if it's a problem.
    3. Real-world examples or analogies.
    4. A summary of key points to remember.

    Make the response long, thorough, and easy to read.
    """


def solve_question(
    subject: Subject,
    grade: str,
    question_text: str,
    image_bytes: Optional[bytes] = None,
    custom_instruction: str = "",
    model: Optional[Any] = None,
) -> str:
    """Long-form tutoring answer for a typed question and/or a JPEG image."""
    question_text = question_text or ""
    if not question_text.strip() and not image_bytes:
        raise GenerationFailure("Type a question or add an image first.")
    model = model or _build_model()
    parts = [build_solve_prompt(subject, grade, question_text, custom_instruction)]
    if image_bytes:
        parts.append({"mime_type": "image/jpeg", "data": image_bytes})
    logger.info("Solving question: subject=%s grade=%s image=%s", Subject(subject).value, grade, bool(image_bytes))
    text = _generate(model, parts)
    return text.strip() or FALLBACK_ANSWER

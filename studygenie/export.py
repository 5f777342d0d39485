from __future__ import annotations

import html
import re

from studygenie.models import StudyBundle

SEPARATOR = "=" * 48
LETTERS = "ABCD"


def transcript_filename(topic: str) -> str:
    return f"{re.sub(r'[^a-z0-9]', '_', topic, flags=re.IGNORECASE).lower()}_study_guide.txt"


def to_transcript(bundle: StudyBundle) -> str:
    """Plain-text copy of a study guide for download."""
    lines = [
        f"TOPIC: {bundle.topic}",
        f"SUBJECT: {bundle.subject.value} | GRADE: {bundle.grade}",
        SEPARATOR,
        "",
        "[ SUMMARY ]",
        bundle.summary,
        "",
        "[ FLASHCARDS ]",
    ]
    for i, card in enumerate(bundle.flashcards, start=1):
        lines.append(f"{i}. {card.front}")
        lines.append(f"   Answer: {card.back}")
        if card.explanation:
            lines.append(f"   Note: {card.explanation}")
    lines += ["", "[ FILL IN THE BLANKS ]"]
    for i, item in enumerate(bundle.fill_in_the_blanks, start=1):
        lines.append(f"{i}. {item.sentence}")
        lines.append(f"   Answer: {item.answer}")
    lines += ["", "[ TRUE OR FALSE ]"]
    for i, q in enumerate(bundle.true_false, start=1):
        lines.append(f"{i}. {q.statement}")
        lines.append(f"   Answer: {'True' if q.is_true else 'False'} - {q.explanation}")
    lines += ["", "[ SCENARIOS ]"]
    for i, s in enumerate(bundle.scenarios, start=1):
        lines.append(f"{i}. {s.scenario}")
        lines.append(f"   Q: {s.question}")
        for letter, option in zip(LETTERS, s.options):
            lines.append(f"   {letter}) {option}")
        lines.append(f"   Answer: {LETTERS[s.correct_answer_index]} - {s.explanation}")
    return "\n".join(lines) + "\n"


def printable_summary(bundle: StudyBundle, auto_print: bool = True) -> str:
    """Light, print-friendly HTML page holding the summary only."""
    title = html.escape(bundle.topic)
    paragraphs = "".join(
        f"<p>{html.escape(p)}</p>" for p in bundle.summary.split("\n") if p.strip()
    )
    script = "<script>window.onload = function () { window.print(); };</script>" if auto_print else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
  body {{ font-family: Georgia, serif; color: #111; background: #fff; max-width: 720px; margin: 2rem auto; line-height: 1.6; }}
  h1 {{ font-size: 1.8rem; margin-bottom: 0.2rem; }}
  .meta {{ color: #555; font-size: 0.9rem; margin-bottom: 1.5rem; }}
</style>
</head>
<body>
<h1>{title}</h1>
<div class="meta">{html.escape(bundle.subject.value)} &middot; Grade {html.escape(bundle.grade)}</div>
{paragraphs}
{script}
</body>
</html>
"""

# ABOUTME: Tagged result type for interpreting Gemini text responses
# ABOUTME: Walks candidates -> content -> parts -> text and parses the first JSON object in the answer

import json
import re
from dataclasses import dataclass
from typing import Any

# Greedy and spanning newlines: from the first "{" to the last "}".
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True, slots=True)
class NoCandidate:
    """The response carried no candidates at all."""

    reason: str = "No response from AI"


@dataclass(frozen=True, slots=True)
class NoContent:
    """The first candidate had no content object."""

    reason: str = "No content in response"


@dataclass(frozen=True, slots=True)
class NoText:
    """The content had no parts, or none of them carried text."""

    reason: str = "No text in response"


@dataclass(frozen=True, slots=True)
class Unparseable:
    """Text was present but held no parseable JSON object."""

    text: str
    reason: str = "Could not parse JSON response"


@dataclass(frozen=True, slots=True)
class Parsed:
    """The JSON object found in the response text."""

    value: Any


TextResponse = NoCandidate | NoContent | NoText | Unparseable | Parsed


def first_text(response: Any) -> NoCandidate | NoContent | NoText | str:
    """Return the first text segment of the first candidate, or the reason it is missing."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return NoCandidate()

    content = getattr(candidates[0], "content", None)
    if content is None:
        return NoContent()

    for part in getattr(content, "parts", None) or []:
        text = getattr(part, "text", None)
        if text:
            return text

    return NoText()


def extract_json_object(text: str) -> Parsed | Unparseable:
    """Parse the first ``{...}`` span of ``text``."""
    match = _JSON_OBJECT.search(text)
    if not match:
        return Unparseable(text=text)

    try:
        return Parsed(value=json.loads(match.group(0)))
    except json.JSONDecodeError as e:
        return Unparseable(text=text, reason=f"Invalid JSON in response: {e}")


def interpret_text_response(response: Any) -> TextResponse:
    """Classify a ``generate_content`` response.

    Checks run in a fixed order: candidates, content, text, JSON.
    """
    text = first_text(response)
    if not isinstance(text, str):
        return text
    return extract_json_object(text)

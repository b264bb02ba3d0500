from __future__ import annotations

import re

OPENING_FENCE = re.compile(r"\A\s*(?P<fence>`{3,4})(?:markdown|md)[ \t]*(?:\r?\n|\Z)", re.IGNORECASE)


class EmptyGenerationError(ValueError):
    """Raised when a model response has no content once fences are removed."""


def strip_fences(text: str) -> str:
    """Remove a ```markdown wrapper the model may put around its whole answer.

    Only a tagged opening fence on the first line and the matching closing fence
    on the last line are removed, so code blocks inside the body survive. A
    lone fence line counts as an empty answer.
    """
    text = text or ""
    opening = OPENING_FENCE.match(text)
    if opening:
        body = text[opening.end():]
        closing = re.compile(r"(?:\A|\r?\n)" + re.escape(opening.group("fence")) + r"\s*\Z")
        text = closing.sub("", body)
    if not text.strip():
        raise EmptyGenerationError("Generated content is empty")
    return text

"""Text sanitizer for pasted chat messages.

Removes chat-application noise (edit markers, message timestamps, deleted
message and reply artifacts, bullet glyphs) while keeping the line
structure intact: every extractor downstream assumes one datum per line,
and a single blank line separates records.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Applied in order; each is (pattern, replacement).
_NOISE_PATTERNS = [
    # "· Edited" / "Edited" markers
    (re.compile(r"[ \t]*·[ \t]*Edited[ \t]*", re.IGNORECASE), " "),
    (re.compile(r"[ \t]*\bEdited\b[ \t]*", re.IGNORECASE), " "),
    # "6 Jan 2026, 00:54"
    (
        re.compile(
            r"\d{1,2}[ \t]+(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*"
            r"[ \t]+\d{4},[ \t]*\d{2}:\d{2}",
            re.IGNORECASE,
        ),
        "",
    ),
    # "21/12/2025, " message date prefixes (a date followed by a comma)
    (re.compile(r"\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4},[ \t]*"), ""),
    (re.compile(r"deleted[ \t]+a[ \t]+message", re.IGNORECASE), ""),
    # "replied to Sumon" up to the end of the line
    (re.compile(r"replied[ \t]+to[ \t]+[^\n]*", re.IGNORECASE), ""),
    # Bullets and separator glyphs
    (re.compile(r"[·•●▪►➤]"), " "),
]

_HORIZONTAL_WS_RE = re.compile(r"[ \t\u00a0]+")
_BLANK_RUN_RE = re.compile(r"\n(?:[ \t]*\n)+")


def clean_text(text: str) -> str:
    """Strip chat noise from ``text`` while preserving newlines.

    Runs of horizontal whitespace collapse to one space, each line is
    trimmed, and two or more consecutive blank lines collapse to exactly one
    blank line (the record separator).

    Never raises; returns an empty string for empty or non-string input.
    """
    if not text or not isinstance(text, str):
        return ""

    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    for pattern, replacement in _NOISE_PATTERNS:
        cleaned = pattern.sub(replacement, cleaned)

    cleaned = _HORIZONTAL_WS_RE.sub(" ", cleaned)
    cleaned = "\n".join(line.strip() for line in cleaned.split("\n"))
    cleaned = _BLANK_RUN_RE.sub("\n\n", cleaned)
    cleaned = cleaned.strip()

    if cleaned != text:
        logger.debug("Sanitized %d chars -> %d chars", len(text), len(cleaned))
    return cleaned

"""Site-independent HTML text normalization.

These are textual scrubs, not parsers: ``strip_tags`` removes anything between
``<`` and the next ``>``, so literal angle brackets that are not markup can be
lost.
"""

from __future__ import annotations

import re

ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}

ENTITY_RE = re.compile("|".join(re.escape(e) for e in ENTITIES))
TAG_RE = re.compile(r"<[^>]*>")
BR_RE = re.compile(r"<br[^>]*>", re.IGNORECASE)


def decode_entities(text: str) -> str:
    """Replace the fixed entity table in a single pass. Unknown entities pass through."""
    return ENTITY_RE.sub(lambda m: ENTITIES[m.group(0)], text)


def strip_tags(text: str) -> str:
    return TAG_RE.sub("", text)


def br_to_newlines(text: str) -> str:
    return BR_RE.sub("\n", text)


def clean_lines(text: str) -> str:
    """Trim every line and drop the ones left empty."""
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def normalize_fragment(html: str) -> str:
    """Turn a selected markup fragment into plain text lines.

    Tags are stripped before entities are decoded, so an encoded ``&lt;`` can
    never be mistaken for markup.
    """
    text = br_to_newlines(html)
    text = strip_tags(text)
    text = decode_entities(text)
    return clean_lines(text)

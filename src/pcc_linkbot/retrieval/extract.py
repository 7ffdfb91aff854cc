"""Labeled field extraction from tender page HTML.

PCC tender pages lay their data out as label/value table rows, but the
markup is inconsistent between page types, so values are located with a
layered regex match rather than a DOM walk.
"""

import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"[\s\u00a0\u3000]+")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))


def decode_entities(text: str) -> str:
    # Single pass, so "&amp;lt;" decodes to "&lt;" and not "<"
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def strip_tags(text: str) -> str:
    return _TAG_RE.sub(" ", text)


def clean_text(text: str) -> str:
    """
    Normalizes a captured HTML fragment into display text.
    Tags become spaces, entities are decoded and whitespace runs
    (including NBSP and the full-width space) collapse to one space.
    """
    return _WHITESPACE_RE.sub(" ", decode_entities(strip_tags(text))).strip()


def _label_patterns(label: str):
    esc = re.escape(label)
    return [
        # <th>標案名稱</th><td>xxx</td> or <td>標案名稱：</td><td><span>xxx</span></td>
        re.compile(
            r"<t[hd][^>]*>\s*" + esc + r"\s*[:：]?\s*</t[hd]>\s*<t[hd][^>]*>([\s\S]*?)</t[hd]>",
            re.IGNORECASE,
        ),
        # Label and value in the same cell or line: 標案名稱：xxx
        re.compile(esc + r"\s*[:：]\s*([^<\n\r]{1,150})", re.IGNORECASE),
    ]


def extract_labeled_field(html: str, label: str) -> Optional[str]:
    """
    Returns the cleaned value associated with `label`, or None.

    Tries the table-pair form first, then the inline "label: value" form.
    Malformed HTML is treated as plain text, never an error.
    """
    if not html or not label:
        return None

    for pattern in _label_patterns(label):
        m = pattern.search(html)
        if m and m.group(1):
            value = clean_text(m.group(1))
            if value:
                return value
    return None

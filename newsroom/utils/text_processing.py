"""
Text Processing Utilities

Tokenisers used by content analysis. They work on raw article bodies, which
may be markdown or HTML, and never alter the input.
"""

import re
from typing import List

SENTENCE_BOUNDARY = re.compile(r'[.!?]+')
PARAGRAPH_BOUNDARY = re.compile(r'\n\s*\n')


def split_sentences(text: str) -> List[str]:
    """Split on runs of terminal punctuation, dropping blank fragments."""
    if not text:
        return []
    return [s for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


def split_paragraphs(text: str) -> List[str]:
    """Split on blank lines (lines that are empty or whitespace only)."""
    if not text:
        return []
    return [p for p in PARAGRAPH_BOUNDARY.split(text) if p.strip()]


def split_words(text: str) -> List[str]:
    if not text:
        return []
    return text.split()

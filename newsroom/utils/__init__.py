# newsroom/utils/__init__.py
"""Utility functions package."""

from newsroom.utils.numbers import round_half_up
from newsroom.utils.text_processing import (
    split_sentences,
    split_paragraphs,
    split_words,
)

__all__ = [
    'round_half_up',
    'split_sentences',
    'split_paragraphs',
    'split_words',
]

"""
Sentence analysis: word, vowel and consonant counts.

Pure functions, no I/O. Words are maximal runs of non-whitespace, where
whitespace is the Unicode White_Space set (the ASCII information separators
U+001C..U+001F are not whitespace here, unlike str.split()). Only Unicode
letters are classified; a letter is a vowel when its single-character
lowercase mapping is one of a/e/i/o/u, otherwise a consonant. Digits,
punctuation, symbols and whitespace count toward neither.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

VOWELS = frozenset("aeiou")

_WHITESPACE = re.compile(r"[^\S\x1c-\x1f]+")


@dataclass(frozen=True)
class AnalyzeResult:
    """Counts for one sentence; sentence is echoed back to the client."""

    words: int
    vowels: int
    consonants: int
    sentence: str = ""


def count_words(sentence: str) -> int:
    return sum(1 for word in _WHITESPACE.split(sentence) if word)


def _lower(ch: str) -> str:
    # str.lower() can expand a letter ("İ" -> "i" + U+0307); keep the base letter.
    return ch.lower()[:1]


def count_letters(sentence: str) -> tuple[int, int]:
    """Return (vowels, consonants) over the letters of sentence."""
    vowels = 0
    consonants = 0
    for ch in sentence:
        if not ch.isalpha():
            continue
        if _lower(ch) in VOWELS:
            vowels += 1
        else:
            consonants += 1
    return vowels, consonants


def analyze(sentence: str) -> AnalyzeResult:
    """
    Analyze a sentence. Total over all strings.

    >>> analyze("Hello, world!")
    AnalyzeResult(words=2, vowels=3, consonants=7, sentence='Hello, world!')
    """
    vowels, consonants = count_letters(sentence)
    return AnalyzeResult(
        words=count_words(sentence),
        vowels=vowels,
        consonants=consonants,
        sentence=sentence,
    )

"""
Guess Evaluator - Pure functions over a target word.

No state, no side effects: the same inputs always give the same outputs,
so rounds can be replayed from their attempt log.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import InvalidInput


@dataclass(frozen=True)
class LetterEvaluation:
    """Result of checking one letter against the word."""
    matches: bool
    positions: frozenset[int]


def normalize_letter(letter: str) -> str:
    """Upper-case a single alphabetic character, or raise InvalidInput."""
    if not isinstance(letter, str):
        raise InvalidInput("Letter must be a string")
    candidate = letter.strip()
    if len(candidate) != 1 or not candidate.isalpha():
        raise InvalidInput(f"Guess must be exactly one letter, got {letter!r}")
    upper = candidate.upper()
    # Letters such as "ß" have no single-character upper-case form.
    return upper if len(upper) == 1 else candidate


def normalize_word(word: str) -> str:
    """Upper-case a word made only of letters, or raise InvalidInput."""
    if not isinstance(word, str):
        raise InvalidInput("Word must be a string")
    candidate = word.strip()
    if not candidate:
        raise InvalidInput("Word must not be empty")
    if not candidate.isalpha():
        raise InvalidInput(f"Word must contain only letters, got {word!r}")
    return candidate.upper()


def evaluate_letter(word: str, letter: str) -> LetterEvaluation:
    """Return whether `letter` occurs in `word` and at which positions."""
    target = word.upper()
    guessed = normalize_letter(letter)
    positions = frozenset(i for i, ch in enumerate(target) if ch == guessed)
    return LetterEvaluation(matches=bool(positions), positions=positions)


def evaluate_word(word: str, guess: str) -> bool:
    """Case-insensitive exact match of a whole-word guess."""
    return word.strip().upper() == guess.strip().upper()


def is_fully_revealed(word: str, revealed_positions: set[int] | frozenset[int]) -> bool:
    return all(i in revealed_positions for i in range(len(word)))


def mask_word(word: str, revealed_positions: set[int] | frozenset[int], placeholder: str = "_") -> str:
    """
    Render the word as players see it mid-round.

    WOLF with {1} revealed -> "_ O _ _"
    """
    return " ".join(
        ch if i in revealed_positions else placeholder
        for i, ch in enumerate(word)
    )

"""
Captcha challenge generation and verification.

Challenges come from four families picked uniformly at random: small
arithmetic, letter arithmetic (A=1 .. H=8), word-pattern riddles and
sequence completion. The last two are drawn from fixed catalogs.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptchaChallenge:
    """A question shown to the user and the answer expected back."""

    question: str
    answer: str
    family: str


LETTER_VALUES: Dict[str, int] = {
    "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6, "G": 7, "H": 8,
}

WORD_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("What comes next in: RED, BLUE, GREEN, ?", "RED"),
    ("Complete the pattern: CAT, BAT, HAT, ?", "RAT"),
    ("What letter comes before P in the alphabet?", "O"),
    ("Spell HELLO backwards:", "OLLEH"),
    ("First letter of the word SECURITY:", "S"),
    ("How many letters are in FORM?", "4"),
    ("What's the 3rd letter of APPLE?", "P"),
    ("Complete: SUN, SON, SIN, ?", "SEN"),
)

SEQUENCES: Tuple[Tuple[str, str], ...] = (
    ("Next in sequence: 2, 4, 6, ?", "8"),
    ("Next in sequence: A, C, E, ?", "G"),
    ("Complete: MON, TUE, WED, ?", "THU"),
    ("Next: JAN, FEB, MAR, ?", "APR"),
    ("Pattern: 1, 1, 2, 3, 5, ?", "8"),
    ("Sequence: Z, Y, X, ?", "W"),
)


class CaptchaService:
    """
    Generates captcha challenges and checks answers.

    Pure apart from the random source, which can be injected for
    reproducible tests.
    """

    FAMILIES = ("arithmetic", "letter_arithmetic", "word_pattern", "sequence")

    # Operand bounds
    MAX_OPERAND = 15
    MAX_FACTOR = 6

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize CaptchaService.

        Args:
            rng: Random source; a fresh random.Random() when omitted
        """
        self._rng = rng or random.Random()
        self._generators: Dict[str, Callable[[], CaptchaChallenge]] = {
            "arithmetic": self.generate_arithmetic,
            "letter_arithmetic": self.generate_letter_arithmetic,
            "word_pattern": self.generate_word_pattern,
            "sequence": self.generate_sequence,
        }

    def generate(self) -> CaptchaChallenge:
        """Generate a challenge from a randomly chosen family."""
        family = self._rng.choice(self.FAMILIES)
        challenge = self._generators[family]()
        logger.debug(f"Generated {family} captcha challenge")
        return challenge

    def generate_arithmetic(self) -> CaptchaChallenge:
        """Addition, subtraction or multiplication over small integers."""
        operation = self._rng.choice(("+", "-", "*"))

        if operation == "*":
            left = self._rng.randint(1, self.MAX_FACTOR)
            right = self._rng.randint(1, self.MAX_FACTOR)
            return CaptchaChallenge(
                question=f"{left} × {right} = ?",
                answer=str(left * right),
                family="arithmetic",
            )

        first = self._rng.randint(1, self.MAX_OPERAND)
        second = self._rng.randint(1, self.MAX_OPERAND)

        if operation == "+":
            return CaptchaChallenge(
                question=f"{first} + {second} = ?",
                answer=str(first + second),
                family="arithmetic",
            )

        # Larger operand first so the answer is never negative
        larger, smaller = max(first, second), min(first, second)
        return CaptchaChallenge(
            question=f"{larger} - {smaller} = ?",
            answer=str(larger - smaller),
            family="arithmetic",
        )

    def generate_letter_arithmetic(self) -> CaptchaChallenge:
        """Arithmetic over letters, where A=1 through H=8."""
        letters = tuple(LETTER_VALUES)
        first = self._rng.choice(letters)
        second = self._rng.choice(letters)
        operation = self._rng.choice(("+", "-"))

        if operation == "+":
            result = LETTER_VALUES[first] + LETTER_VALUES[second]
        else:
            if LETTER_VALUES[first] < LETTER_VALUES[second]:
                first, second = second, first
            result = LETTER_VALUES[first] - LETTER_VALUES[second]

        return CaptchaChallenge(
            question=f"If A=1, B=2, C=3... what is {first} {operation} {second}?",
            answer=str(result),
            family="letter_arithmetic",
        )

    def generate_word_pattern(self) -> CaptchaChallenge:
        question, answer = self._rng.choice(WORD_PATTERNS)
        return CaptchaChallenge(question=question, answer=answer, family="word_pattern")

    def generate_sequence(self) -> CaptchaChallenge:
        question, answer = self._rng.choice(SEQUENCES)
        return CaptchaChallenge(question=question, answer=answer, family="sequence")

    @staticmethod
    def verify(user_answer: Optional[str], expected_answer: str) -> bool:
        """
        Check a user's answer.

        Comparison is case-insensitive and ignores surrounding whitespace.
        """
        if user_answer is None:
            return False
        return user_answer.strip().upper() == expected_answer.strip().upper()

"""Unit tests for captcha generation and verification."""

import random
import re

import pytest

from app.services.captcha import CaptchaService
from app.services.captcha.captcha_service import LETTER_VALUES, SEQUENCES, WORD_PATTERNS


ARITHMETIC = re.compile(r"^(\d+) ([+\-×]) (\d+) = \?$")


@pytest.fixture
def service():
    return CaptchaService(rng=random.Random(1234))


# ─────────────────────────────────────────────────────────────────
# generate_arithmetic
# ─────────────────────────────────────────────────────────────────


class TestGenerateArithmetic:
    def test_thousand_challenges_verify(self, service):
        for _ in range(1000):
            challenge = service.generate_arithmetic()
            assert service.verify(challenge.answer, challenge.answer)
            assert not service.verify(challenge.answer + "x", challenge.answer)

    def test_answers_match_questions(self, service):
        for _ in range(1000):
            challenge = service.generate_arithmetic()
            match = ARITHMETIC.match(challenge.question)
            assert match, challenge.question

            left, op, right = int(match.group(1)), match.group(2), int(match.group(3))
            expected = {"+": left + right, "-": left - right, "×": left * right}[op]
            assert challenge.answer == str(expected)

    def test_subtraction_never_negative(self, service):
        for _ in range(1000):
            challenge = service.generate_arithmetic()
            assert int(challenge.answer) >= 0

    def test_operand_bounds(self, service):
        for _ in range(500):
            challenge = service.generate_arithmetic()
            match = ARITHMETIC.match(challenge.question)
            left, op, right = int(match.group(1)), match.group(2), int(match.group(3))
            limit = CaptchaService.MAX_FACTOR if op == "×" else CaptchaService.MAX_OPERAND
            assert 1 <= left <= limit
            assert 1 <= right <= limit


# ─────────────────────────────────────────────────────────────────
# Other families
# ─────────────────────────────────────────────────────────────────


class TestOtherFamilies:
    def test_letter_arithmetic_uses_letter_values(self, service):
        pattern = re.compile(r"what is ([A-H]) ([+-]) ([A-H])\?$")
        for _ in range(200):
            challenge = service.generate_letter_arithmetic()
            first, op, second = pattern.search(challenge.question).groups()
            a, b = LETTER_VALUES[first], LETTER_VALUES[second]
            assert challenge.answer == str(a + b if op == "+" else a - b)
            assert int(challenge.answer) >= 0

    def test_word_pattern_from_fixed_table(self, service):
        challenge = service.generate_word_pattern()
        assert (challenge.question, challenge.answer) in WORD_PATTERNS
        assert challenge.family == "word_pattern"

    def test_sequence_from_fixed_table(self, service):
        challenge = service.generate_sequence()
        assert (challenge.question, challenge.answer) in SEQUENCES

    def test_generate_covers_every_family(self, service):
        families = {service.generate().family for _ in range(400)}
        assert families == set(CaptchaService.FAMILIES)


# ─────────────────────────────────────────────────────────────────
# verify
# ─────────────────────────────────────────────────────────────────


class TestVerify:
    def test_ignores_case_and_whitespace(self):
        assert CaptchaService.verify("  bird ", "BIRD")

    def test_wrong_answer(self):
        assert not CaptchaService.verify("13", "12")

    def test_missing_answer(self):
        assert not CaptchaService.verify(None, "12")
        assert not CaptchaService.verify("", "12")

"""
Profile validation: the guard in front of the generation workflow.

``check_profile`` is the pure rule set. ``ProfileValidator`` adds the one
piece of state the form needs, the current captcha challenge, which is
replaced every time an answer is checked so an answer is only ever good once.
"""

import random
import re

from pydantic import BaseModel, ConfigDict, Field

from temporal_mixology.domain.errors import (
    AgeRestricted,
    FailedVerification,
    MissingRequiredSelection,
    MissingRequiredText,
)
from temporal_mixology.domain.models import AgeGroup, UserProfile

CAPTCHA_MIN = 1
CAPTCHA_MAX = 10


class CaptchaChallenge(BaseModel):
    """A simple "a + b = ?" question."""

    model_config = ConfigDict(frozen=True)

    first: int = Field(..., ge=CAPTCHA_MIN, le=CAPTCHA_MAX)
    second: int = Field(..., ge=CAPTCHA_MIN, le=CAPTCHA_MAX)

    @property
    def expected(self) -> int:
        return self.first + self.second

    @property
    def question(self) -> str:
        return f"{self.first} + {self.second} = ?"

    @classmethod
    def issue(cls, rng: random.Random) -> "CaptchaChallenge":
        return cls(
            first=rng.randint(CAPTCHA_MIN, CAPTCHA_MAX),
            second=rng.randint(CAPTCHA_MIN, CAPTCHA_MAX),
        )


# Leading whitespace, optional sign, ASCII digits; the rest is ignored ("7abc" is 7)
LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_answer(given: str | int | None) -> int | None:
    if isinstance(given, int):
        return given
    if given is None:
        return None
    match = LEADING_INTEGER.match(given)
    return int(match.group(1)) if match else None


def check_fields(profile: UserProfile) -> None:
    """Age gate, required selections, then required text."""
    if profile.age_group is AgeGroup.UNDERAGE:
        raise AgeRestricted()
    if profile.age_group is None or profile.zodiac is None or profile.mbti is None:
        raise MissingRequiredSelection()
    if not profile.name.strip() or not profile.mood.strip():
        raise MissingRequiredText()


def check_profile(
    profile: UserProfile,
    captcha_expected: int,
    captcha_given: str | int | None,
) -> UserProfile:
    """Validate ``profile``, raising on the first rule it breaks.

    Returns the profile unchanged on success.
    """
    check_fields(profile)
    if _parse_answer(captcha_given) != captcha_expected:
        raise FailedVerification()
    return profile


class ProfileValidator:
    """Owns the live captcha challenge for one form instance."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self.challenge = CaptchaChallenge.issue(self._rng)

    def validate(self, profile: UserProfile, captcha_given: str | int | None) -> UserProfile:
        """Check ``profile`` against the current challenge.

        Once the captcha step is reached the challenge is replaced, whether
        the answer was right or wrong.
        """
        check_fields(profile)
        expected = self.challenge.expected
        self.challenge = CaptchaChallenge.issue(self._rng)
        return check_profile(profile, expected, captcha_given)

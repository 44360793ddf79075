import random

import pytest

from temporal_mixology.domain.errors import (
    AgeRestricted,
    FailedVerification,
    MissingRequiredSelection,
    MissingRequiredText,
)
from temporal_mixology.domain.models import AgeGroup, UserProfile
from temporal_mixology.domain.validation import CaptchaChallenge, ProfileValidator, check_profile


class ScriptedRandom:
    def __init__(self, *values: int) -> None:
        self.values = list(values)

    def randint(self, a: int, b: int) -> int:
        return self.values.pop(0)


@pytest.mark.parametrize(
    "overrides",
    (
        {},
        {"name": "", "mood": ""},
        {"mbti": None, "zodiac": None},
    ),
)
def test_underage_is_always_restricted(profile: UserProfile, overrides: dict) -> None:
    underage = profile.model_copy(update={"age_group": AgeGroup.UNDERAGE, **overrides})
    with pytest.raises(AgeRestricted):
        check_profile(underage, 5, "5")


@pytest.mark.parametrize("field", ("age_group", "zodiac", "mbti"))
def test_missing_selection(profile: UserProfile, field: str) -> None:
    with pytest.raises(MissingRequiredSelection):
        check_profile(profile.model_copy(update={field: None}), 5, "5")


def test_blank_selection_is_unset() -> None:
    profile = UserProfile(name="Ada", age_group="", mbti="INTJ", zodiac="Leo", mood="ok")
    assert profile.age_group is None
    with pytest.raises(MissingRequiredSelection):
        check_profile(profile, 5, "5")


@pytest.mark.parametrize("field", ("name", "mood"))
def test_whitespace_text_is_missing(profile: UserProfile, field: str) -> None:
    with pytest.raises(MissingRequiredText):
        check_profile(profile.model_copy(update={field: "   "}), 5, "5")


@pytest.mark.parametrize(
    "given,ok",
    (
        ("7", True),
        (" 7 ", True),
        (7, True),
        ("7abc", True),
        ("+7", True),
        ("8", False),
        ("seven", False),
        ("", False),
        (None, False),
        ("abc7", False),
        ("0_7", False),
    ),
)
def test_captcha_answer(profile: UserProfile, given, ok: bool) -> None:
    if ok:
        assert check_profile(profile, 7, given) is profile
    else:
        with pytest.raises(FailedVerification):
            check_profile(profile, 7, given)


def test_challenge_operands_in_range() -> None:
    rng = random.Random(42)
    for _ in range(200):
        challenge = CaptchaChallenge.issue(rng)
        assert 1 <= challenge.first <= 10
        assert 1 <= challenge.second <= 10
        assert challenge.expected == challenge.first + challenge.second


def test_failed_captcha_issues_new_challenge(profile: UserProfile) -> None:
    validator = ProfileValidator(ScriptedRandom(3, 4, 9, 9, 1, 1))
    assert validator.challenge.question == "3 + 4 = ?"

    with pytest.raises(FailedVerification):
        validator.validate(profile, "6")

    assert (validator.challenge.first, validator.challenge.second) == (9, 9)
    # The old answer is no longer accepted
    with pytest.raises(FailedVerification):
        validator.validate(profile, "7")
    assert validator.challenge.expected == 2


def test_successful_captcha_is_single_use(profile: UserProfile) -> None:
    validator = ProfileValidator(ScriptedRandom(3, 4, 2, 2, 5, 5))
    assert validator.validate(profile, "7") is profile
    assert validator.challenge.expected == 4
    with pytest.raises(FailedVerification):
        validator.validate(profile, "7")
    assert validator.challenge.expected == 10


def test_field_errors_keep_challenge(profile: UserProfile) -> None:
    validator = ProfileValidator(ScriptedRandom(3, 4))
    with pytest.raises(MissingRequiredText):
        validator.validate(profile.model_copy(update={"name": ""}), "7")
    assert validator.challenge.expected == 7

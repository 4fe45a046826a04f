import pytest

from app.agent.errors import ErrorClass, ProfileValidationError
from app.agent.profile_validator import validate_profile_request
from app.tests.utils import SAMPLE_PROFILE


def test_valid_profile_defaults_to_professional_style():
    request = validate_profile_request(SAMPLE_PROFILE)

    assert request.profile_text == SAMPLE_PROFILE
    assert request.style == "professional"


def test_style_is_normalized():
    assert validate_profile_request(SAMPLE_PROFILE, " CASUAL ").style == "casual"
    assert validate_profile_request(SAMPLE_PROFILE, "").style == "professional"


def test_unknown_style_is_rejected():
    with pytest.raises(ProfileValidationError, match="Style must be one of"):
        validate_profile_request(SAMPLE_PROFILE, "sarcastic")


@pytest.mark.parametrize("text", ["", "abcdefghi"])
def test_too_short_text_is_rejected(text):
    with pytest.raises(ProfileValidationError, match="at least 10 characters") as exc_info:
        validate_profile_request(text)
    assert exc_info.value.error_class is ErrorClass.VALIDATION_ERROR


def test_surrounding_whitespace_counts_toward_length_and_is_stripped():
    request = validate_profile_request("   short   ")

    assert request.profile_text == "short"


def test_too_long_text_is_rejected():
    with pytest.raises(ProfileValidationError, match="at most 5000 characters"):
        validate_profile_request("word " * 1001)


def test_max_length_text_is_accepted():
    text = ("abcd " * 1000).strip() + "e"
    assert len(text) == 5000
    assert validate_profile_request(text).profile_text == text


def test_repeated_characters_are_rejected():
    with pytest.raises(ProfileValidationError, match="repeated characters"):
        validate_profile_request("Head of Growth aaaaaaaaaaa at Acme")


def test_ten_repeated_characters_are_allowed():
    request = validate_profile_request("Head of Growth aaaaaaaaaa at Acme")
    assert "aaaaaaaaaa" in request.profile_text


@pytest.mark.parametrize("text", ["12345 67890 12345 abc", "abc1234567", "$$$ 100% 2024 ok"])
def test_low_alphabetic_ratio_is_rejected(text):
    with pytest.raises(ProfileValidationError, match="meaningful"):
        validate_profile_request(text)


def test_length_rule_wins_over_later_rules():
    with pytest.raises(ProfileValidationError, match="at least"):
        validate_profile_request("1111")

from typing import Any

from app.agent.prompts.icebreaker import MAX_WORDS_PER_LINE

REQUIRED_ICEBREAKER_COUNT = 3


def count_words(text: str) -> int:
    return len(text.split())


def _is_valid_line(value: Any) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    return count_words(value) <= MAX_WORDS_PER_LINE


def is_valid_icebreaker_payload(payload: Any) -> bool:
    """Structural check of a parsed model reply.

    Requires exactly three icebreakers, each with non-empty `line1` and `line2`
    of at most MAX_WORDS_PER_LINE words. Any violation rejects the whole reply.
    """
    if not isinstance(payload, dict):
        return False

    icebreakers = payload.get("icebreakers")
    if not isinstance(icebreakers, list) or len(icebreakers) != REQUIRED_ICEBREAKER_COUNT:
        return False

    for item in icebreakers:
        if not isinstance(item, dict):
            return False
        if not (_is_valid_line(item.get("line1")) and _is_valid_line(item.get("line2"))):
            return False
    return True

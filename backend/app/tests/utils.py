import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_5) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.5 Safari/605.1.15"
)

SAMPLE_PROFILE = "Head of Growth at Acme. Scaled 0→$2m ARR. Stack: GA4, Klaviyo."

VALID_REPLY: dict[str, Any] = {
    "icebreakers": [
        {
            "line1": "Scaling Acme from zero to $2m ARR on GA4 and Klaviyo is a sharp growth story.",
            "line2": "I build small automations that free growth teams from manual reporting each week.",
        },
        {
            "line1": "Your Klaviyo and GA4 stack suggests you care about clean lifecycle data.",
            "line2": "Happy to share how I wire those tools together so reports build themselves.",
        },
        {
            "line1": "Taking Acme to $2m ARR usually means a pile of manual growth ops.",
            "line2": "I turn that busywork into simple tools so your team can chase the next milestone.",
        },
    ],
    "notes": "Led with the ARR milestone and the marketing stack.",
}


def make_completion(content: str | dict) -> MagicMock:
    """Mock object mapping the OpenAI chat completion response structure."""
    mock_message = MagicMock()
    mock_message.content = content if isinstance(content, str) else json.dumps(content)

    mock_choice = MagicMock()
    mock_choice.message = mock_message

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    return mock_response


def make_openai_client(create: AsyncMock) -> MagicMock:
    """Mock AsyncOpenAI instance whose chat.completions.create is `create`."""
    mock_completions = MagicMock()
    mock_completions.create = create

    mock_chat = MagicMock()
    mock_chat.completions = mock_completions

    mock_client_instance = MagicMock()
    mock_client_instance.chat = mock_chat
    return mock_client_instance


def replies(*items: Any) -> list[Any]:
    """Turn reply contents into a side_effect list; exceptions are kept as-is."""
    return [item if isinstance(item, BaseException) else make_completion(item) for item in items]

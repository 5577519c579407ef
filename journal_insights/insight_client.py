"""
insight_client.py - Chat-completions client that turns journal entries into insights

Purpose:
- Builds the fixed insights prompt around one user's serialized journal entries.
- Sends it to an OpenAI-compatible chat-completions endpoint with httpx.
- Returns the text of the first choice exactly as the model wrote it.

Key behaviors:
- The prompt asks for a bracketed list of up to three quoted strings, but the
  reply is NOT parsed here; downstream consumers read the raw text.
- No retry or backoff. A non-2xx answer raises InsightAPIError with the
  message from the API's JSON error body. Transport errors are re-raised as is.
- Every failure is logged before it propagates.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import (
    DEFAULT_API_URL,
    DEFAULT_CHAT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_COMPLETION_TOKENS,
)
from .errors import ConfigurationError, InsightAPIError

_logger = logging.getLogger(__name__)

# The three questions every journal entry answers
DAILY_QUESTIONS = ["My mood today?", "I'll remember this day by?", "Challenges I'm facing"]


def build_insights_prompt(journals_json: str) -> str:
    """
    Compose the user message for one user's journals.

    `journals_json` is embedded verbatim.
    """
    questions = ", ".join(DAILY_QUESTIONS)
    return (
        "Respond as the second person (You), who was asked these three questions: "
        f"[{questions}] on a daily basis, and whose answers were these: {journals_json}. "
        "Based on these entries, give them three insights about themselves. "
        "Respond with a single List<String> containing a maximum of 3 strings "
        "in the following format: ['Insight 1', 'Insight 2', 'Insight 3']"
    )


def _error_message(response: httpx.Response) -> str:
    """Pull `error.message` out of an API error body, falling back to the raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text or response.reason_phrase


class InsightClient:
    """
    Synchronous chat-completions client.

    One instance (and its underlying httpx.Client) is created per process and
    shared by every invocation.

    Args:
        api_key: Bearer credential. Required; an empty key raises ConfigurationError.
        model: Model identifier sent with each request.
        api_url: Chat-completions endpoint.
        timeout: Request timeout in seconds.
        http_client: Optional preconfigured httpx.Client (used by tests).
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_CHAT_MODEL,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("An API key is required to call the insights model.")
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self._client = http_client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings) -> "InsightClient":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.chat_model,
            api_url=settings.api_url,
            timeout=settings.timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def build_payload(self, journals_json: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "user", "content": build_insights_prompt(journals_json)},
            ],
            "max_tokens": MAX_COMPLETION_TOKENS,
        }

    def fetch_insights(self, journals_json: str) -> str:
        """
        Ask the model for insights about one user's journals.

        Args:
            journals_json: JSON array of that user's journal entries.

        Returns:
            The raw content of the first choice.

        Raises:
            InsightAPIError: non-2xx status, or a success body without content.
            httpx.HTTPError: transport failure (timeout, connection error, ...).
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = self._client.post(
                self.api_url,
                json=self.build_payload(journals_json),
                headers=headers,
            )

            if not response.is_success:
                raise InsightAPIError(
                    f"HTTP {response.status_code}: {_error_message(response)}",
                    status_code=response.status_code,
                )

            try:
                return response.json()["choices"][0]["message"]["content"]
            except (ValueError, KeyError, IndexError, TypeError):
                raise InsightAPIError(
                    "Completion response did not contain choices[0].message.content",
                    status_code=response.status_code,
                )
        except Exception as e:
            _logger.error("Error fetching insights: %s", e)
            raise

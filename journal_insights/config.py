"""
config.py - Environment configuration for the Journal Insights function

This module loads settings from environment variables (and a `.env` file when
one is found) and exposes them as a single Settings object.

Main Features:
- Loads `.env` on import without overriding variables already set in the environment.
- `load_settings()` validates the configuration and fails fast when the
  language-model API key is missing, instead of letting the service send
  unauthenticated requests later.
- Collection names and the fixed completion budget live here as constants.
"""

import os
import logging
from typing import Optional

# dotenv is used to load environment variables from a .env file
from dotenv import load_dotenv, find_dotenv

from .errors import ConfigurationError

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())

# --- Load environment variables on import ---
try:
    _env_path = find_dotenv(usecwd=True)
    if _env_path:
        load_dotenv(_env_path, override=False)
        _logger.debug("Loaded .env from %s", _env_path)
except OSError as e:
    _logger.warning("Error loading .env: %s", e)

# Firestore collection names
FIRESTORE_USERS_COLLECTION = "app_users"
FIRESTORE_JOURNALS_COLLECTION = "user_journals"
FIRESTORE_INSIGHTS_COLLECTION = "users_insights"

# Language-model defaults
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_TIMEOUT_SECONDS = 60.0
MAX_COMPLETION_TOKENS = 3000


class Settings:
    """
    Resolved configuration for one process.

    Attributes:
        openai_api_key: Bearer credential for the chat-completions API (required).
        chat_model: Model identifier sent with every request.
        api_url: Chat-completions endpoint.
        timeout_seconds: HTTP timeout for one API call.
        gcp_project: Firestore project, or None to use the client default.
    """

    def __init__(
        self,
        openai_api_key: str,
        chat_model: str = DEFAULT_CHAT_MODEL,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        gcp_project: Optional[str] = None,
    ):
        self.openai_api_key = openai_api_key
        self.chat_model = chat_model
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.gcp_project = gcp_project

    def __repr__(self) -> str:
        # Never print the key itself
        return (
            f"Settings(chat_model={self.chat_model!r}, api_url={self.api_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, gcp_project={self.gcp_project!r}, "
            f"openai_api_key_set={bool(self.openai_api_key)})"
        )


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ConfigurationError: if OPENAI_API_KEY is unset/blank or
        OPENAI_TIMEOUT_SECONDS is not a positive number.
    """
    api_key = os.environ.get("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY is not set; refusing to start without an API key.")

    raw_timeout = os.environ.get("OPENAI_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout_seconds = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"OPENAI_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}")
    if timeout_seconds <= 0:
        raise ConfigurationError(f"OPENAI_TIMEOUT_SECONDS must be positive, got {raw_timeout!r}")

    settings = Settings(
        openai_api_key=api_key,
        chat_model=os.environ.get("OPENAI_CHAT_MODEL") or DEFAULT_CHAT_MODEL,
        api_url=os.environ.get("OPENAI_API_URL") or DEFAULT_API_URL,
        timeout_seconds=timeout_seconds,
        gcp_project=os.environ.get("GCP_PROJECT") or None,
    )
    _logger.debug("Loaded settings: %r", settings)
    return settings

"""
Engine configuration from environment variables.

Variables:
    AI_BACKEND             "local" (default) or "llm"
    OPENROUTER_API_KEY     API key for the remote backend
    OPENROUTER_MODEL       Model name sent with each request
    OPENROUTER_BASE_URL    Chat-completions endpoint
    GEMINI_API_KEY         Google AI key; an "sk-or-" value is used as the
                           OpenRouter key when OPENROUTER_API_KEY is unset
    GEMINI_MODEL           Model name for the Google backend
    AI_TIMEOUT_SECONDS     HTTP timeout for the remote backend
    AI_DEFAULT_DIFFICULTY  Tier used when a request names none
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .solver.policy import DEFAULT_DIFFICULTY, Difficulty

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "google/gemini-1.5-flash-latest"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_TIMEOUT = 20.0
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash-latest"
OPENROUTER_KEY_PREFIX = "sk-or-"

BACKENDS = ("local", "llm")


@dataclass
class EngineConfig:
    """Runtime settings for choosing how moves are produced."""

    backend: str = "local"
    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    default_difficulty: Difficulty = DEFAULT_DIFFICULTY
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL

    def __post_init__(self) -> None:
        """Validate settings."""
        self.backend = self.backend.strip().lower()
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend {self.backend!r}, expected one of {BACKENDS}")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        self.default_difficulty = Difficulty.parse(self.default_difficulty)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build config from environment variables.

        Blank values are treated as unset.

        Args:
            environ: Mapping to read (defaults to os.environ)

        Returns:
            EngineConfig
        """
        env = os.environ if environ is None else environ

        def _get(name: str, default: str) -> str:
            value = env.get(name)
            if value is None or str(value).strip() == "":
                return default
            return str(value).strip()

        timeout_raw = _get("AI_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"AI_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}") from None

        # An OpenRouter key stored under GEMINI_API_KEY still goes to OpenRouter
        api_key = _get("OPENROUTER_API_KEY", "")
        gemini_key = _get("GEMINI_API_KEY", "")
        if gemini_key.startswith(OPENROUTER_KEY_PREFIX):
            if not api_key:
                api_key = gemini_key
            gemini_key = ""

        config = cls(
            backend=_get("AI_BACKEND", "local"),
            api_key=api_key,
            model=_get("OPENROUTER_MODEL", DEFAULT_MODEL),
            base_url=_get("OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
            default_difficulty=_get("AI_DEFAULT_DIFFICULTY", DEFAULT_DIFFICULTY.value),
            gemini_api_key=gemini_key,
            gemini_model=_get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        )
        logger.debug(
            f"Config: backend={config.backend} model={config.model} "
            f"api_key={'set' if config.api_key else 'unset'} "
            f"gemini_api_key={'set' if config.gemini_api_key else 'unset'}"
        )
        return config

"""Move proposers: local search, chat-completions and Gemini suggestion."""

import logging
from typing import Optional

from ..config import EngineConfig
from ..solver.policy import RandomSource
from .base import MoveProposer, select_move
from .gemini import GeminiProposer
from .local import LocalSearchProposer
from .remote import RemoteSuggestionProposer, parse_move_text, build_prompt

logger = logging.getLogger(__name__)


def proposer_from_config(
    config: EngineConfig, rng: Optional[RandomSource] = None
) -> MoveProposer:
    """
    Pick the move source named by config.backend.

    The llm backend prefers the OpenRouter key, then the Google key, and
    falls back to local search when neither is set.
    """
    if config.backend == "llm":
        if config.api_key:
            return RemoteSuggestionProposer(
                api_key=config.api_key,
                model=config.model,
                base_url=config.base_url,
                timeout=config.timeout,
            )
        if config.gemini_api_key:
            return GeminiProposer(api_key=config.gemini_api_key, model=config.gemini_model)
        logger.warning("AI_BACKEND=llm but no API key configured, using local search")
    return LocalSearchProposer(rng=rng)


__all__ = [
    "MoveProposer",
    "select_move",
    "LocalSearchProposer",
    "RemoteSuggestionProposer",
    "GeminiProposer",
    "parse_move_text",
    "build_prompt",
    "proposer_from_config",
]

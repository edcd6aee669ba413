"""
Move proposer backed by the Google Generative AI SDK.

Used when only a Google key (GEMINI_API_KEY) is configured. Shares the prompt
and reply parsing with the chat-completions proposer.
"""

import logging
from typing import Any, Optional

from ..config import DEFAULT_GEMINI_MODEL
from ..core import Board, Mark
from ..solver.policy import DEFAULT_DIFFICULTY, Difficulty
from .base import MoveProposer
from .remote import build_prompt, parse_move_text

logger = logging.getLogger(__name__)


class GeminiProposer(MoveProposer):
    """
    Asks a Gemini model for a move through google-generativeai.

    SDK errors, blocked responses and unparseable replies are logged and
    turned into a None proposal.
    """

    name = "gemini"

    def __init__(self, api_key: str, model: str = DEFAULT_GEMINI_MODEL, client: Any = None):
        """
        Initialize Gemini proposer.

        Args:
            api_key: Google AI key
            model: Gemini model name
            client: Object with generate_content(prompt); built from the SDK
                on first use when omitted
        """
        if not api_key:
            raise ValueError("Gemini proposer requires an API key")
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._client = genai.GenerativeModel(self.model)
        return self._client

    def propose(
        self,
        board: Board,
        me: Mark,
        opp: Mark,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
    ) -> Optional[int]:
        prompt = build_prompt(board, me, opp)

        try:
            text = self._get_client().generate_content(prompt).text
        except Exception as e:
            # The SDK raises its own hierarchy plus ValueError for blocked replies
            logger.error(f"Gemini move request failed: {e!r}")
            return None

        move = parse_move_text(text)
        if move is None:
            logger.warning(f"No move found in Gemini reply: {text!r}")
        else:
            logger.debug(f"Gemini proposed {move}")
        return move

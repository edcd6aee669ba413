"""
Move proposer backed by a remote text-generation service.

Sends the board as a prompt to an OpenAI-compatible chat-completions endpoint
(OpenRouter by default) and parses a single digit 0-8 out of the reply.
Nothing returned here is trusted: select_move() validates every proposal.
"""

import http.client
import json
import logging
import re
import urllib.error
import urllib.request
from typing import Callable, Optional

from ..config import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT
from ..core import Board, Mark, render
from ..solver.policy import DEFAULT_DIFFICULTY, Difficulty
from .base import MoveProposer

logger = logging.getLogger(__name__)

_MOVE_PATTERN = re.compile(r"\b([0-8])\b")

SYSTEM_PROMPT = "You are a concise Tic Tac Toe assistant. Respond with a single integer."

PROMPT_TEMPLATE = """You are the AI for standard Tic Tac Toe.

Rules: The board is 3x3. Players alternate placing their mark into ONE empty cell per turn. No additional cells are affected. The winner is three in a row (row/column/diagonal).

Board encoding: indices 0..8 left-to-right, top-to-bottom. Player symbols may be X, O, or ✓. Empty cells are '.'.

Current board:
{board}

You play as '{me}'. Opponent is '{opp}'.
Return ONLY a single integer 0-8 for your chosen empty cell. No explanation."""


def parse_move_text(text: str) -> Optional[int]:
    """
    Pull the first standalone digit 0-8 out of free text.

    Args:
        text: Model reply

    Returns:
        Cell index, or None if nothing usable is found
    """
    if not isinstance(text, str):
        return None
    match = _MOVE_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1))


def build_prompt(board: Board, me: Mark, opp: Mark) -> str:
    """Prompt describing the rules and the current board."""
    return PROMPT_TEMPLATE.format(board=render(board), me=me, opp=opp)


class RemoteSuggestionProposer(MoveProposer):
    """
    Asks a chat-completions API for a move.

    Any transport failure, HTTP error or unparseable reply is logged and
    turned into a None proposal.
    """

    name = "remote"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        temperature: float = 0.2,
        opener: Optional[Callable] = None,
    ):
        """
        Initialize remote proposer.

        Args:
            api_key: Bearer token for the endpoint
            model: Model identifier
            base_url: Chat-completions URL
            timeout: Request timeout in seconds
            temperature: Sampling temperature sent with the request
            opener: Replacement for urllib.request.urlopen (tests)
        """
        if not api_key:
            raise ValueError("Remote proposer requires an API key")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.temperature = temperature
        self.opener = opener or urllib.request.urlopen

    def _build_request(self, prompt: str) -> urllib.request.Request:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
        }
        return urllib.request.Request(
            self.base_url,
            data=json.dumps(body).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            method="POST",
        )

    def _complete(self, prompt: str) -> str:
        """Send the prompt and return the reply text."""
        request = self._build_request(prompt)
        with self.opener(request, timeout=self.timeout) as resp:
            payload = json.loads(resp.read().decode("utf-8", errors="ignore"))
        return payload["choices"][0]["message"]["content"]

    def propose(
        self,
        board: Board,
        me: Mark,
        opp: Mark,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
    ) -> Optional[int]:
        prompt = build_prompt(board, me, opp)

        try:
            text = self._complete(prompt)
        except urllib.error.HTTPError as e:
            logger.error(f"Remote move request failed: HTTP {e.code} {e.reason}")
            return None
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            logger.error(f"Remote move request failed: {e}")
            return None
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed reply from remote service: {e!r}")
            return None

        move = parse_move_text(text)
        if move is None:
            logger.warning(f"No move found in remote reply: {text!r}")
        else:
            logger.debug(f"Remote service proposed {move}")
        return move

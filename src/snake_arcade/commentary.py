# commentary.py
import os
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from openai import OpenAI

from .engine import GameListener

logger = logging.getLogger(__name__)

UNAVAILABLE = "Game over! (AI unavailable)"
CONNECTION_LOST = "Game over! (connection lost)"
FALLBACK = "Game over!"


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Strip whitespace and one pair of wrapping quotes from an env value.

    Shells and .env files happily produce OPENAI_API_KEY="sk-..." and the
    SDK would otherwise forward the quotes verbatim.
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in ("'", '"'):
        cleaned = cleaned[1:-1].strip()
    return cleaned or None


def build_system_prompt(score: int, high_score: int) -> str:
    is_new_record = score > high_score and score > 0
    lines = [
        "You are the sarcastic personality of a retro arcade cabinet running Snake.",
        "Keep your answer extremely short (one sentence at most).",
        "If the score is low (under 5), mock the player mercilessly.",
        "If the score is decent (5 to 20), give a back-handed compliment.",
        "If the score is high (over 20), be impressed against your will.",
    ]
    if is_new_record:
        lines.append("THE PLAYER JUST BEAT THE HIGH SCORE! Mention it, shouting.")
    return "\n".join(lines)


class CommentaryService(GameListener):
    """
    Asks a chat-completion model for a one-line remark after each death.

    Requests run on a single background worker so the game loop never waits
    on the network. The latest remark is exposed as ``comment`` (None while
    pending); ``reset`` forgets it and discards any reply still in flight.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        high_score: int = 0,
        client=None,
    ):
        self.model = model
        self.high_score = high_score
        self.comment: Optional[str] = None
        self._generation = 0
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="commentary")

        self.client = client
        if self.client is None:
            key = _sanitize_env_value(api_key) or _sanitize_env_value(os.getenv("OPENAI_API_KEY"))
            if key:
                try:
                    self.client = OpenAI(
                        api_key=key,
                        base_url=_sanitize_env_value(base_url or os.getenv("OPENAI_BASE_URL")),
                        timeout=timeout,
                        max_retries=1,
                    )
                except Exception as e:
                    logger.warning("Failed to initialize commentary client: %s", e)
                    self.client = None

    def get_commentary(self, score: int, high_score: int) -> str:
        """Blocking call; always returns a printable line."""
        if self.client is None:
            return UNAVAILABLE
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_system_prompt(score, high_score)},
                    {"role": "user", "content": f"The player died with a score of {score}."},
                ],
                max_tokens=60,
                temperature=1.0,
            )
            text = response.choices[0].message.content if response.choices else None
            return (text or "").strip() or FALLBACK
        except Exception as e:
            logger.warning("Error fetching commentary: %s", e)
            return CONNECTION_LOST

    def request(self, score: int, high_score: int) -> Future:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.comment = None

        def _run():
            text = self.get_commentary(score, high_score)
            with self._lock:
                if generation == self._generation:
                    self.comment = text
            return text

        return self._executor.submit(_run)

    def reset(self) -> None:
        with self._lock:
            self._generation += 1
            self.comment = None

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    # GameListener
    def on_game_over(self, score: int, high_score: int) -> Future:
        # high_score already includes this run; compare against the previous best
        previous = self.high_score
        self.high_score = high_score
        return self.request(score, previous)

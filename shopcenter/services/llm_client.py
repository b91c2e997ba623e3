# shopcenter/services/llm_client.py
import time

import requests

from shopcenter.utils.retry import http_retry
from shopcenter.utils.settings import Settings
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)


class GenerationError(RuntimeError):
    pass


class GeminiClient:
    """Minimal client for the Generative Language generateContent endpoint."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.base_url = settings.gemini_api_url.rstrip("/")
        self.model = settings.gemini_model
        self.api_key = settings.gemini_api_key
        # total budget for one generate() call, retries included
        self.timeout = settings.gemini_timeout
        self.session = session or requests.Session()
        self._post = http_retry(max_delay=self.timeout)(self._post_once)

    def generate(self, prompt: str) -> str:
        deadline = time.monotonic() + self.timeout
        return self._post(prompt, deadline)

    def _post_once(self, prompt: str, deadline: float) -> str:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise requests.Timeout(f"Gemini call exceeded its {self.timeout}s budget")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        logger.info(f"GeminiClient POST {url}")

        resp = self.session.post(
            url,
            params={"key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=remaining,
        )
        resp.raise_for_status()
        return self._extract_text(resp.json())

    @staticmethod
    def _extract_text(body: dict) -> str:
        try:
            parts = body["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            raise GenerationError(f"Unexpected generateContent response: {body!r:.200}")
        return "".join(part.get("text", "") for part in parts)

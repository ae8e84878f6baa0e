"""
Groq API Client: thin wrapper used by the sales-trend analyzer and the
patient-update drafter.

The model only ever sees the text it is given (sales / prescription-trend
CSV, or one prescription's details) and returns a JSON object. It never
reads or writes the database.

LLM CONSTRAINTS:
- Model: settings.GROQ_MODEL (llama-3.3-70b-versatile by default)
- JSON mode, so the reply can be validated against a Pydantic schema
- Bounded retries with exponential backoff on timeouts and rate limits
- Returns None on any failure; callers decide what to tell the user
"""

import logging
import time
from typing import Optional
from groq import Groq, APIError, APITimeoutError, RateLimitError

from mediserve.core.config import settings

# NEVER log API keys
logger = logging.getLogger(__name__)


class GroqClient:

    TEMPERATURE = 0.3  # Some variety in wording, stable structure
    MAX_TOKENS = 1024  # Three free-text sections
    TIMEOUT_SECONDS = 30

    def __init__(self, api_key: str = None, model: str = None):
        """Initialize Groq client with API key from environment."""
        api_key = api_key if api_key is not None else settings.GROQ_API_KEY
        self.model = model or settings.GROQ_MODEL

        if not api_key:
            logger.warning(
                "GROQ_API_KEY not found in environment. "
                "Sales trend analysis will be DISABLED. "
                "Add your key to backend/.env file."
            )
            self.client = None
        else:
            try:
                self.client = Groq(api_key=api_key, timeout=self.TIMEOUT_SECONDS)
                logger.info("Groq client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize Groq client: {e}")
                self.client = None

    def is_available(self) -> bool:
        return self.client is not None

    def complete_json(self, system_prompt: str, user_prompt: str, max_retries: int = 2) -> Optional[str]:
        """
        Send one chat completion in JSON mode.

        Returns:
            Raw JSON string from the model, or None on error. Output is
            validated by the caller.
        """
        if not self.is_available():
            logger.debug("Groq client not available - skipping LLM call")
            return None

        for attempt in range(max_retries + 1):
            try:
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    temperature=self.TEMPERATURE,
                    max_tokens=self.MAX_TOKENS,
                    response_format={"type": "json_object"},
                    stream=False,
                )

                if response.choices:
                    content = response.choices[0].message.content
                    logger.debug(f"LLM response received: {len(content or '')} chars (attempt {attempt+1})")
                    return content
                logger.warning("LLM returned empty response")
                return None

            except APITimeoutError:
                if attempt < max_retries:
                    wait_time = 0.5 * (2 ** attempt)  # 0.5s, 1s
                    logger.warning(f"Groq timeout, retry {attempt+1}/{max_retries} after {wait_time}s")
                    time.sleep(wait_time)
                else:
                    logger.warning(f"Groq API timeout after {max_retries} retries")
                    return None

            except RateLimitError:
                if attempt < max_retries:
                    wait_time = 1.0 * (2 ** attempt)  # 1s, 2s
                    logger.warning(f"Groq rate limit, retry {attempt+1}/{max_retries} after {wait_time}s")
                    time.sleep(wait_time)
                else:
                    logger.warning("Groq API rate limit exceeded after retries")
                    return None

            except APIError as e:
                logger.error(f"Groq API error (permanent): {e}")
                return None

            except Exception as e:
                logger.error(f"Unexpected error calling Groq: {e}")
                return None

        return None


_groq_client: Optional[GroqClient] = None


def get_groq_client() -> GroqClient:
    """Get or create the shared GroqClient instance."""
    global _groq_client
    if _groq_client is None:
        _groq_client = GroqClient()
    return _groq_client


def strip_code_fence(text: str) -> str:
    """Drop a ```json ... ``` wrapper if the model added one despite JSON mode."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()

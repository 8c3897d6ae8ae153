import asyncio
from typing import Any, Dict, Optional, Tuple

import openai
import structlog

from ..exceptions import (
    ModelUpstreamError,
    QuotaExceededError,
    RateLimitExceededError,
    VerificationError,
)
from ..models.news import NewsStatus
from ..utils.prompt_strings import PromptStrings
from .verdict_parser import KeywordVerdictParser, VerdictParser

logger = structlog.get_logger(__name__)

PLACEHOLDER_API_KEY = "your-openai-api-key"


class VerificationService:
    """Asks a hosted chat model whether a news item is true."""

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str = "https://api.openai.com/v1",
        model_name: str = "gpt-3.5-turbo",
        max_tokens: int = 500,
        parser: Optional[VerdictParser] = None,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.model_name = model_name
        self.max_tokens = max_tokens
        self.parser = parser or KeywordVerdictParser()
        self.client = client

        if self.client is None and self.is_available():
            # Failures are terminal for the request; the SDK must not retry on its own
            self.client = openai.OpenAI(api_key=api_key, base_url=endpoint, max_retries=0)

    def is_available(self) -> bool:
        return bool(self.api_key) and self.api_key != PLACEHOLDER_API_KEY

    def get_service_status(self) -> Dict[str, Any]:
        if self.is_available():
            return {
                "available": True,
                "configured": True,
                "message": "OpenAI service is configured and available",
            }
        return {
            "available": False,
            "configured": False,
            "message": "OpenAI API key not configured. Please set OPENAI_API_KEY environment variable.",
        }

    def build_prompt(self, content: str, link: Optional[str] = None, photo_url: Optional[str] = None) -> str:
        prompt = PromptStrings.FACT_CHECK_HEADER.format(content=content)
        if link:
            prompt += PromptStrings.FACT_CHECK_SOURCE_LINK.format(link=link)
        if photo_url:
            prompt += PromptStrings.FACT_CHECK_PHOTO_URL.format(photo_url=photo_url)
        prompt += PromptStrings.FACT_CHECK_INSTRUCTIONS
        return prompt

    async def verify_news(self, content: str, link: Optional[str] = None, photo_url: Optional[str] = None) -> Tuple[str, str]:
        """Return (status, explanation)."""
        if not self.is_available():
            logger.warning("Verification requested without a configured model key")
            return NewsStatus.UNCERTAIN.value, PromptStrings.MODEL_NOT_CONFIGURED

        prompt = self.build_prompt(content, link, photo_url)
        # The SDK client is blocking; keep it off the event loop
        loop = asyncio.get_running_loop()
        completion = await loop.run_in_executor(None, self._complete, prompt)
        verdict = self.parser.parse(completion)

        logger.info("Verification completed", model=self.model_name, status=verdict.status, response_length=len(completion))
        return verdict.status, verdict.explanation

    def _complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": PromptStrings.FACT_CHECK_SYSTEM},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.APIStatusError as e:
            raise self._map_status_error(e)
        except openai.APIConnectionError as e:
            logger.error("OpenAI request failed", error=str(e))
            raise VerificationError(f"Failed to reach OpenAI API: {e}", error_code="MODEL_UNREACHABLE")

        if not response.choices:
            raise VerificationError("No response from OpenAI API", error_code="MODEL_EMPTY_RESPONSE")

        return response.choices[0].message.content or ""

    def _map_status_error(self, error: "openai.APIStatusError") -> VerificationError:
        body = error.body if isinstance(error.body, dict) else {}
        if isinstance(body.get("error"), dict):
            body = body["error"]
        code = body.get("code") or getattr(error, "code", None)
        detail = body.get("message") or str(error)

        logger.error("OpenAI API error", status_code=error.status_code, code=code, error=detail)

        if code == "insufficient_quota":
            return QuotaExceededError(
                f"OpenAI API quota exceeded: {detail}. Please check your billing and upgrade your plan.",
                error_code="MODEL_QUOTA_EXCEEDED",
            )
        if code == "rate_limit_exceeded":
            return RateLimitExceededError(
                f"OpenAI API rate limit exceeded: {detail}. Please try again later.",
                error_code="MODEL_RATE_LIMITED",
            )
        if code:
            return ModelUpstreamError(f"OpenAI API error ({code}): {detail}", status_code=error.status_code, provider_code=code)
        return ModelUpstreamError(f"OpenAI API returned status {error.status_code}", status_code=error.status_code)

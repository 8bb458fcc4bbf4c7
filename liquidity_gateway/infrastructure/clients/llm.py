"""Language model client for intent classification and explanations"""

import logging
import openai
from openai import AsyncOpenAI
from liquidity_gateway.domain.exceptions import LLMServiceError
from liquidity_gateway.config import settings
from liquidity_gateway.infrastructure.observability.metrics import llm_latency_histogram

logger = logging.getLogger(__name__)


class LLMClient:
    """Client for an OpenAI-compatible chat completion API"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.api_key = api_key or settings.openai_api_key
        self.base_url = base_url or settings.openai_base_url
        self.timeout = timeout or settings.llm_timeout_seconds
        self.classifier_model = settings.classifier_model
        self.explainer_model = settings.explainer_model
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise LLMServiceError("OpenAI API key is not configured")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def close(self) -> None:
        """Release the SDK connection pool, if one was opened"""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def complete(
        self,
        operation: str,
        model: str,
        system_instructions: str,
        user_message: str,
        max_tokens: int,
        json_response: bool = False,
    ) -> str:
        """
        Single chat completion; returns the first choice's text ("" if empty).

        Raises:
            LLMServiceError: On timeout, connection failure, HTTP errors, or
                missing configuration
        """
        extra = {"response_format": {"type": "json_object"}} if json_response else {}
        try:
            with llm_latency_histogram.labels(operation=operation).time():
                completion = await self.client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": "system", "content": system_instructions},
                        {"role": "user", "content": user_message},
                    ],
                    max_tokens=max_tokens,
                    **extra,
                )
        except openai.APITimeoutError as e:
            raise LLMServiceError(f"Language model timeout after {self.timeout}s") from e
        except openai.APIStatusError as e:
            raise LLMServiceError(f"Language model error: {e.status_code}") from e
        except openai.APIError as e:
            raise LLMServiceError(f"Language model unavailable: {e}") from e

        if not completion.choices:
            logger.warning("Completion returned no choices", extra={"operation": operation})
            return ""
        return completion.choices[0].message.content or ""

    async def classify(self, system_instructions: str, question: str) -> str:
        """Classifier boundary: JSON-mode completion of a user question"""
        return await self.complete(
            "classify",
            self.classifier_model,
            system_instructions,
            question,
            max_tokens=settings.classifier_max_tokens,
            json_response=True,
        )

    async def explain(self, system_instructions: str, content: str, operation: str = "explain") -> str:
        """Explainer boundary: free-text completion"""
        return await self.complete(
            operation,
            self.explainer_model,
            system_instructions,
            content,
            max_tokens=settings.explainer_max_tokens,
        )

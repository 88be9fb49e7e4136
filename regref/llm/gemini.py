"""
Google Gemini LLM provider.

Supports the Gemini API via the google-generativeai package.
"""

import os
from typing import Any, Dict, Optional

from regref.core.exceptions import ConfigurationError, ContextLengthError, LLMError
from regref.core.logging import get_logger
from regref.llm.base import GenerationConfig, LLMClient, estimate_tokens
from regref.shared.lazy_imports import lazy_property

logger = get_logger(__name__)


class GeminiClient(LLMClient):
    """
    Google Gemini API client.

    Requires an API key, passed in or read from GEMINI_API_KEY.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-1.5-flash",
    ) -> None:
        """
        Initialize Gemini client.

        Args:
            api_key: API key (defaults to GEMINI_API_KEY env var)
            model: Model name
        """
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY", "")
        self._model_name = model

    @lazy_property
    def client(self) -> Any:
        """Lazy-load the Gemini model."""
        if not self.api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY not set. Set it in environment, .env.local, "
                "or pass it to the constructor."
            )
        try:
            import google.generativeai as genai
        except ImportError as e:
            raise ConfigurationError(
                "google-generativeai is required for Gemini. "
                "Install with: pip install google-generativeai"
            ) from e

        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(self._model_name)

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def supports_json_mode(self) -> bool:
        """Gemini supports JSON mode via response_mime_type."""
        return True

    def is_available(self) -> bool:
        """Check if Gemini is configured."""
        return bool(self.api_key)

    def _build_generation_config(self, config: GenerationConfig) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {
            "max_output_tokens": config.max_tokens,
            "temperature": config.temperature,
            "top_p": config.top_p,
        }
        if config.stop_sequences:
            generation_config["stop_sequences"] = config.stop_sequences
        if config.json_mode:
            generation_config["response_mime_type"] = "application/json"
        return generation_config

    def _record_response_usage(self, response: Any) -> None:
        metadata = getattr(response, "usage_metadata", None)
        if not metadata:
            return
        self._record_usage(
            prompt_tokens=getattr(metadata, "prompt_token_count", 0) or 0,
            completion_tokens=getattr(metadata, "candidates_token_count", 0) or 0,
        )

    def generate(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None,
        **kwargs: Any,
    ) -> str:
        """
        Generate text from prompt with a single request.

        Raises:
            ConfigurationError: If the API key or SDK is missing
            ContextLengthError: If the prompt cannot fit the context window
            LLMError: On API failure, timeout, or empty response
        """
        config = config or GenerationConfig()

        estimated = estimate_tokens(prompt)
        if estimated > self.context_length:
            raise ContextLengthError(
                f"Prompt is about {estimated} tokens, {self._model_name} "
                f"accepts {self.context_length}",
                max_tokens=self.context_length,
                actual_tokens=estimated,
            )

        client = self.client
        try:
            response = client.generate_content(
                prompt,
                generation_config=self._build_generation_config(config),
                request_options={"timeout": config.timeout_seconds},
            )
            text = response.text
        except Exception as e:
            raise LLMError(f"Gemini generation failed: {e}") from e

        if not text or not text.strip():
            raise LLMError("Empty response from Gemini")

        self._record_response_usage(response)
        logger.debug("Gemini response received", chars=len(text), model=self._model_name)
        return text.strip()

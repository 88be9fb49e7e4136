"""
Base LLM Provider Interface.

This module defines the LLMClient interface the analyzer talks to. The only
shipped provider is Gemini, but the analyzer and its tests depend on this
interface alone, so a fake client is enough to exercise the whole pipeline.

Key Data Structures
-------------------
**GenerationConfig**
    Controls generation behavior:
    - max_tokens: Maximum response length
    - temperature: Creativity (0=deterministic, 1=creative)
    - top_p: Nucleus sampling parameter
    - json_mode: Ask the provider for a JSON response
    - timeout_seconds: Upper bound on one request

Errors
------
Providers raise the LLMError family from regref.core.exceptions. All of them
are CollaboratorUnavailable, which the analyzer turns into zero candidates.
There is no retry: one call per analyzed document.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class GenerationConfig:
    """
    Configuration for text generation.

    Attributes:
        max_tokens: Maximum tokens to generate
        temperature: Creativity (0=deterministic, 1=creative)
        top_p: Nucleus sampling parameter
        stop_sequences: Strings that stop generation
        json_mode: Force JSON output (if supported by provider)
        timeout_seconds: Request timeout passed to the provider
    """

    max_tokens: int = 8192
    temperature: float = 0.1
    top_p: float = 1.0
    stop_sequences: Optional[List[str]] = None
    json_mode: bool = False
    timeout_seconds: float = 120


# Known context lengths for supported models
MODEL_CONTEXT_LENGTHS = {
    "gemini-1.5-pro": 2000000,
    "gemini-1.5-flash": 1000000,
    "gemini-2.0-flash": 1000000,
    "gemini-1.0-pro": 32768,
}


def get_model_context_length(model_name: str, default: int = 32768) -> int:
    """
    Get context length for a model name.

    Args:
        model_name: Model identifier (partial match supported)
        default: Default context length if model unknown

    Returns:
        Context length in tokens
    """
    model_lower = model_name.lower()
    for key, length in MODEL_CONTEXT_LENGTHS.items():
        if key in model_lower:
            return length
    return default


def estimate_tokens(text: str) -> int:
    """Rough token count (about four characters per token)."""
    return len(text) // 4


class LLMClient(ABC):
    """
    Abstract base class for LLM providers.

    All LLM providers must implement this interface.
    """

    def _get_usage(self) -> Dict[str, int]:
        """Get or initialize the usage accumulator."""
        if not hasattr(self, "_usage"):
            self._usage = {
                "prompt_tokens": 0,
                "completion_tokens": 0,
                "total_tokens": 0,
            }
        return self._usage

    def _record_usage(
        self,
        prompt_tokens: int = 0,
        completion_tokens: int = 0,
    ) -> None:
        """Record token usage from a generation call."""
        usage = self._get_usage()
        usage["prompt_tokens"] += prompt_tokens
        usage["completion_tokens"] += completion_tokens
        usage["total_tokens"] += prompt_tokens + completion_tokens

    def get_usage(self) -> Dict[str, int]:
        """
        Get cumulative token usage.

        Returns:
            Dict with prompt_tokens, completion_tokens, total_tokens
        """
        return dict(self._get_usage())

    def reset_usage(self) -> None:
        """Reset token usage counters to zero."""
        self._usage = {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}

    @abstractmethod
    def generate(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None,
        **kwargs: Any,
    ) -> str:
        """
        Generate text from prompt.

        Args:
            prompt: Input prompt
            config: Generation configuration

        Returns:
            Generated text

        Raises:
            CollaboratorUnavailable: If no response could be produced
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and configured."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        pass

    @property
    def context_length(self) -> int:
        """Context window size in tokens, from the lookup table."""
        return get_model_context_length(self.model_name)

    @property
    def supports_json_mode(self) -> bool:
        """Whether this provider supports JSON mode output."""
        return False

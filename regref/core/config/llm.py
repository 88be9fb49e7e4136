"""
LLM configuration.

Only the Gemini provider is wired up; the provider key is kept so that
config files state explicitly which backend they target.
"""

from dataclasses import dataclass


@dataclass
class LLMConfig:
    """Inference provider configuration."""

    provider: str = "gemini"
    model: str = "gemini-1.5-flash"
    api_key: str = ""
    temperature: float = 0.1  # Reference extraction is factual work
    max_tokens: int = 8192
    timeout_seconds: int = 120

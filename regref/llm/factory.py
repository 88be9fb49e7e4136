"""
LLM provider factory.

Create and configure LLM clients based on configuration.
"""

from regref.core.config import Config
from regref.core.exceptions import ConfigurationError
from regref.core.logging import get_logger
from regref.llm.base import GenerationConfig, LLMClient

logger = get_logger(__name__)

SUPPORTED_PROVIDERS = ("gemini",)


def get_generation_config(config: Config, **overrides) -> GenerationConfig:
    """
    Build the GenerationConfig for reference extraction.

    JSON mode is on: the normalizer expects a JSON array back.
    """
    settings = {
        "max_tokens": config.llm.max_tokens,
        "temperature": config.llm.temperature,
        "json_mode": True,
        "timeout_seconds": config.llm.timeout_seconds,
    }
    settings.update(overrides)
    return GenerationConfig(**settings)


def _create_gemini_client(config: Config) -> LLMClient:
    from regref.llm.gemini import GeminiClient

    return GeminiClient(
        api_key=config.llm.api_key or None,
        model=config.llm.model,
    )


def get_llm_client(config: Config) -> LLMClient:
    """
    Create the LLM client named by config.llm.provider.

    Raises:
        ConfigurationError: If the provider is not supported
    """
    provider = config.llm.provider.lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unsupported LLM provider '{config.llm.provider}'. "
            f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    client = _create_gemini_client(config)
    if not client.is_available():
        logger.warning("LLM client is not configured", provider=provider)
    return client

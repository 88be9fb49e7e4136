"""
LLM provider abstraction.

    from regref.llm import get_llm_client, get_generation_config

    client = get_llm_client(config)
    text = client.generate(prompt, get_generation_config(config))
"""

from regref.llm.base import GenerationConfig, LLMClient
from regref.llm.factory import get_generation_config, get_llm_client

__all__ = ["GenerationConfig", "LLMClient", "get_generation_config", "get_llm_client"]

"""
Configuration Management for RegRef.

This module provides the application's configuration system using a hierarchy
of dataclasses that map to YAML configuration files.

Public API
----------
    from regref.core.config import Config, LLMConfig

Loading functions live in config_loaders to avoid circular imports:

    from regref.core.config_loaders import load_config

Architecture
------------
    config/
    ├── base.py          # CollectionConfig, OutputConfig, LoggingConfig
    ├── llm.py           # LLMConfig
    └── config.py        # Main Config class
"""

from regref.core.config.config import Config
from regref.core.config.base import CollectionConfig, LoggingConfig, OutputConfig
from regref.core.config.llm import LLMConfig

__all__ = [
    "Config",
    "CollectionConfig",
    "OutputConfig",
    "LoggingConfig",
    "LLMConfig",
]

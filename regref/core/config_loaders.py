"""
Configuration Loading and Management Functions.

Handles loading, saving, and applying environment overrides to RegRef
configuration.

Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults.

Secrets are usually kept in a .env.local file next to config.yaml:

    GEMINI_API_KEY=...

which is loaded with python-dotenv before overrides are applied. Values
already present in the process environment are never replaced by it.
"""

import os
import re
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml
from dotenv import load_dotenv

from regref.core.logging import get_logger

if TYPE_CHECKING:
    from regref.core.config import Config

logger = get_logger(__name__)

CONFIG_FILENAMES = ("config.yaml", "regref.yaml")
ENV_FILENAME = ".env.local"

# Model names: alphanumeric, dash, underscore, dot, colon, slash
_MODEL_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._:\-/]+$")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles nested structures including:
    - Strings with ${VAR_NAME} or ${VAR_NAME:default} syntax
    - Nested dictionaries
    - Nested lists

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    """
    api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
    if api_key:
        config.llm.api_key = api_key

    collection_dir = os.environ.get("REGREF_COLLECTION_DIR")
    if collection_dir:
        config.collection.directory = collection_dir

    llm_model = os.environ.get("REGREF_LLM_MODEL")
    if llm_model:
        if _MODEL_NAME_PATTERN.match(llm_model):
            config.llm.model = llm_model
        else:
            logger.warning(f"Ignoring invalid REGREF_LLM_MODEL '{llm_model}'")

    log_level = os.environ.get("REGREF_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    config.validate()
    return config


def _find_config_file(base_path: Path) -> Optional[Path]:
    """Return the first existing config file in base_path."""
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Defaults to config.yaml in base_path.
        base_path: Base path for the project. Defaults to the config file's
            directory, or the current directory.

    Returns:
        Config object with all settings.
    """
    # Lazy import to avoid circular dependency
    from regref.core.config import Config

    if base_path is None:
        base_path = config_path.parent if config_path else Path.cwd()
    base_path = base_path.resolve()

    load_dotenv(base_path / ENV_FILENAME, override=False)

    if config_path is None:
        config_path = _find_config_file(base_path)
    elif not config_path.exists():
        logger.warning(f"Config file {config_path} not found, using defaults")
        return _create_default_config(base_path)
    if config_path is None:
        return _create_default_config(base_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top-level YAML value must be a mapping")
        config = Config.from_dict(data, base_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(
            f"Could not load config from {config_path}, using defaults", error=str(e)
        )
        return _create_default_config(base_path)

    return _apply_env_overrides(config)


def _create_default_config(base_path: Path) -> "Config":
    """Create default configuration with environment overrides."""
    # Lazy import to avoid circular dependency
    from regref.core.config import Config

    config = Config()
    config._base_path = base_path
    return _apply_env_overrides(config)


def save_config(config: "Config", config_path: Optional[Path] = None) -> Path:
    """Save configuration to YAML file (the API key is never written)."""
    if config_path is None:
        config_path = config.base_path / CONFIG_FILENAMES[0]

    config_dict = config.to_dict()
    config_dict["llm"]["api_key"] = "${GEMINI_API_KEY}"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
    return config_path

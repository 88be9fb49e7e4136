"""
Main configuration class for RegRef.

This module provides the Config dataclass that aggregates all sub-configs
and handles validation, path management, and dictionary parsing.

Architecture Context
--------------------
Configuration sits at the Core layer. The Config object is created once at
startup by the CLI and passed to the components that need settings:

    User's config.yaml
           ↓
    load_config() → Config object
           ↓
    Passed to: index builder, LLM factory, analyzer, report writer

Configuration Hierarchy
-----------------------
    Config
    ├── CollectionConfig   # Local circulars directory, metadata pages, workers
    ├── LLMConfig          # Provider, model, API key, timeout
    ├── OutputConfig       # Report directory and filename prefix
    └── LoggingConfig      # Level and optional log file

Environment Variables
---------------------
Secrets use ${VAR_NAME} syntax in YAML:

    llm:
      api_key: ${GEMINI_API_KEY}
      model: ${REGREF_LLM_MODEL:gemini-1.5-flash}  # with default
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from regref.core.config.base import CollectionConfig, LoggingConfig, OutputConfig
from regref.core.config.llm import LLMConfig
from regref.core.exceptions import ConfigValidationError

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Config:
    """Main RegRef configuration."""

    collection: CollectionConfig = field(default_factory=CollectionConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Runtime paths (set after loading)
    _base_path: Path = field(default_factory=Path.cwd, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Check value ranges; raises ConfigValidationError on the first problem."""
        if self.collection.metadata_pages < 1:
            raise ConfigValidationError(
                "collection.metadata_pages must be at least 1",
                field="collection.metadata_pages",
            )
        if self.collection.max_workers < 1:
            raise ConfigValidationError(
                "collection.max_workers must be at least 1",
                field="collection.max_workers",
            )
        if not self.collection.suffixes:
            raise ConfigValidationError(
                "collection.suffixes must not be empty",
                field="collection.suffixes",
            )
        if not 0.0 <= self.llm.temperature <= 2.0:
            raise ConfigValidationError(
                f"llm.temperature must be between 0 and 2, got {self.llm.temperature}",
                field="llm.temperature",
            )
        if self.llm.max_tokens < 1:
            raise ConfigValidationError(
                "llm.max_tokens must be positive", field="llm.max_tokens"
            )
        if self.llm.timeout_seconds < 1:
            raise ConfigValidationError(
                "llm.timeout_seconds must be positive", field="llm.timeout_seconds"
            )
        if self.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"logging.level must be one of {sorted(VALID_LOG_LEVELS)}",
                field="logging.level",
            )

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return self._base_path / path

    @property
    def base_path(self) -> Path:
        """Directory relative paths are resolved against."""
        return self._base_path

    @property
    def collection_path(self) -> Path:
        """Get absolute path to the local circular collection."""
        return self._resolve(self.collection.directory)

    @property
    def output_path(self) -> Path:
        """Get absolute path to the report output directory."""
        return self._resolve(self.output.directory)

    @property
    def log_file_path(self) -> Optional[Path]:
        """Get absolute path to the log file, if one is configured."""
        if not self.logging.file:
            return None
        return self._resolve(self.logging.file)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if key.startswith("_"):
                continue
            result[key] = value
        return result

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None.

        Numeric fields given as strings (typical after ${VAR} expansion) are
        converted to their declared type.
        """
        if not data:
            return {}
        field_types = {f.name: f.type for f in fields(cls_type)}
        result: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in field_types:
                continue
            wanted = field_types[key]
            if wanted in (int, float) and isinstance(value, str):
                try:
                    value = wanted(value)
                except ValueError:
                    raise ConfigValidationError(
                        f"{cls_type.__name__}.{key} must be a number, got '{value}'",
                        field=key,
                    ) from None
            result[key] = value
        return result

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_path: Optional[Path] = None
    ) -> "Config":
        """Create Config from dictionary."""
        # Import here to avoid circular dependency
        from regref.core.config_loaders import expand_env_vars

        data = expand_env_vars(data or {})

        config = cls(
            collection=CollectionConfig(
                **cls._filter_fields(CollectionConfig, data.get("collection"))
            ),
            llm=LLMConfig(**cls._filter_fields(LLMConfig, data.get("llm"))),
            output=OutputConfig(**cls._filter_fields(OutputConfig, data.get("output"))),
            logging=LoggingConfig(
                **cls._filter_fields(LoggingConfig, data.get("logging"))
            ),
        )

        if base_path:
            config._base_path = base_path

        return config

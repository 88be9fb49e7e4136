"""
Tests for Configuration Management.

Test Strategy
-------------
- Public API only: expand_env_vars(), Config, load_config(), save_config()
- Environment isolated per test with monkeypatch

Organization
------------
- TestExpandEnvVars: ${VAR} expansion
- TestConfigDefaults: default values and validation
- TestConfigFromDict: parsing and type coercion
- TestLoadConfig: YAML, env overrides, .env.local, fallbacks
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from regref.core.config import Config, LLMConfig
from regref.core.config_loaders import expand_env_vars, load_config, save_config
from regref.core.exceptions import ConfigValidationError

ENV_KEYS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "REGREF_COLLECTION_DIR",
    "REGREF_LLM_MODEL",
    "REGREF_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


class TestExpandEnvVars:
    def test_simple_expansion(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert expand_env_vars("${TEST_VAR}") == "test_value"

    def test_default_value(self):
        assert expand_env_vars("${REGREF_UNSET_VAR:fallback}") == "fallback"

    def test_missing_var_empty_string(self):
        assert expand_env_vars("${REGREF_UNSET_VAR}") == ""

    def test_nested(self):
        with patch.dict(os.environ, {"KEY": "v"}):
            result = expand_env_vars({"a": ["${KEY}", 1], "b": {"c": "${KEY}"}})

        assert result == {"a": ["v", 1], "b": {"c": "v"}}


class TestConfigDefaults:
    def test_defaults(self):
        config = Config()

        assert config.collection.directory == "circulars"
        assert config.collection.suffixes == [".pdf"]
        assert config.collection.metadata_pages == 2
        assert config.llm.provider == "gemini"
        assert config.llm.model == "gemini-1.5-flash"
        assert config.output.filename_prefix == "compliance_references"
        assert config.logging.level == "INFO"

    def test_relative_paths_resolve_against_base(self, temp_dir):
        config = Config()
        config._base_path = temp_dir

        assert config.collection_path == temp_dir / "circulars"
        assert config.output_path == temp_dir
        assert config.log_file_path is None

    @pytest.mark.parametrize(
        "llm",
        [
            LLMConfig(temperature=3.0),
            LLMConfig(max_tokens=0),
            LLMConfig(timeout_seconds=0),
        ],
    )
    def test_invalid_llm_values(self, llm):
        with pytest.raises(ConfigValidationError):
            Config(llm=llm)

    def test_invalid_log_level(self):
        config = Config()
        config.logging.level = "LOUD"

        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate()

        assert exc_info.value.field == "logging.level"


class TestConfigFromDict:
    def test_sections_parsed(self, temp_dir):
        data = {
            "collection": {"directory": "/abs/circulars", "max_workers": 8},
            "llm": {"model": "gemini-1.5-pro", "unknown_key": 1},
            "output": {"directory": "reports"},
        }

        config = Config.from_dict(data, temp_dir)

        assert config.collection_path == Path("/abs/circulars")
        assert config.collection.max_workers == 8
        assert config.llm.model == "gemini-1.5-pro"
        assert config.output_path == temp_dir / "reports"

    def test_numeric_strings_coerced(self):
        with patch.dict(os.environ, {"WORKERS": "6"}):
            config = Config.from_dict(
                {"collection": {"max_workers": "${WORKERS}"}, "llm": {"temperature": "0.4"}}
            )

        assert config.collection.max_workers == 6
        assert config.llm.temperature == 0.4

    def test_bad_number(self):
        with pytest.raises(ConfigValidationError):
            Config.from_dict({"collection": {"metadata_pages": "two"}})

    def test_to_dict_round_trip(self):
        config = Config.from_dict({"llm": {"model": "gemini-1.5-pro"}})

        assert Config.from_dict(config.to_dict()).to_dict() == config.to_dict()
        assert "_base_path" not in config.to_dict()


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, temp_dir):
        config = load_config(base_path=temp_dir)

        assert config.collection.directory == "circulars"
        assert config.base_path == temp_dir.resolve()

    def test_named_file_missing_warns(self, temp_dir, caplog):
        config = load_config(temp_dir / "custom.yaml")

        assert config.collection.directory == "circulars"
        assert "custom.yaml not found, using defaults" in caplog.text

    def test_discovered_file_absent_is_silent(self, temp_dir, caplog):
        load_config(base_path=temp_dir)

        assert "not found" not in caplog.text

    def test_yaml_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(
            yaml.dump({"collection": {"directory": "docs"}, "logging": {"level": "DEBUG"}})
        )

        config = load_config(path)

        assert config.collection_path == temp_dir.resolve() / "docs"
        assert config.logging.level == "DEBUG"

    def test_alternate_filename(self, temp_dir):
        (temp_dir / "regref.yaml").write_text("output:\n  filename_prefix: refs\n")

        config = load_config(base_path=temp_dir)

        assert config.output.filename_prefix == "refs"

    def test_invalid_yaml_falls_back(self, temp_dir, caplog):
        path = temp_dir / "config.yaml"
        path.write_text("collection: [unclosed\n")

        config = load_config(path)

        assert config.collection.directory == "circulars"
        assert "using defaults" in caplog.text

    def test_non_mapping_falls_back(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- just\n- a list\n")

        assert load_config(path).collection.directory == "circulars"

    def test_env_overrides(self, temp_dir, monkeypatch):
        (temp_dir / "config.yaml").write_text("llm:\n  api_key: from-file\n")
        monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
        monkeypatch.setenv("REGREF_COLLECTION_DIR", "/env/circulars")
        monkeypatch.setenv("REGREF_LLM_MODEL", "gemini-1.5-pro")
        monkeypatch.setenv("REGREF_LOG_LEVEL", "warning")

        config = load_config(base_path=temp_dir)

        assert config.llm.api_key == "from-env"
        assert config.collection.directory == "/env/circulars"
        assert config.llm.model == "gemini-1.5-pro"
        assert config.logging.level == "WARNING"

    def test_invalid_model_override_ignored(self, temp_dir, monkeypatch):
        monkeypatch.setenv("REGREF_LLM_MODEL", "bad model; rm -rf")

        assert load_config(base_path=temp_dir).llm.model == "gemini-1.5-flash"

    def test_env_local_file(self, temp_dir):
        (temp_dir / ".env.local").write_text("GEMINI_API_KEY=dotenv-key\n")

        config = load_config(base_path=temp_dir)

        assert config.llm.api_key == "dotenv-key"

    def test_save_never_writes_key(self, temp_dir):
        config = load_config(base_path=temp_dir)
        config.llm.api_key = "secret-value"

        path = save_config(config)

        text = path.read_text()
        assert "secret-value" not in text
        assert "${GEMINI_API_KEY}" in text
        assert path == temp_dir.resolve() / "config.yaml"

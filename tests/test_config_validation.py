"""
Tests for Pydantic configuration validation.

Verifies that BuilderConfig validates its values and that YAML files load
and save cleanly.
"""

import pytest
from pydantic import ValidationError

from ts_interface_builder.config import BuilderConfig, load_config, save_config
from ts_interface_builder.config.models import DEFAULT_HEADER
from ts_interface_builder.exceptions import ConfigurationError


class TestConfigValidation:
    """Test configuration validation with Pydantic."""

    def test_default_config(self):
        """Defaults match the command line without options."""
        config = BuilderConfig()

        assert config.output.suffix == "-ti"
        assert config.output.extension == ".ts"
        assert config.output.out_dir is None
        assert config.output.header == DEFAULT_HEADER
        assert config.compiler.deferred_wrapper == "Promise"
        assert config.compiler.fallback_name == "unknown"
        assert config.compiler.runtime_module == "ts-interface-checker"
        assert config.logging.level == "WARNING"

    def test_suffix_validation(self):
        assert BuilderConfig(output={"suffix": ".checker"}).output.suffix == ".checker"

        with pytest.raises(ValidationError) as exc_info:
            BuilderConfig(output={"suffix": "../escape"})
        assert "path separators" in str(exc_info.value)

    def test_extension_validation(self):
        with pytest.raises(ValidationError) as exc_info:
            BuilderConfig(output={"extension": "ts"})
        assert "extension must start with" in str(exc_info.value)

    def test_blank_compiler_values_are_rejected(self):
        with pytest.raises(ValidationError):
            BuilderConfig(compiler={"deferred_wrapper": "  "})

    def test_logging_level_is_normalized(self):
        assert BuilderConfig(logging={"level": "debug"}).logging.level == "DEBUG"

        with pytest.raises(ValidationError) as exc_info:
            BuilderConfig(logging={"level": "LOUD"})
        assert "level must be one of" in str(exc_info.value)

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            BuilderConfig(clustering={"algorithm": "louvain"})

    def test_assignment_is_validated(self):
        config = BuilderConfig()
        with pytest.raises(ValidationError):
            config.output = {"suffix": "a/b"}


class TestConfigFiles:
    def test_round_trip(self, tmp_path):
        config = BuilderConfig(output={"suffix": "-check", "out_dir": "generated"})
        config_file = tmp_path / "nested" / "config.yaml"

        save_config(config, config_file)
        loaded = load_config(config_file)

        assert loaded == config

    def test_partial_file_keeps_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("compiler:\n  deferred_wrapper: Deferred\n")

        config = load_config(config_file)
        assert config.compiler.deferred_wrapper == "Deferred"
        assert config.output.suffix == "-ti"

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(config_file) == BuilderConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(config_file)

    def test_non_mapping_root(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_file)

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output:\n  extension: js\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(config_file)

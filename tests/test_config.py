"""Test configuration loading"""

from pathlib import Path

import pytest

from xspf_tools.core.config import CONFIG_FILENAME, Config, load_config
from xspf_tools.core.exceptions import ConfigError


def write_config(directory, content):
    path = directory / CONFIG_FILENAME
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    """Test load_config()"""

    def test_defaults_without_file(self, temp_dir, monkeypatch):
        """Test a missing default config file means all defaults"""
        monkeypatch.chdir(temp_dir)

        config = load_config()

        assert config == Config()
        assert config.extractor.max_sequence_digits == 3
        assert config.copy.position_width == 3
        assert config.json.indent == 2
        assert config.logging.directory is None

    def test_config_in_working_directory(self, temp_dir, monkeypatch):
        """Test xspf_tools.yaml in the working directory is picked up"""
        write_config(temp_dir, "json:\n  indent: 4\n")
        monkeypatch.chdir(temp_dir)

        assert load_config().json.indent == 4

    def test_full_config(self, temp_dir):
        """Test every section is read"""
        path = write_config(temp_dir, (
            "extractor:\n"
            "  max_sequence_digits: 4\n"
            "  date_from_directory: false\n"
            "copy:\n"
            "  position_width: 2\n"
            "  preserve_timestamps: false\n"
            "json:\n"
            "  indent: 0\n"
            "logging:\n"
            f"  directory: {temp_dir / 'logs'}\n"
            "  console_level: debug\n"
        ))

        config = load_config(path)

        assert config.extractor.max_sequence_digits == 4
        assert config.extractor.date_from_directory is False
        assert config.copy.position_width == 2
        assert config.copy.preserve_timestamps is False
        assert config.json.indent == 0
        assert config.logging.directory == (temp_dir / "logs").resolve()
        assert config.logging.console_level == "DEBUG"

    def test_partial_config_keeps_defaults(self, temp_dir):
        """Test absent sections and keys keep their defaults"""
        path = write_config(temp_dir, "copy:\n  position_width: 4\n")

        config = load_config(path)

        assert config.copy.position_width == 4
        assert config.copy.preserve_timestamps is True
        assert config.extractor == Config().extractor

    def test_empty_file(self, temp_dir):
        """Test an empty file is a valid all-defaults config"""
        assert load_config(write_config(temp_dir, "")) == Config()

    def test_missing_explicit_file(self, temp_dir):
        """Test an explicit path must exist"""
        with pytest.raises(ConfigError, match="not found"):
            load_config(temp_dir / "nope.yaml")

    def test_invalid_yaml(self, temp_dir):
        """Test YAML syntax errors raise ConfigError"""
        path = write_config(temp_dir, "copy: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_top_level_must_be_mapping(self, temp_dir):
        """Test a list at the top level is rejected"""
        with pytest.raises(ConfigError, match="dictionary"):
            load_config(write_config(temp_dir, "- a\n- b\n"))

    @pytest.mark.parametrize("content,field", [
        ("copy:\n  position_width: 0\n", "copy.position_width"),
        ("copy:\n  position_width: three\n", "copy.position_width"),
        ("json:\n  indent: true\n", "json.indent"),
        ("extractor:\n  max_sequence_digits: 10\n", "extractor.max_sequence_digits"),
        ("extractor:\n  date_from_directory: maybe\n", "extractor.date_from_directory"),
        ("logging:\n  console_level: LOUD\n", "logging.console_level"),
    ])
    def test_invalid_values(self, temp_dir, content, field):
        """Test out-of-range and wrongly typed values are rejected"""
        with pytest.raises(ConfigError) as exc_info:
            load_config(write_config(temp_dir, content))

        assert exc_info.value.details["field"] == field

    def test_section_must_be_mapping(self, temp_dir):
        """Test a scalar section is rejected"""
        with pytest.raises(ConfigError, match="Section 'copy'"):
            load_config(write_config(temp_dir, "copy: 3\n"))

    def test_config_is_frozen(self):
        """Test configuration objects cannot be modified"""
        config = Config()

        with pytest.raises(AttributeError):
            config.json = None

    def test_home_directory_expanded(self, temp_dir, monkeypatch):
        """Test ~ in the log directory is expanded"""
        monkeypatch.setenv("HOME", str(temp_dir))
        path = write_config(temp_dir, "logging:\n  directory: ~/logs\n")

        assert load_config(path).logging.directory == (Path(temp_dir) / "logs").resolve()

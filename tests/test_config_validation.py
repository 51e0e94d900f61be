"""Tests for config validation."""

import pytest

from proposal_writer.config import load_config


class TestConfigValidation:
    def test_valid_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config.llm.timeout == 60
        assert config.pipeline.timeout_seconds == 180

    def test_invalid_temperature(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("proposal:\n  temperature: 1.5\n")
        with pytest.raises(ValueError, match="temperature"):
            load_config(yaml)

    def test_invalid_max_tokens(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("analysis:\n  max_tokens: 0\n")
        with pytest.raises(ValueError, match="max_tokens"):
            load_config(yaml)

    def test_invalid_timeout(self, tmp_path):
        """timeout of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_unknown_default_technology(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("pipeline:\n  default_technology: angular\n")
        with pytest.raises(ValueError, match="default_technology"):
            load_config(yaml)

    def test_empty_sections_use_defaults(self, tmp_path):
        yaml = tmp_path / "sparse.yaml"
        yaml.write_text("llm:\npipeline:\n  # nothing set yet\ncatalog:\n")
        config = load_config(yaml)
        assert config.llm.timeout == 60
        assert config.pipeline.default_technology == "Fullstack"
        assert config.catalog.resolved_path is None

    def test_empty_section_beside_invalid_one(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("pipeline:\nproposal:\n  temperature: -1\n")
        with pytest.raises(ValueError, match="temperature"):
            load_config(yaml)

"""
Tests for configuration loading.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import ServiceConfig, load_config, DEFAULT_AUDIT_LOG


@pytest.fixture
def config_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


class TestLoadConfig:
    """Test load_config."""

    def test_missing_file_gives_defaults(self, config_dir):
        config = load_config(str(config_dir / "absent.yaml"))

        assert config.audit_enabled is True
        assert config.audit_log_path == DEFAULT_AUDIT_LOG
        assert config.delete_collect_errors is False

    def test_reads_filepane_section(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("""filepane:
  audit:
    enabled: false
    log_path: /var/log/filepane.jsonl
  delete:
    collect_errors: true
""")

        config = load_config(str(path))

        assert config.audit_enabled is False
        assert config.audit_log_path == "/var/log/filepane.jsonl"
        assert config.delete_collect_errors is True
        assert config.config_path == str(path)

    def test_bare_mapping_accepted(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("delete:\n  collect_errors: true\n")

        assert load_config(str(path)).delete_collect_errors is True

    def test_invalid_yaml_falls_back(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("filepane: [unclosed\n")

        config = load_config(str(path))

        assert config.audit_enabled is True

    def test_non_mapping_falls_back(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("- just\n- a list\n")

        assert load_config(str(path)).audit_log_path == DEFAULT_AUDIT_LOG


class TestSaveConfig:
    """Test ServiceConfig.save."""

    def test_save_round_trip(self, config_dir):
        path = config_dir / "out.yaml"
        ServiceConfig(audit_enabled=False, delete_collect_errors=True).save(str(path))

        config = load_config(str(path))

        assert config.audit_enabled is False
        assert config.delete_collect_errors is True

    def test_save_keeps_other_sections(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("theme:\n  dark: true\n")

        ServiceConfig(config_path=str(path)).save()

        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
        assert document["theme"] == {"dark": True}
        assert document["filepane"]["audit"]["enabled"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

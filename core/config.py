"""
Configuration for Filepane.

Settings live in a YAML file under a top-level ``filepane`` key. A missing
or unreadable file falls back to defaults so the service always starts.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_AUDIT_LOG = "data/audit_log.jsonl"


@dataclass
class ServiceConfig:
    """Runtime settings for the file service and its audit log."""
    audit_enabled: bool = True
    audit_log_path: str = DEFAULT_AUDIT_LOG
    delete_collect_errors: bool = False
    config_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_path: Optional[str] = None) -> "ServiceConfig":
        """Build a config from the parsed ``filepane`` mapping."""
        audit = data.get("audit") or {}
        delete = data.get("delete") or {}
        return cls(
            audit_enabled=bool(audit.get("enabled", True)),
            audit_log_path=str(audit.get("log_path", DEFAULT_AUDIT_LOG)),
            delete_collect_errors=bool(delete.get("collect_errors", False)),
            config_path=config_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "audit": {
                "enabled": self.audit_enabled,
                "log_path": self.audit_log_path,
            },
            "delete": {
                "collect_errors": self.delete_collect_errors,
            },
        }

    def save(self, config_path: Optional[str] = None) -> Path:
        """
        Write the settings back to YAML, keeping unrelated top-level keys.

        Args:
            config_path: Destination file (defaults to where it was loaded from)

        Returns:
            Path the config was written to
        """
        path = Path(config_path or self.config_path or DEFAULT_CONFIG_PATH)
        document: Dict[str, Any] = {}

        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                existing = yaml.safe_load(f)
            if isinstance(existing, dict):
                document = existing

        document["filepane"] = self.to_dict()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(document, f, default_flow_style=False)
        return path


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> ServiceConfig:
    """
    Load settings from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        ServiceConfig, with defaults for anything not set
    """
    path = Path(config_path)
    if not path.exists():
        return ServiceConfig(config_path=str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return ServiceConfig(config_path=str(path))

    if not isinstance(raw, dict):
        return ServiceConfig(config_path=str(path))

    section = raw.get("filepane", raw)
    if not isinstance(section, dict):
        section = {}
    return ServiceConfig.from_dict(section, config_path=str(path))

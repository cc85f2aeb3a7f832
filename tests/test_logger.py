"""
Tests for the Audit Logger module.
"""

import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logger import AuditLogger, AuditEntry, ActionType, ActionStatus


class TestAuditEntry:
    """Test AuditEntry dataclass."""

    def test_create_sets_timestamp(self):
        entry = AuditEntry.create(
            action_type=ActionType.COPY,
            action_description="Copy a to b",
            target="b"
        )

        assert entry.timestamp
        assert entry.action_type == "copy"
        assert entry.status == "executed"
        assert entry.metadata == {}

    def test_json_round_trip(self):
        entry = AuditEntry.create(
            action_type=ActionType.DELETE,
            action_description="Delete file: x",
            target="x",
            status=ActionStatus.FAILED,
            result="IO_ERROR: boom",
            metadata={"recursive": False}
        )

        assert AuditEntry.from_json(entry.to_json()) == entry


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        for leftover in Path(f.name).parent.glob(Path(f.name).stem + "*"):
            os.unlink(leftover)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_creates_missing_directory(self):
        with tempfile.TemporaryDirectory() as d:
            logger = AuditLogger(log_path=os.path.join(d, "nested", "audit.jsonl"))

            assert logger.log_path.exists()

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.LIST,
            description="Test action",
            target="/tmp",
            status=ActionStatus.EXECUTED
        )

        assert entry.action_description == "Test action"
        assert entry.status == "executed"
        with open(logger.log_path, encoding="utf-8") as f:
            assert json.loads(f.readline())["target"] == "/tmp"

    def test_get_recent(self, logger):
        """Most recent entries come first."""
        for i in range(5):
            logger.log_action(
                action_type=ActionType.LIST,
                description=f"Action {i}"
            )

        entries = logger.get_recent(limit=3)

        assert len(entries) == 3
        assert entries[0].action_description == "Action 4"

    def test_get_recent_skips_corrupt_lines(self, logger):
        logger.log_action(action_type=ActionType.LIST, description="good")
        with open(logger.log_path, "a", encoding="utf-8") as f:
            f.write("{truncated\n")

        entries = logger.get_recent()

        assert [e.action_description for e in entries] == ["good"]

    def test_get_by_action_type(self, logger):
        logger.log_action(action_type=ActionType.COPY, description="copy one")
        logger.log_action(action_type=ActionType.MOVE, description="move one")
        logger.log_action(action_type=ActionType.COPY, description="copy two")

        copies = logger.get_by_action_type(ActionType.COPY)

        assert [e.action_description for e in copies] == ["copy one", "copy two"]

    def test_get_failed_actions(self, logger):
        """Test getting failed actions."""
        logger.log_action(
            action_type=ActionType.DELETE,
            description="Failed delete",
            status=ActionStatus.FAILED
        )
        logger.log_action(action_type=ActionType.DELETE, description="Good delete")

        failed = logger.get_failed_actions()

        assert len(failed) == 1
        assert failed[0].action_description == "Failed delete"

    def test_export_json(self, logger):
        logger.log_action(action_type=ActionType.RENAME, description="Rename a to b")

        exported = json.loads(logger.export("json"))

        assert exported[0]["action_type"] == "rename"

    def test_export_csv(self, logger):
        logger.log_action(action_type=ActionType.CREATE, description="Create dir", target="/tmp/x")

        lines = logger.export("csv").splitlines()

        assert lines[0].startswith("timestamp,action_type")
        assert '"create"' in lines[1]
        assert '"/tmp/x"' in lines[1]

    def test_export_unknown_format(self, logger):
        with pytest.raises(ValueError):
            logger.export("xml")

    def test_clear_requires_confirmation(self, logger):
        logger.log_action(action_type=ActionType.LIST, description="keep me")

        assert logger.clear() is False
        assert len(logger.get_recent()) == 1

    def test_clear_with_backup(self, logger):
        logger.log_action(action_type=ActionType.LIST, description="old")

        assert logger.clear(confirm=True) is True
        assert logger.get_recent() == []
        backups = list(logger.log_path.parent.glob(logger.log_path.stem + ".backup.*"))
        assert len(backups) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

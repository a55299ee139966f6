"""Tests for the interactive entry point."""

import json
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from mongo_restore.backup.models import CollectionResult, RestoreReport
from mongo_restore.cli import ask, main, prompt_for_config
from mongo_restore.exceptions import BackupFileError, StorageConnectionError


def scripted(*answers):
    """Return an input() replacement that replays answers and records prompts."""
    remaining = list(answers)
    prompts = []

    def _input(prompt):
        prompts.append(prompt)
        return remaining.pop(0)

    _input.prompts = prompts
    return _input


def make_report(*results):
    return RestoreReport(
        backup_file="backup.json",
        database="shop",
        started_at=datetime.now(timezone.utc),
        collections=list(results),
    )


class TestPrompts:
    """Test prompting and validation."""

    def test_ask_rejects_blank(self, capsys):
        input_func = scripted("", "   ", "shop")

        assert ask("Database?", error="Database name cannot be empty.", input_func=input_func) == "shop"
        assert capsys.readouterr().out.count("Database name cannot be empty.") == 2

    def test_ask_uses_default(self):
        input_func = scripted("")

        assert ask("Database?", default="shop", input_func=input_func) == "shop"
        assert input_func.prompts == ["Database? (shop) "]

    def test_ask_strips_answer(self):
        assert ask("Database?", input_func=scripted("  shop  ")) == "shop"

    def test_prompt_for_config_with_defaults(self):
        defaults = {
            "backupFilePath": "old.json",
            "dbUri": "mongodb://localhost:27017",
            "dbName": "shop",
        }

        config = prompt_for_config(defaults, scripted("new.json", "", ""))

        assert config.backup_file_path == "new.json"
        assert config.db_uri == "mongodb://localhost:27017"
        assert config.db_name == "shop"


class TestMain:
    """Test the end-to-end CLI flow with the restorer mocked."""

    def test_first_run_saves_preferences(self, tmp_path):
        prefs = tmp_path / "config.json"
        report = make_report(CollectionResult(name="users", status="restored", inserted_count=1))

        with patch('mongo_restore.cli.Restorer') as mock_restorer:
            mock_restorer.return_value.restore = AsyncMock(return_value=report)
            code = main(prefs, scripted("backup.json", "mongodb://localhost:27017", "shop"))

        assert code == 0
        assert json.loads(prefs.read_text()) == {
            "backupFilePath": "backup.json",
            "dbUri": "mongodb://localhost:27017",
            "dbName": "shop",
        }
        config = mock_restorer.call_args.args[0]
        assert config.db_name == "shop"

    def test_existing_preferences_not_overwritten(self, tmp_path):
        prefs = tmp_path / "config.json"
        saved = {"backupFilePath": "a.json", "dbUri": "mongodb://a", "dbName": "a"}
        prefs.write_text(json.dumps(saved))

        with patch('mongo_restore.cli.Restorer') as mock_restorer:
            mock_restorer.return_value.restore = AsyncMock(return_value=make_report())
            code = main(prefs, scripted("b.json", "", "b"))

        assert code == 0
        assert json.loads(prefs.read_text()) == saved
        config = mock_restorer.call_args.args[0]
        assert config.backup_file_path == "b.json"
        assert config.db_uri == "mongodb://a"

    def test_failed_collection_exit_code(self, tmp_path):
        report = make_report(CollectionResult(name="users", status="failed", error="boom"))

        with patch('mongo_restore.cli.Restorer') as mock_restorer:
            mock_restorer.return_value.restore = AsyncMock(return_value=report)
            code = main(tmp_path / "config.json", scripted("b.json", "mongodb://a", "b"))

        assert code == 1

    @pytest.mark.parametrize("error", [
        BackupFileError("missing.json", "file not found"),
        StorageConnectionError("mongodb://a", "timed out"),
    ])
    def test_fatal_error_reported_once(self, tmp_path, capsys, error):
        with patch('mongo_restore.cli.Restorer') as mock_restorer:
            mock_restorer.return_value.restore = AsyncMock(side_effect=error)
            code = main(tmp_path / "config.json", scripted("missing.json", "mongodb://a", "b"))

        assert code == 1
        out = capsys.readouterr().out
        assert out.count("Error during backup restoration") == 1
        assert error.message in out

    def test_missing_backup_file_end_to_end(self, tmp_path, capsys):
        """Test that a missing file aborts without creating a MongoDB client."""
        with patch('mongo_restore._storage.mongo.AsyncMongoClient') as mock_client:
            code = main(
                tmp_path / "config.json",
                scripted(str(tmp_path / "missing.json"), "mongodb://localhost:27017", "shop"),
            )

        assert code == 1
        mock_client.assert_not_called()
        assert "file not found" in capsys.readouterr().out

    def test_keyboard_interrupt(self, tmp_path):
        def interrupted(prompt):
            raise KeyboardInterrupt

        assert main(tmp_path / "config.json", interrupted) == 130
        assert not (tmp_path / "config.json").exists()

    def test_corrupt_preferences(self, tmp_path):
        prefs = tmp_path / "config.json"
        prefs.write_text("{")

        assert main(prefs, scripted()) == 1

    def test_preferences_directory(self, tmp_path, capsys):
        prefs = tmp_path / "config.json"
        prefs.mkdir()

        assert main(prefs, lambda prompt: "x") == 1
        assert "Cannot read preferences file" in capsys.readouterr().out

    def test_unwritable_preferences(self, tmp_path, capsys):
        prefs = tmp_path / "missing" / "config.json"

        with patch('mongo_restore.cli.Restorer') as mock_restorer:
            code = main(prefs, scripted("b.json", "mongodb://a", "b"))

        assert code == 1
        mock_restorer.assert_not_called()
        assert "Cannot write preferences file" in capsys.readouterr().out

    def test_unexpected_error_reported_once(self, tmp_path, capsys):
        with patch('mongo_restore.cli.Restorer') as mock_restorer:
            mock_restorer.return_value.restore = AsyncMock(side_effect=RuntimeError("boom"))
            code = main(tmp_path / "config.json", scripted("b.json", "mongodb://a", "b"))

        assert code == 1
        out = capsys.readouterr().out
        assert out.count("Something went wrong: boom") == 1
        assert "Traceback" not in out

    def test_closed_stdin(self, tmp_path):
        def closed(prompt):
            raise EOFError

        assert main(tmp_path / "config.json", closed) == 130
        assert not (tmp_path / "config.json").exists()

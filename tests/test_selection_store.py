"""Tests for the state.json storage helpers."""
from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from agent_selection.state.store import (
    file_exists,
    file_to_table,
    get_state_file_path,
    table_to_file,
)


class TestStatePath:
    def test_fixed_file_name(self):
        assert get_state_file_path("/tmp") == Path("/tmp/state.json")

    def test_accepts_path(self, tmp_path):
        assert get_state_file_path(tmp_path) == tmp_path / "state.json"


class TestReadWrite:
    def test_missing_file(self, tmp_path):
        assert file_exists(tmp_path / "state.json") is False

    def test_directory_is_not_a_state_file(self, tmp_path):
        assert file_exists(tmp_path) is False

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        table = {"ollama": {"chat_agent": "Gemma-7B"}, "provider": "ollama"}

        table_to_file(table, path)

        assert file_exists(path) is True
        assert file_to_table(path) == table

    def test_write_overwrites(self, tmp_path):
        path = tmp_path / "state.json"
        table_to_file({"provider": "openai", "openai": {}}, path)
        table_to_file({"provider": "ollama"}, path)

        assert json.loads(path.read_text(encoding="utf-8")) == {
            "provider": "ollama",
        }

    def test_non_ascii_written_verbatim(self, tmp_path):
        path = tmp_path / "state.json"
        table_to_file({"provider": "modèle"}, path)
        assert "modèle" in path.read_text(encoding="utf-8")

    def test_decode_error_propagates(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            file_to_table(path)

    def test_failed_write_keeps_previous_file(self, tmp_path):
        """A write that dies halfway leaves the old document in place."""
        path = tmp_path / "state.json"
        table_to_file({"ollama": {"chat_agent": "Gemma-7B"}, "provider": "ollama"}, path)
        before = path.read_text(encoding="utf-8")

        def partial_dump(data, fh, **kwargs):
            fh.write('{"ollama": {')
            raise OSError(28, "No space left on device")

        with patch("agent_selection.state.store.json.dump", side_effect=partial_dump):
            with pytest.raises(OSError):
                table_to_file({"openai": {}, "provider": "openai"}, path)

        assert path.read_text(encoding="utf-8") == before
        assert list(tmp_path.iterdir()) == [path]

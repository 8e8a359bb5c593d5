"""Unit tests for loading and saving the data file."""

import json
import sys
from pathlib import Path

import pytest

from user_registry import storage
from user_registry.errors import DataFormatError, StorageError
from user_registry.models import User
from user_registry.repository import Data
from user_registry.storage import get_data_path, read_data, save_data


class TestReadData:
    """Test read_data edge cases."""

    def test_missing_file_is_empty(self, data_file):
        data = read_data(data_file)
        assert data.next_id == 0
        assert data.users() == []

    def test_empty_file_is_empty(self, data_file):
        data_file.write_text("")
        data = read_data(data_file)
        assert data.next_id == 0
        assert data.users() == []

    def test_reads_documented_example(self, data_file, john, jane):
        data_file.write_text(
            '{"i":2,"u":{"0":{"n":"John","s":"Doe","e":"john@x.com","p":"5551234"},'
            '"1":{"n":"Jane","s":"Roe","e":"jane@x.com","p":"5555678"}}}',
            encoding="utf-8",
        )
        data = read_data(data_file)
        assert data.next_id == 2
        assert data.user(0) == john
        assert data.user(1) == jane

    @pytest.mark.parametrize(
        "contents",
        [
            "{not json",
            "   ",
            "[1, 2]",
            '{"i": 0}',
            "[" * 100000,
        ],
    )
    def test_malformed_content_is_an_error(self, data_file, contents):
        data_file.write_text(contents)
        with pytest.raises(DataFormatError):
            read_data(data_file)

    @pytest.mark.skipif(
        not hasattr(sys, "set_int_max_str_digits"), reason="no int conversion limit before 3.11"
    )
    @pytest.mark.parametrize(
        "contents",
        [
            '{"i":' + "1" * 5000 + ',"u":{}}',
            '{"i":0,"u":{"' + "1" * 5000 + '":{"n":"a","s":"b","e":"c","p":"d"}}}',
        ],
    )
    def test_oversized_integers_are_an_error(self, data_file, contents):
        data_file.write_text(contents)
        with pytest.raises(DataFormatError):
            read_data(data_file)

    def test_invalid_utf8_is_an_error(self, data_file):
        data_file.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(DataFormatError):
            read_data(data_file)

    def test_directory_is_a_storage_error(self, tmp_path):
        with pytest.raises(StorageError) as excinfo:
            read_data(tmp_path)
        assert isinstance(excinfo.value.__cause__, OSError)


class TestSaveData:
    """Test save_data output and failure handling."""

    def test_save_and_reload(self, data_file, john, jane):
        data = Data()
        data.add_user(john)
        data.add_user(jane)
        data.remove_user(0)
        save_data(data_file, data)

        loaded = read_data(data_file)
        assert loaded.users() == [(1, jane)]
        assert loaded.next_id == 0

    def test_output_is_compact_json(self, data_file, john):
        data = Data()
        data.add_user(john)
        save_data(data_file, data)
        assert data_file.read_text(encoding="utf-8") == (
            '{"i":1,"u":{"0":{"n":"John","s":"Doe","e":"john@x.com","p":"5551234"}}}'
        )

    def test_overwrites_whole_file(self, data_file, john):
        data_file.write_text("x" * 4096)
        data = Data()
        data.add_user(john)
        save_data(data_file, data)
        assert json.loads(data_file.read_text(encoding="utf-8"))["i"] == 1
        assert not (data_file.parent / "users.txt.tmp").exists()

    def test_non_ascii_survives(self, data_file):
        data = Data()
        data.add_user(User("Zoë", "Müller", "zoe@x.com", "+49 30 1234"))
        save_data(data_file, data)
        assert read_data(data_file).user(0).first_name == "Zoë"

    def test_save_is_idempotent_over_load(self, data_file, john, jane):
        data = Data()
        data.add_user(john)
        data.add_user(jane)
        save_data(data_file, data)
        first = data_file.read_bytes()
        save_data(data_file, read_data(data_file))
        assert data_file.read_bytes() == first

    def test_unencodable_text_is_a_format_error(self, data_file):
        data = Data()
        data.add_user(User("J\udcff", "Doe", "j@x.com", "1"))
        with pytest.raises(DataFormatError):
            save_data(data_file, data)
        assert not data_file.exists()
        assert not (data_file.parent / "users.txt.tmp").exists()

    def test_failed_write_keeps_old_content(self, data_file):
        data_file.write_text("old")
        data = Data()
        data.add_user(User("J\udcff", "Doe", "j@x.com", "1"))
        with pytest.raises(DataFormatError):
            save_data(data_file, data)
        assert data_file.read_text() == "old"

    def test_missing_parent_is_a_storage_error(self, tmp_path):
        with pytest.raises(StorageError):
            save_data(tmp_path / "missing" / "users.txt", Data())
        assert not (tmp_path / "missing").exists()


class TestGetDataPath:
    """Test default data path resolution."""

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("USER_REGISTRY_DATA", str(tmp_path / "custom.json"))
        assert get_data_path() == tmp_path / "custom.json"

    def test_xdg_data_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("USER_REGISTRY_DATA", raising=False)
        monkeypatch.setattr(storage.sys, "platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert get_data_path() == tmp_path / "users_registry" / "users.txt"

    def test_linux_home_fallback(self, monkeypatch, tmp_path):
        monkeypatch.delenv("USER_REGISTRY_DATA", raising=False)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(storage.sys, "platform", "linux")
        monkeypatch.setattr(storage.Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_path() == tmp_path / ".local" / "share" / "users_registry" / "users.txt"

    def test_windows_appdata(self, monkeypatch, tmp_path):
        monkeypatch.delenv("USER_REGISTRY_DATA", raising=False)
        monkeypatch.setattr(storage.sys, "platform", "win32")
        monkeypatch.setenv("APPDATA", str(tmp_path))
        assert get_data_path() == Path(tmp_path) / "users_registry" / "users.txt"

    def test_windows_without_appdata(self, monkeypatch):
        monkeypatch.delenv("USER_REGISTRY_DATA", raising=False)
        monkeypatch.setattr(storage.sys, "platform", "win32")
        monkeypatch.delenv("APPDATA", raising=False)
        assert get_data_path() is None

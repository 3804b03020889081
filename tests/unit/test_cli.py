"""
Unit tests for the command line and service wiring.
"""

import json
import logging

import pytest

from lesson_trash import cli
from lesson_trash.lifecycle.manager import LessonLifecycleManager
from lesson_trash.store.interfaces import LessonStore
from lesson_trash.store.json_store import JsonFileLessonStore
from lesson_trash.store.memory import InMemoryLessonStore
from lesson_trash.store.supabase import SupabaseLessonStore
from lesson_trash.utils.config import Config
from lesson_trash.utils.di_container import DIContainer, configure_default_services, create_store


@pytest.fixture
def lessons_file(tmp_path, monkeypatch):
    """Point the json backend at a snapshot with one deleted lesson."""
    path = tmp_path / "lessons.json"
    path.write_text(json.dumps({
        "schema_version": "1.0",
        "data": {
            "lessons": [
                {"id": "a", "student_id": "stu_1", "instructor_id": "ins_1",
                 "date": "2024-01-15", "time": "09:00", "status": "deleted"},
                {"id": "b", "student_id": "stu_1", "instructor_id": "ins_1",
                 "date": "2024-01-16", "time": "09:00", "status": "scheduled"},
            ],
            "students": [{"id": "stu_1", "name": "Ben Reyes"}],
            "instructors": [{"id": "ins_1", "name": "Ana Cruz"}],
        },
    }), encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    for name in ("SUPABASE_URL", "SUPABASE_KEY", "LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LESSON_STORE_BACKEND", "json")
    monkeypatch.setenv("LESSON_STORE_PATH", str(path))
    return path


def statuses(path):
    data = json.loads(path.read_text(encoding="utf-8"))["data"]
    return {lesson["id"]: lesson["status"] for lesson in data["lessons"]}


class TestDIContainer:
    """Test cases for DIContainer."""

    def test_singleton_and_transient(self):
        """Test singletons are shared and transients are not."""
        container = DIContainer()
        container.register(list, list)
        container.register(dict, dict, singleton=True)

        assert container.resolve(list) is not container.resolve(list)
        assert container.resolve(dict) is container.resolve(dict)

    def test_missing_service(self):
        """Test resolving an unregistered type names what is available."""
        container = DIContainer()
        container.register(dict, dict)

        with pytest.raises(ValueError, match="Service not registered: list.*dict"):
            container.resolve(list)

    def test_default_services(self, lessons_file):
        """Test the default wiring builds a manager over the configured store."""
        container = DIContainer()
        configure_default_services(container)

        manager = container.resolve(LessonLifecycleManager)

        assert isinstance(manager.store, JsonFileLessonStore)
        assert manager.store is container.resolve(LessonStore)
        assert isinstance(container.resolve(logging.Logger), logging.Logger)

    def test_create_store_backends(self, monkeypatch, tmp_path):
        """Test each backend name maps to its store."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SUPABASE_URL", "https://school.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "service-key")

        monkeypatch.setenv("LESSON_STORE_BACKEND", "memory")
        assert isinstance(create_store(Config()), InMemoryLessonStore)

        monkeypatch.setenv("LESSON_STORE_BACKEND", "supabase")
        store = create_store(Config())
        assert isinstance(store, SupabaseLessonStore)
        store.close()


class TestCommandLine:
    """Test cases for the lesson-trash command."""

    def test_list(self, lessons_file, capsys):
        """Test list prints deleted lessons only."""
        assert cli.main(["list"]) == 0

        out = capsys.readouterr().out
        assert "Ben Reyes | Mon, Jan 15 at 09:00 with Ana Cruz | id=a" in out
        assert "id=b" not in out

    def test_list_empty(self, lessons_file, capsys, tmp_path, monkeypatch):
        """Test an empty trash prints the empty-state message."""
        monkeypatch.setenv("LESSON_STORE_PATH", str(tmp_path / "empty.json"))

        assert cli.main(["list"]) == 0
        assert "The trash is empty" in capsys.readouterr().out

    def test_restore(self, lessons_file):
        """Test restore clears the marker in the file."""
        assert cli.main(["restore", "a"]) == 0
        assert statuses(lessons_file)["a"] == "scheduled"

    def test_trash(self, lessons_file):
        """Test trash sets the marker in the file."""
        assert cli.main(["trash", "b"]) == 0
        assert statuses(lessons_file)["b"] == "deleted"

    def test_purge_with_confirmation(self, lessons_file, monkeypatch, capsys):
        """Test purge asks with the lesson description and deletes on yes."""
        prompts = []
        monkeypatch.setattr("builtins.input", lambda prompt: prompts.append(prompt) or "y")

        assert cli.main(["purge", "a"]) == 0
        assert "permanently delete lesson for Ben Reyes on 2024-01-15" in prompts[0]
        assert "a" not in statuses(lessons_file)

    def test_purge_cancelled(self, lessons_file, monkeypatch):
        """Test answering no keeps the lesson."""
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert cli.main(["purge", "a"]) == 1
        assert "a" in statuses(lessons_file)

    def test_purge_twice_with_yes(self, lessons_file):
        """Test a second purge of the same id still exits cleanly."""
        assert cli.main(["purge", "a", "--yes"]) == 0
        assert cli.main(["purge", "a", "--yes"]) == 0

    def test_blank_id_rejected(self, lessons_file, capsys):
        """Test malformed ids fail before touching the store."""
        before = lessons_file.read_text(encoding="utf-8")

        assert cli.main(["restore", " "]) == 1
        assert "Invalid lesson id" in capsys.readouterr().out
        assert lessons_file.read_text(encoding="utf-8") == before

    def test_invalid_config(self, lessons_file, monkeypatch, capsys):
        """Test configuration problems stop the command."""
        monkeypatch.setenv("LESSON_STORE_BACKEND", "supabase")

        assert cli.main(["list"]) == 1
        assert "Configuration validation failed" in capsys.readouterr().out

    def test_non_integer_setting_reported(self, lessons_file, monkeypatch, capsys):
        """Test a bad numeric setting is printed, not raised."""
        monkeypatch.setenv("STORE_TIMEOUT", "abc")

        assert cli.main(["list"]) == 1
        assert "STORE_TIMEOUT must be an integer" in capsys.readouterr().out

    def test_corrupt_lessons_file(self, lessons_file, capsys):
        """Test an unreadable snapshot is an error message, not a traceback."""
        lessons_file.write_bytes(b"\xff\xfe")

        assert cli.main(["list"]) == 1
        assert "ERROR: Cannot read lesson file" in capsys.readouterr().out

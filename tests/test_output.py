"""Tests for writing lorebooks to disk."""

import json

from src.lorebook.builder import build_entries
from src.lorebook.entries import BuildableEntry, BuilderConfig
from src.lorebook.models import Lorebook
from src.lorebook.output import default_output_dir, lorebook_name_for, write_lorebook


def sample_lorebook() -> Lorebook:
    return build_entries(
        BuilderConfig(
            entries=[
                BuildableEntry(name="Header", keys=[], text="Theme: fantasy"),
                BuildableEntry(name="Dog", keys=["dog"], text="A dog."),
            ]
        )
    )


def test_lorebook_name_for_uses_script_stem():
    assert lorebook_name_for("stories/example.py") == "example"
    assert lorebook_name_for("example") == "example"


def test_write_lorebook(tmp_path):
    lorebook = sample_lorebook()

    path = write_lorebook("example", lorebook, tmp_path)

    assert path == tmp_path / "example.lorebook"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["lorebookVersion"] == 1
    assert [e["displayName"] for e in data["entries"]] == ["Header", "Dog"]
    assert Lorebook.from_json(path.read_text(encoding="utf-8")) == lorebook


def test_write_lorebook_creates_directory(tmp_path):
    target = tmp_path / "out" / "books"

    path = write_lorebook("nested", sample_lorebook(), target)

    assert path.exists()
    assert path.parent == target


def test_write_lorebook_overwrites(tmp_path):
    write_lorebook("book", Lorebook(), tmp_path)
    path = write_lorebook("book", sample_lorebook(), tmp_path)

    assert len(json.loads(path.read_text(encoding="utf-8"))["entries"]) == 2


def test_output_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("LOREBOOK_OUTPUT_DIR", str(tmp_path / "env"))

    assert default_output_dir() == tmp_path / "env"

    path = write_lorebook("book", sample_lorebook())
    assert path == tmp_path / "env" / "book.lorebook"


def test_output_dir_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv("LOREBOOK_OUTPUT_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    path = write_lorebook("book", sample_lorebook())

    assert path.resolve() == (tmp_path / "book.lorebook").resolve()

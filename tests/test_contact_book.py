import json
from pathlib import Path

import pytest
from loguru import logger

from contactbook.contacts import (
    ContactBook,
    ContactFile,
    ContactIndexError,
    ContactSaveError,
    ContactValidationError,
    ValidationRule,
)


def _book(path: Path) -> ContactBook:
    book = ContactBook(ContactFile(path))
    book.load()
    return book


def _rows(book):
    return [c.as_row() for c in book.list()]


def test_missing_file_starts_empty_without_error(tmp_path: Path):
    book = _book(tmp_path / "contacts.json")
    assert book.list() == []
    assert book.load_error is None
    assert not (tmp_path / "contacts.json").exists()


def test_corrupt_file_falls_back_to_empty(tmp_path: Path):
    path = tmp_path / "contacts.json"
    path.write_text("{{{ definitely not contacts", encoding="utf-8")

    book = _book(path)

    assert book.list() == []
    assert book.load_error is not None
    assert book.load_error.path == path


@pytest.fixture()
def log_records():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


def test_missing_file_is_logged_as_info_only(tmp_path: Path, log_records):
    _book(tmp_path / "contacts.json")

    assert any(
        r["level"].name == "INFO" and r["message"].startswith("No contacts file") for r in log_records
    )
    assert not [r for r in log_records if r["level"].no >= logger.level("WARNING").no]


def test_discarded_file_is_logged_as_warning(tmp_path: Path, log_records):
    path = tmp_path / "contacts.json"
    path.write_text("[{\"name\": \"\"}]", encoding="utf-8")

    _book(path)

    warnings = [r for r in log_records if r["level"].name == "WARNING"]
    assert len(warnings) == 1
    assert warnings[0]["message"].startswith("Discarding unreadable contacts file")
    assert not any(r["message"].startswith("No contacts file") for r in log_records)


def test_every_mutation_is_persisted(tmp_path: Path):
    path = tmp_path / "contacts.json"
    book = _book(path)

    result = book.add("Jane Doe", "555-1234", "jane@example.com")
    assert result.saved is True
    assert result.index == 0
    assert _rows(_book(path)) == [("Jane Doe", "555-1234", "jane@example.com")]

    book.add("John Roe", "555-5678")
    book.update(0, "Jane Smith", "555-1234", "")
    assert _rows(_book(path)) == [("Jane Smith", "555-1234", ""), ("John Roe", "555-5678", "")]

    book.delete(0)
    reloaded = _book(path)
    assert _rows(reloaded) == [("John Roe", "555-5678", "")]
    assert reloaded.list()[0].contact_id == book.list()[0].contact_id


def test_validation_failure_does_not_touch_disk(tmp_path: Path):
    path = tmp_path / "contacts.json"
    book = _book(path)

    with pytest.raises(ContactValidationError) as exc:
        book.add("", "555-1234", "")

    assert exc.value.rule is ValidationRule.EMPTY_NAME
    assert book.list() == []
    assert not path.exists()


def test_stale_index_raises(tmp_path: Path):
    book = _book(tmp_path / "contacts.json")
    book.add("A", "1")
    with pytest.raises(ContactIndexError):
        book.delete(1)
    with pytest.raises(ContactIndexError):
        book.update(5, "B", "2")
    assert len(book) == 1


def test_save_failure_keeps_memory_change(tmp_path: Path, monkeypatch):
    path = tmp_path / "contacts.json"
    book = _book(path)
    book.add("A", "1")

    def _fail(contacts):
        raise ContactSaveError(path, "Error saving contacts: disk full")

    monkeypatch.setattr(book.storage, "save", _fail)

    result = book.add("B", "2")

    assert result.saved is False
    assert isinstance(result.error, ContactSaveError)
    assert result.to_dict()["error"] == "Error saving contacts: disk full"
    assert [c.name for c in book.list()] == ["A", "B"]
    assert book.has_unsaved_changes is True
    # Disk still has the last good state.
    assert [r["name"] for r in json.loads(path.read_text(encoding="utf-8"))] == ["A"]

    monkeypatch.undo()
    assert book.save() is None
    assert book.has_unsaved_changes is False
    assert [c.name for c in _book(path).list()] == ["A", "B"]


def test_id_based_mutations(tmp_path: Path):
    path = tmp_path / "contacts.json"
    book = _book(path)
    book.add("A", "1")
    b_id = book.add("B", "2").contact.contact_id
    book.delete(0)

    result = book.update_by_id(b_id, "Bee", "2", "bee@example.com")
    assert result.index == 0

    book.delete_by_id(b_id)
    assert _book(path).list() == []

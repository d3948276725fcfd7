from __future__ import annotations

from pathlib import Path

import pytest

from bolt_editor.buffer import Buffer, FileStorage, Position, StorageError

from support import MemoryStorage, make_buffer, row_texts


def at(line: int, column: int) -> Position:
    return Position(column=column, line=line)


def test_open_empty_resource_has_no_lines(storage: MemoryStorage) -> None:
    storage.files["empty.txt"] = ""

    buffer = Buffer.open("empty.txt", storage=storage)

    assert buffer.len() == 0
    assert buffer.is_empty() is True
    assert buffer.is_dirty() is False
    assert buffer.source_identity == "empty.txt"


def test_insert_into_empty_buffer_creates_row(storage: MemoryStorage) -> None:
    storage.files["empty.txt"] = ""
    buffer = Buffer.open("empty.txt", storage=storage)

    buffer.insert(at(0, 0), "a")

    assert row_texts(buffer) == ["a"]
    assert buffer.row(0) is not None and buffer.row(0).length() == 1
    assert buffer.is_dirty() is True


def test_open_splits_on_line_boundaries(storage: MemoryStorage) -> None:
    storage.files["doc.txt"] = "one\r\ntwo\r\n\r\nfour"

    buffer = Buffer.open("doc.txt", storage=storage)

    assert row_texts(buffer) == ["one", "two", "", "four"]


def test_open_missing_resource_raises(storage: MemoryStorage) -> None:
    with pytest.raises(StorageError) as excinfo:
        Buffer.open("missing.txt", storage=storage)

    assert excinfo.value.name == "missing.txt"


def test_row_out_of_range_returns_none() -> None:
    buffer = make_buffer("a")

    assert buffer.row(1) is None
    assert buffer.row(-1) is None


def test_insert_line_break_splits_row() -> None:
    buffer = make_buffer("hello world", "tail")

    buffer.insert(at(0, 5), "\n")

    assert row_texts(buffer) == ["hello", " world", "tail"]
    assert buffer.is_dirty() is True


def test_insert_line_break_past_last_line_appends_two_rows() -> None:
    buffer = make_buffer()

    buffer.insert(at(0, 0), "\n")

    assert row_texts(buffer) == ["", ""]


def test_insert_beyond_document_end_is_ignored() -> None:
    buffer = make_buffer("a")

    buffer.insert(at(3, 0), "x")

    assert row_texts(buffer) == ["a"]
    assert buffer.is_dirty() is False


def test_delete_at_end_of_row_joins_next_row() -> None:
    buffer = make_buffer("ab", "cd")

    buffer.delete(at(0, 2))

    assert row_texts(buffer) == ["abcd"]
    assert buffer.is_dirty() is True


def test_delete_removes_character() -> None:
    buffer = make_buffer("abc")

    buffer.delete(at(0, 1))

    assert row_texts(buffer) == ["ac"]


@pytest.mark.parametrize("position", [at(0, 2), at(1, 0), at(5, 0)])
def test_delete_without_effect_keeps_buffer_clean(position: Position) -> None:
    buffer = make_buffer("ab")

    buffer.delete(position)

    assert row_texts(buffer) == ["ab"]
    assert buffer.is_dirty() is False


@pytest.mark.parametrize("column", [0, 2, 4])
def test_insert_then_delete_restores_row(column: int) -> None:
    buffer = make_buffer("abcd", "next")

    buffer.insert(at(0, column), "x")
    buffer.delete(at(0, column))

    assert row_texts(buffer) == ["abcd", "next"]


@pytest.mark.parametrize("column", [0, 2, 4])
def test_line_break_then_delete_restores_rows(column: int) -> None:
    buffer = make_buffer("abcd", "next")

    buffer.insert(at(0, column), "\n")
    buffer.delete(at(0, column))

    assert row_texts(buffer) == ["abcd", "next"]


def test_save_without_name_raises_and_stays_dirty() -> None:
    buffer = make_buffer("a")
    buffer.insert(at(0, 1), "b")

    with pytest.raises(StorageError):
        buffer.save()

    assert buffer.is_dirty() is True


def test_save_writes_rows_and_clears_dirty(storage: MemoryStorage) -> None:
    buffer = make_buffer("ab", "cd", storage=storage)
    buffer.source_identity = "out.txt"
    buffer.insert(at(1, 2), "e")

    buffer.save()

    assert storage.files["out.txt"] == "ab\ncde"
    assert buffer.is_dirty() is False


def test_failed_save_keeps_dirty(storage: MemoryStorage) -> None:
    buffer = make_buffer("ab", storage=storage)
    buffer.source_identity = "locked.txt"
    buffer.insert(at(0, 0), "x")
    storage.failing.add("locked.txt")

    with pytest.raises(StorageError):
        buffer.save()

    assert buffer.is_dirty() is True


@pytest.mark.parametrize(
    "content",
    [
        "",
        "single",
        "trailing\n",
        "a\nb\n\n",
        "crlf\r\nlines\r\n",
        "\n",
        "a\r\nb\nc\n",
        "a\rb\r",
        "mixed\r\nno\rtrailing\nbreak",
    ],
)
def test_save_after_open_is_byte_identical(tmp_path: Path, content: str) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(content.encode("utf-8"))

    buffer = Buffer.open(str(path))
    assert buffer.is_dirty() is False
    buffer.save()

    assert path.read_bytes() == content.encode("utf-8")
    assert buffer.is_dirty() is False


def test_edits_keep_untouched_line_endings(storage: MemoryStorage) -> None:
    storage.files["doc.txt"] = "a\r\nbc\nd\r"
    buffer = Buffer.open("doc.txt", storage=storage)

    buffer.insert(at(1, 1), "\n")
    buffer.insert(at(2, 0), "x")
    buffer.save()

    assert storage.files["doc.txt"] == "a\r\nb\r\nxc\nd\r"


def test_split_then_join_restores_original_ending(storage: MemoryStorage) -> None:
    storage.files["doc.txt"] = "ab\rcd\n"
    buffer = Buffer.open("doc.txt", storage=storage)

    buffer.insert(at(0, 1), "\n")
    buffer.delete(at(0, 1))
    buffer.save()

    assert storage.files["doc.txt"] == "ab\rcd\n"


def test_file_storage_reports_undecodable_content(tmp_path: Path) -> None:
    path = tmp_path / "binary.bin"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(StorageError):
        FileStorage().read(str(path))


def test_file_storage_reports_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(StorageError):
        FileStorage().write(str(tmp_path / "nope" / "file.txt"), "text")

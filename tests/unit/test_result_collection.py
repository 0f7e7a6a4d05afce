from pathlib import Path
from unittest.mock import patch

import pytest

from medrecords.collection.result_collection import ResultCollection
from medrecords.extraction.models import Examination
from medrecords.preview.handles import PreviewRegistry
from medrecords.processor.exceptions import DuplicateResultError, StatusTransitionError
from medrecords.processor.models import (
    ExtractionFailed,
    ExtractionSucceeded,
    FileResult,
    FileStatus,
)


def _placeholder(
    registry: PreviewRegistry, result_id: str, name: str = "rapor.pdf"
) -> FileResult:
    return FileResult(
        id=result_id,
        file_name=name,
        file_handle=registry.create(Path(name)),
        media_type="application/pdf",
        status=FileStatus.PROCESSING,
    )


def _make_collection(*ids: str) -> tuple[ResultCollection, PreviewRegistry]:
    registry = PreviewRegistry()
    collection = ResultCollection()
    for result_id in ids:
        collection.insert_placeholder(_placeholder(registry, result_id, f"{result_id}.pdf"))
    return collection, registry


class TestInsertPlaceholder:
    def test_preserves_insertion_order(self) -> None:
        collection, _ = _make_collection("c", "a", "b")
        assert [r.id for r in collection.snapshot()] == ["c", "a", "b"]

    def test_duplicate_id_raises(self) -> None:
        collection, registry = _make_collection("a")
        with pytest.raises(DuplicateResultError):
            collection.insert_placeholder(_placeholder(registry, "a"))


class TestMerge:
    def test_success_replaces_mutable_fields_only(self) -> None:
        collection, _ = _make_collection("a")
        before = collection.get("a")
        assert before is not None

        merged = collection.merge("a", ExtractionSucceeded(examinations=[Examination(age="34")]))

        after = collection.get("a")
        assert merged is True
        assert after is not None
        assert after.status == FileStatus.SUCCESS
        assert after.examinations == [Examination(age="34")]
        assert after.error_message is None
        assert after.file_handle is before.file_handle
        assert after.file_name == before.file_name
        assert after.media_type == before.media_type

    def test_failure_sets_message_and_clears_examinations(self) -> None:
        collection, _ = _make_collection("a")

        collection.merge("a", ExtractionFailed(error_message="quota exceeded"))

        after = collection.get("a")
        assert after is not None
        assert after.status == FileStatus.ERROR
        assert after.error_message == "quota exceeded"
        assert after.examinations == []

    def test_absent_id_is_noop(self) -> None:
        collection, _ = _make_collection("a")
        assert collection.merge("zzz", ExtractionSucceeded()) is False
        assert [r.id for r in collection.snapshot()] == ["a"]

    def test_merge_into_terminal_entry_raises(self) -> None:
        collection, _ = _make_collection("a")
        collection.merge("a", ExtractionSucceeded())
        with pytest.raises(StatusTransitionError):
            collection.merge("a", ExtractionFailed(error_message="late"))

    def test_merge_keeps_position(self) -> None:
        collection, _ = _make_collection("a", "b", "c")
        collection.merge("c", ExtractionSucceeded())
        collection.merge("a", ExtractionSucceeded())
        assert [r.id for r in collection.snapshot()] == ["a", "b", "c"]


class TestAdvance:
    def test_pending_to_processing(self) -> None:
        registry = PreviewRegistry()
        collection = ResultCollection()
        collection.insert_placeholder(
            FileResult(
                id="p",
                file_name="p.pdf",
                file_handle=registry.create(Path("p.pdf")),
                media_type="application/pdf",
            )
        )
        assert collection.advance("p", FileStatus.PROCESSING)
        result = collection.get("p")
        assert result is not None
        assert result.status == FileStatus.PROCESSING

    def test_backwards_transition_raises(self) -> None:
        collection, _ = _make_collection("a")
        with pytest.raises(StatusTransitionError):
            collection.advance("a", FileStatus.PENDING)


class TestRemoval:
    def test_remove_by_id_releases_handle(self) -> None:
        collection, registry = _make_collection("a", "b")
        handle = collection.get("a").file_handle  # type: ignore[union-attr]

        assert collection.remove_by_id("a") is True

        assert handle.released
        assert "a" not in collection
        assert registry.live_count == 1

    def test_removal_is_logged_with_result_context(self) -> None:
        collection, _ = _make_collection("a")

        with patch("medrecords.collection.result_collection.Log") as mock_log:
            collection.remove_by_id("a")

        mock_log.info.assert_called_once_with(
            "Removed result", result_id="a", file_name="a.pdf"
        )

    def test_repeated_remove_releases_once(self) -> None:
        collection, registry = _make_collection("a")
        assert collection.remove_by_id("a") is True
        assert collection.remove_by_id("a") is False
        assert registry.live_count == 0

    def test_remove_many(self) -> None:
        collection, registry = _make_collection("a", "b", "c")

        removed = collection.remove_many({"a", "c", "missing"})

        assert removed == 2
        assert [r.id for r in collection.snapshot()] == ["b"]
        assert registry.live_count == 1

    def test_clear_releases_everything(self) -> None:
        collection, registry = _make_collection("a", "b")

        assert collection.clear() == 2

        assert len(collection) == 0
        assert registry.live_count == 0

    def test_clear_completes_when_a_handle_was_released_elsewhere(self) -> None:
        collection, registry = _make_collection("a", "b", "c")
        collection.get("a").file_handle.release()  # type: ignore[union-attr]

        assert collection.clear() == 3

        assert len(collection) == 0
        assert registry.live_count == 0

    def test_remove_many_completes_when_a_handle_was_released_elsewhere(self) -> None:
        collection, registry = _make_collection("a", "b", "c")
        collection.get("b").file_handle.release()  # type: ignore[union-attr]

        assert collection.remove_many(["a", "b", "c"]) == 3

        assert collection.snapshot() == []
        assert registry.live_count == 0

    def test_remove_by_id_drops_entry_with_released_handle(self) -> None:
        collection, registry = _make_collection("a", "b")
        collection.get("a").file_handle.release()  # type: ignore[union-attr]

        assert collection.remove_by_id("a") is True

        assert "a" not in collection
        assert registry.live_count == 1


class TestSnapshot:
    def test_snapshot_is_a_copy(self) -> None:
        collection, _ = _make_collection("a")
        snapshot = collection.snapshot()
        collection.remove_by_id("a")
        assert [r.id for r in snapshot] == ["a"]
        assert collection.snapshot() == []

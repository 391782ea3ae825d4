"""
Note Service — MongoNoteStorage Unit Tests
===========================================

What:  Query and update translation against a mocked async collection.
How:   The `mock_collection` fixture stands in for AsyncCollection; tests
       assert on the filters and `$set` documents that reach it, and on the
       operation deadline and cancellation around each driver call.
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from pymongo import _csot

from note_service.exceptions import NotFoundError
from note_service.schemas.note import CreateNoteDTO, UpdateNoteDTO
from note_service.storage.note_storage import MongoNoteStorage


def updated_fields(collection):
    filter_doc, update_doc = collection.update_one.await_args.args
    return filter_doc, update_doc["$set"]


class TestMongoNoteStorageCreate:
    @pytest.mark.asyncio
    async def test_create_inserts_document_and_returns_uuid(self, mock_collection):
        mock_collection.insert_one.side_effect = lambda doc: MagicMock(inserted_id=doc["_id"])
        storage = MongoNoteStorage(mock_collection, timeout=1)
        dto = CreateNoteDTO(header="H", body="B", category_uuid="c1", tags=["t1"])

        note_uuid = await storage.create(dto, "B")

        document = mock_collection.insert_one.await_args.args[0]
        assert note_uuid == document["_id"]
        assert document["header"] == "H"
        assert document["short_body"] == "B"
        assert document["tags"] == ["t1"]
        assert document["created_at"] == document["updated_at"]

    @pytest.mark.asyncio
    async def test_create_assigns_distinct_uuids(self, mock_collection):
        mock_collection.insert_one.side_effect = lambda doc: MagicMock(inserted_id=doc["_id"])
        storage = MongoNoteStorage(mock_collection)
        dto = CreateNoteDTO(header="H", body="B", category_uuid="c1")

        first = await storage.create(dto, "B")
        second = await storage.create(dto, "B")

        assert first != second


class TestMongoNoteStorageFind:
    @pytest.mark.asyncio
    async def test_find_one_maps_document(self, mock_collection, sample_note_document):
        mock_collection.find_one.return_value = sample_note_document
        storage = MongoNoteStorage(mock_collection)

        note = await storage.find_one(sample_note_document["_id"])

        mock_collection.find_one.assert_awaited_once_with({"_id": sample_note_document["_id"]})
        assert note.uuid == sample_note_document["_id"]
        assert note.tags == ["t1", "t2"]

    @pytest.mark.asyncio
    async def test_find_one_missing_raises_not_found(self, mock_collection):
        mock_collection.find_one.return_value = None
        storage = MongoNoteStorage(mock_collection)

        with pytest.raises(NotFoundError):
            await storage.find_one("missing")

    @pytest.mark.asyncio
    async def test_find_by_category_empty_is_not_an_error(self, mock_collection):
        storage = MongoNoteStorage(mock_collection)

        notes = await storage.find_by_category_uuid("c1")

        assert notes == []
        mock_collection.find.assert_called_once_with({"category_uuid": "c1"})

    @pytest.mark.asyncio
    async def test_find_by_category_maps_documents(self, mock_collection, sample_note_document):
        mock_collection.find.return_value.to_list.return_value = [sample_note_document]
        storage = MongoNoteStorage(mock_collection)

        notes = await storage.find_by_category_uuid("c1")

        assert [n.header for n in notes] == ["Shopping"]


class TestMongoNoteStorageUpdate:
    @pytest.mark.asyncio
    async def test_update_sets_only_present_fields(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        storage = MongoNoteStorage(mock_collection)
        dto = UpdateNoteDTO.model_validate({"header": "New"})

        await storage.update("n1", dto, tags_update=False)

        filter_doc, fields = updated_fields(mock_collection)
        assert filter_doc == {"_id": "n1"}
        assert set(fields) == {"header", "updated_at"}

    @pytest.mark.asyncio
    async def test_update_empty_tags_clears_tags(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        storage = MongoNoteStorage(mock_collection)
        dto = UpdateNoteDTO.model_validate({"tags": []})

        await storage.update("n1", dto, tags_update=True)

        _, fields = updated_fields(mock_collection)
        assert fields["tags"] == []

    @pytest.mark.asyncio
    async def test_update_null_tags_clears_tags(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        storage = MongoNoteStorage(mock_collection)
        dto = UpdateNoteDTO.model_validate({"tags": None})

        await storage.update("n1", dto, tags_update=True)

        _, fields = updated_fields(mock_collection)
        assert fields["tags"] == []

    @pytest.mark.asyncio
    async def test_update_without_tags_flag_leaves_tags(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        storage = MongoNoteStorage(mock_collection)
        dto = UpdateNoteDTO.model_validate({"header": "New", "tags": ["x"]})

        await storage.update("n1", dto, tags_update=False)

        _, fields = updated_fields(mock_collection)
        assert "tags" not in fields

    @pytest.mark.asyncio
    async def test_update_body_writes_short_body(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        storage = MongoNoteStorage(mock_collection)
        body = "z" * 250
        dto = UpdateNoteDTO.model_validate({"body": body})

        await storage.update("n1", dto, tags_update=False)

        _, fields = updated_fields(mock_collection)
        assert fields["body"] == body
        assert fields["short_body"].endswith("...")

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)
        storage = MongoNoteStorage(mock_collection)

        with pytest.raises(NotFoundError):
            await storage.update("missing", UpdateNoteDTO(header="x"), tags_update=False)


class TestMongoNoteStorageDelete:
    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)
        storage = MongoNoteStorage(mock_collection)

        await storage.delete("n1")

        mock_collection.delete_one.assert_awaited_once_with({"_id": "n1"})

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)
        storage = MongoNoteStorage(mock_collection)

        with pytest.raises(NotFoundError):
            await storage.delete("missing")


class TestMongoNoteStorageDeadline:
    @pytest.mark.asyncio
    async def test_driver_call_runs_under_configured_timeout(self, mock_collection, sample_note_document):
        seen = []

        async def record_timeout(filter_doc):
            seen.append(_csot.get_timeout())
            return sample_note_document

        mock_collection.find_one.side_effect = record_timeout
        storage = MongoNoteStorage(mock_collection, timeout=2.5)

        await storage.find_one(sample_note_document["_id"])

        assert seen == [2.5]
        assert _csot.get_timeout() is None

    @pytest.mark.asyncio
    async def test_cancelled_driver_call_propagates(self, mock_collection):
        mock_collection.delete_one.side_effect = asyncio.CancelledError()
        storage = MongoNoteStorage(mock_collection, timeout=1)

        with pytest.raises(asyncio.CancelledError):
            await storage.delete("n1")

    @pytest.mark.asyncio
    async def test_task_cancellation_reaches_pending_driver_call(self, mock_collection):
        started = asyncio.Event()
        interrupted = asyncio.Event()

        async def hang(filter_doc):
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                interrupted.set()
                raise

        mock_collection.find_one.side_effect = hang
        storage = MongoNoteStorage(mock_collection, timeout=5)

        task = asyncio.create_task(storage.find_one("n1"))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert interrupted.is_set()

"""
Unit tests for the in-memory and local file visits backends.
"""
import json
from unittest.mock import patch

import pytest

from visit_store.data_access.file_visits_backend import LocalFileVisitsBackend
from visit_store.data_access.visits_backend import InMemoryVisitsBackend
from visit_store.exceptions import StorageError
from visit_store.models.visit import Visit


@pytest.fixture
def sample_visits():
    """Two stored visits."""
    return [
        Visit(id='v-2', entity_ref='component:default/b', pathname='/b',
              name='B', timestamp=2000, hits=1),
        Visit(id='v-1', entity_ref='component:default/a', pathname='/a',
              name='A', timestamp=1000, hits=3),
    ]


class TestInMemoryVisitsBackend:
    """Test suite for InMemoryVisitsBackend."""

    @pytest.mark.asyncio
    async def test_empty_by_default(self):
        """Test that a new backend holds no visits."""
        assert await InMemoryVisitsBackend().retrieve_all() == []

    @pytest.mark.asyncio
    async def test_persist_replaces_everything(self, sample_visits):
        """Test full-set replacement."""
        backend = InMemoryVisitsBackend(sample_visits)

        await backend.persist_all(sample_visits[:1])

        assert await backend.retrieve_all() == sample_visits[:1]

    @pytest.mark.asyncio
    async def test_retrieve_returns_copy(self, sample_visits):
        """Test that callers cannot mutate stored state."""
        backend = InMemoryVisitsBackend(sample_visits)

        (await backend.retrieve_all()).clear()

        assert await backend.retrieve_all() == sample_visits


class TestLocalFileVisitsBackend:
    """Test suite for LocalFileVisitsBackend."""

    @pytest.mark.asyncio
    async def test_missing_file_reads_empty(self, tmp_path):
        """Test that a missing document means no visits."""
        backend = LocalFileVisitsBackend(tmp_path / 'visits.json')

        assert await backend.retrieve_all() == []

    @pytest.mark.asyncio
    async def test_persist_then_retrieve(self, tmp_path, sample_visits):
        """Test that persisted visits are read back in order."""
        backend = LocalFileVisitsBackend(tmp_path / 'nested' / 'visits.json')

        await backend.persist_all(sample_visits)

        assert await backend.retrieve_all() == sample_visits

    @pytest.mark.asyncio
    async def test_document_shape(self, tmp_path, sample_visits):
        """Test the stored JSON layout."""
        path = tmp_path / 'visits.json'

        await LocalFileVisitsBackend(path).persist_all(sample_visits)

        document = json.loads(path.read_text(encoding='utf-8'))
        assert document == {'visits': [v.to_dict() for v in sample_visits]}

    @pytest.mark.asyncio
    async def test_corrupt_document_reads_empty(self, tmp_path):
        """Test that a corrupt document is ignored."""
        path = tmp_path / 'visits.json'
        path.write_text('{not json', encoding='utf-8')

        assert await LocalFileVisitsBackend(path).retrieve_all() == []

    @pytest.mark.asyncio
    async def test_non_utf8_document_reads_empty(self, tmp_path):
        """Test that a document with invalid UTF-8 bytes is ignored."""
        path = tmp_path / 'visits.json'
        path.write_bytes(b'{"visits": [\xff\xfe]}')

        assert await LocalFileVisitsBackend(path).retrieve_all() == []

    @pytest.mark.asyncio
    async def test_corrupt_document_is_replaced_on_write(self, tmp_path, sample_visits):
        """Test that the next write recovers a corrupt document."""
        path = tmp_path / 'visits.json'
        path.write_bytes(b'\xff\xfe')
        backend = LocalFileVisitsBackend(path)

        await backend.persist_all(sample_visits)

        assert await backend.retrieve_all() == sample_visits

    @pytest.mark.asyncio
    async def test_malformed_visit_reads_empty(self, tmp_path):
        """Test that a document with an invalid visit is ignored."""
        path = tmp_path / 'visits.json'
        path.write_text(json.dumps({'visits': [{'id': 'v-1'}]}), encoding='utf-8')

        assert await LocalFileVisitsBackend(path).retrieve_all() == []

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, tmp_path, sample_visits):
        """Test that OS errors during write surface as StorageError."""
        path = tmp_path / 'visits.json'
        backend = LocalFileVisitsBackend(path)
        await backend.persist_all(sample_visits)

        with patch(
            'visit_store.data_access.file_visits_backend.os.replace',
            side_effect=OSError('disk full')
        ):
            with pytest.raises(StorageError, match='disk full'):
                await backend.persist_all(sample_visits[:1])

        # previous document untouched, no temp files left behind
        assert await backend.retrieve_all() == sample_visits
        assert [p.name for p in tmp_path.iterdir()] == ['visits.json']

    @pytest.mark.asyncio
    async def test_read_failure_raises_storage_error(self, tmp_path):
        """Test that unreadable files surface as StorageError."""
        path = tmp_path / 'visits.json'
        path.mkdir()  # a directory cannot be read as text

        with pytest.raises(StorageError):
            await LocalFileVisitsBackend(path).retrieve_all()

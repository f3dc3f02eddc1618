"""
Local JSON file persistence backend for visits.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence, Union

from .visits_backend import VisitsBackend
from ..exceptions import StorageError
from ..models.visit import Visit

logger = logging.getLogger(__name__)


class LocalFileVisitsBackend(VisitsBackend):
    """
    Backend storing visits in a JSON document on local disk.

    The document has the shape ``{"visits": [...]}``. A corrupt document
    is read as empty and replaced on the next write.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file backend.

        Args:
            path: Location of the JSON document; parent directories are
                created on first write
        """
        self.path = Path(path)

    async def retrieve_all(self) -> List[Visit]:
        """
        Read visits from the document.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            logger.warning(f"Ignoring corrupt visits document {self.path}: {e}")
            return []
        except OSError as e:
            logger.error(f"Failed to read visits from {self.path}: {e}")
            raise StorageError(f"Failed to read visits from {self.path}: {e}") from e

        try:
            document = json.loads(raw)
            return [Visit.from_dict(data) for data in document.get('visits', [])]
        except (ValueError, AttributeError, TypeError) as e:
            logger.warning(f"Ignoring corrupt visits document {self.path}: {e}")
            return []

    async def persist_all(self, visits: Sequence[Visit]) -> None:
        """
        Replace the document with the given visits.

        The document is written to a temporary file and moved into place,
        so readers never observe a partial write.

        Raises:
            StorageError: If the document cannot be written
        """
        document = {'visits': [visit.to_dict() for visit in visits]}
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix='.tmp'
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write visits to {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write visits to {self.path}: {e}") from e

        logger.debug(f"Persisted {len(visits)} visits to {self.path}")

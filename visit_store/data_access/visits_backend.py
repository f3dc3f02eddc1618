"""
Persistence backend contract for visits, with an in-memory implementation.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models.visit import Visit

logger = logging.getLogger(__name__)


class VisitsBackend(ABC):
    """
    Whole-set persistence for a user's visits.

    Implementations read and replace the complete working set; there are
    no partial updates.
    """

    @abstractmethod
    async def retrieve_all(self) -> List[Visit]:
        """
        Read every stored visit.

        Returns:
            Stored visits in persisted order, or an empty list

        Raises:
            StorageError: If the read fails
        """

    @abstractmethod
    async def persist_all(self, visits: Sequence[Visit]) -> None:
        """
        Replace the stored visits with the given sequence.

        Raises:
            StorageError: If the write fails
        """


class InMemoryVisitsBackend(VisitsBackend):
    """Backend that keeps visits in process memory."""

    def __init__(self, visits: Sequence[Visit] = ()):
        self._visits: List[Visit] = list(visits)

    async def retrieve_all(self) -> List[Visit]:
        return list(self._visits)

    async def persist_all(self, visits: Sequence[Visit]) -> None:
        self._visits = list(visits)
        logger.debug(f"Persisted {len(self._visits)} visits in memory")

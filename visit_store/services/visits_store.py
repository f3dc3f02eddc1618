"""
Visits store: a bounded, recency-ranked history of visited resources.

Repeat visits to the same (entity_ref, pathname) pair are merged into a
single record whose hit counter grows. Once the configured limit is
exceeded, the visits with the oldest timestamps are evicted.
"""

import asyncio
import time
import uuid
from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Union

from ..config.settings import DEFAULT_VISITS_LIMIT
from ..data_access.visits_backend import VisitsBackend
from ..models.query import VisitsQuery
from ..models.visit import Visit, VisitInput
from ..utils.structured_logger import LoggingContext, get_structured_logger
from .query_engine import run_query


def current_time_millis() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def generate_visit_id() -> str:
    """Fresh random visit identifier."""
    return str(uuid.uuid4())


def upsert_visit(
    visits: Sequence[Visit],
    visit: VisitInput,
    timestamp: int,
    id_factory: Callable[[], str]
) -> Tuple[Visit, List[Visit]]:
    """
    Merge a visit into a working set.

    The upserted visit moves to the front, so the working set stays in
    recency-of-touch order.

    Args:
        visits: Current working set
        visit: Candidate visit
        timestamp: Epoch milliseconds of this visit
        id_factory: Identifier source, called only for a new dedup key

    Returns:
        Tuple of (upserted visit, new working set)
    """
    existing = next((v for v in visits if v.key == visit.key), None)
    if existing is not None:
        saved = existing.bump(name=visit.name, timestamp=timestamp)
    else:
        saved = Visit.create(visit, visit_id=id_factory(), timestamp=timestamp)

    remaining = [v for v in visits if v.key != visit.key]
    return saved, [saved] + remaining


def evict_oldest(visits: Sequence[Visit], limit: int) -> Tuple[List[Visit], List[Visit]]:
    """
    Enforce the capacity limit.

    Keeps the `limit` visits with the most recent timestamps. Visits with
    equal timestamps are ranked by working-set position, so the more
    recently touched one is kept. Retained visits keep their order.

    Args:
        visits: Working set in recency-of-touch order
        limit: Maximum number of visits to retain

    Returns:
        Tuple of (retained visits, evicted visits)
    """
    if len(visits) <= limit:
        return list(visits), []

    ranked = sorted(
        range(len(visits)),
        key=lambda index: (-visits[index].timestamp, index)
    )
    keep = set(ranked[:limit])
    retained = [v for index, v in enumerate(visits) if index in keep]
    evicted = [v for index, v in enumerate(visits) if index not in keep]
    return retained, evicted


class VisitsStore:
    """
    Store for a user's recently visited resources.

    Every save reads the full working set from the backend, computes the
    next set in memory and writes it back with a single persist call.
    Saves through one store instance are serialized by an asyncio.Lock;
    separate instances sharing a backend are not.
    """

    def __init__(
        self,
        backend: VisitsBackend,
        limit: int = DEFAULT_VISITS_LIMIT,
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        user_entity_ref: Optional[str] = None,
        log_level: Optional[str] = None
    ):
        """
        Initialize visits store.

        Args:
            backend: Persistence backend
            limit: Maximum number of retained visits
            clock: Source of epoch milliseconds
            id_factory: Source of unique visit identifiers
            user_entity_ref: Owner of the visits, used for log correlation
            log_level: Log level name for the store logger; defaults to LOG_LEVEL
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")

        self.backend = backend
        self._limit = limit
        self.clock = clock or current_time_millis
        self.id_factory = id_factory or generate_visit_id
        self._lock = asyncio.Lock()
        self.logger = get_structured_logger(
            'VisitsStore', user_entity_ref=user_entity_ref, log_level=log_level
        )

    @property
    def limit(self) -> int:
        """Maximum number of retained visits."""
        return self._limit

    async def save_visit(self, visit: VisitInput) -> Visit:
        """
        Record a visit.

        A repeat visit to the same (entity_ref, pathname) pair keeps the
        original id, replaces the name, advances the timestamp and adds
        one hit. A first visit creates a record with hits=1.

        Args:
            visit: Candidate visit

        Returns:
            The created or updated visit

        Raises:
            StorageError: If the backend read or write fails; the stored
                working set is then unchanged
        """
        with LoggingContext(
            self.logger,
            'save_visit',
            entity_ref=visit.entity_ref,
            pathname=visit.pathname
        ):
            async with self._lock:
                visits = await self.backend.retrieve_all()

                saved, updated = upsert_visit(
                    visits, visit, timestamp=self.clock(), id_factory=self.id_factory
                )
                retained, evicted = evict_oldest(updated, self._limit)

                await self.backend.persist_all(retained)

            if evicted:
                self.logger.log_eviction([v.id for v in evicted], self._limit)
            self.logger.info(
                'Visit saved',
                operation='save_visit',
                visit_id=saved.id,
                hits=saved.hits,
                working_set_size=len(retained)
            )
            return saved

    async def list_visits(
        self,
        query: Union[VisitsQuery, Mapping, None] = None
    ) -> List[Visit]:
        """
        List visits.

        Args:
            query: VisitsQuery, or a mapping in the shape
                ``{'orderBy': [{'field', 'direction'}],
                'filterBy': [{'field', 'operator', 'value'}]}``.
                Without sort keys visits are ordered by timestamp,
                most recent first.

        Returns:
            Fresh list of matching visits

        Raises:
            QuerySpecError: If the query is malformed
            StorageError: If the backend read fails
        """
        if not isinstance(query, VisitsQuery):
            query = VisitsQuery.from_dict(query)

        with LoggingContext(
            self.logger,
            'list_visits',
            sort_keys=len(query.order_by),
            filters=len(query.filter_by)
        ):
            visits = await self.backend.retrieve_all()
            return run_query(visits, query)

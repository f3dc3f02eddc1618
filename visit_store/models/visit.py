"""
Visit model for recently viewed resources.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class VisitInput:
    """
    Candidate visit supplied by the caller.

    The store assigns id, timestamp and hits.

    Attributes:
        entity_ref: Reference of the visited entity (e.g. component:default/foo)
        pathname: UI location that was visited
        name: Human-readable label for the visit
    """
    entity_ref: str
    pathname: str
    name: str

    def __post_init__(self):
        """Validate dedup key components."""
        if not self.entity_ref:
            raise ValueError("entity_ref is required")
        if not self.pathname:
            raise ValueError("pathname is required")

    @property
    def key(self) -> Tuple[str, str]:
        """Dedup key for this visit."""
        return (self.entity_ref, self.pathname)


@dataclass(frozen=True)
class Visit:
    """
    A tracked visit to an (entity_ref, pathname) pair.

    Attributes:
        id: Identifier assigned on the first visit, never changed afterwards
        entity_ref: Reference of the visited entity
        pathname: UI location that was visited
        name: Label from the most recent visit
        timestamp: Epoch milliseconds of the most recent visit
        hits: Number of visits to this pair
    """
    id: str
    entity_ref: str
    pathname: str
    name: str
    timestamp: int
    hits: int = 1

    @property
    def key(self) -> Tuple[str, str]:
        """Dedup key for this visit."""
        return (self.entity_ref, self.pathname)

    @classmethod
    def create(cls, visit: VisitInput, visit_id: str, timestamp: int) -> 'Visit':
        """
        Create the first record for a dedup key.

        Args:
            visit: Candidate visit
            visit_id: Fresh identifier
            timestamp: Current epoch milliseconds, truncated to an int

        Returns:
            New Visit with hits=1
        """
        return cls(
            id=visit_id,
            entity_ref=visit.entity_ref,
            pathname=visit.pathname,
            name=visit.name,
            timestamp=int(timestamp),
            hits=1
        )

    def bump(self, name: str, timestamp: int) -> 'Visit':
        """
        Record a repeat visit.

        Returns:
            New Visit with the same id, replaced name, advanced timestamp
            and hits incremented by one
        """
        return replace(self, name=name, timestamp=int(timestamp), hits=self.hits + 1)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for storage.

        Returns:
            Dictionary with camelCase keys
        """
        return {
            'id': self.id,
            'entityRef': self.entity_ref,
            'pathname': self.pathname,
            'name': self.name,
            'timestamp': self.timestamp,
            'hits': self.hits
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Visit':
        """
        Create Visit from a stored dictionary.

        Numbers may arrive as Decimal when read from DynamoDB.

        Args:
            data: Dictionary with visit fields

        Returns:
            Visit instance

        Raises:
            ValueError: If a required field is missing, a text field is not
                a string, or a number is malformed
        """
        try:
            return cls(
                id=_string(data, 'id'),
                entity_ref=_string(data, 'entityRef'),
                pathname=_string(data, 'pathname'),
                name=_string(data, 'name', default=''),
                timestamp=int(data['timestamp']),
                hits=int(data.get('hits', 1))
            )
        except KeyError as e:
            raise ValueError(f"Visit is missing required field {e}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed visit: {e}") from e


def _string(data: Dict[str, Any], key: str, default: Optional[str] = None) -> str:
    value = data[key] if default is None else data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value

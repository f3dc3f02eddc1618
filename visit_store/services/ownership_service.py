"""
Ownership Service for resolving what a user or group owns.

Direct ownership only considers the entity itself. Aggregated ownership
also credits the groups a user belongs to, or every group below a group
in the hierarchy.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Set

from ..models.entity_ref import parse_entity_ref, stringify_entity_ref
from .catalog_client import CatalogClient

logger = logging.getLogger(__name__)

RELATION_MEMBER_OF = 'memberOf'
RELATION_PARENT_OF = 'parentOf'

RELATIONS_DIRECT = 'direct'
RELATIONS_AGGREGATED = 'aggregated'

DEFAULT_OWNED_KINDS = ('Component', 'API', 'System')

CHILD_GROUP_FIELDS = ['kind', 'metadata.namespace', 'metadata.name', 'relations']
OWNED_ENTITY_FIELDS = [
    'kind',
    'metadata.namespace',
    'metadata.name',
    'spec.type',
    'relations',
]


@dataclass(frozen=True)
class OwnershipCount:
    """Number of owned entities of one kind and type."""
    kind: str
    type: Optional[str]
    count: int


def entity_ref_of(entity: Dict[str, Any]) -> str:
    """Entity reference for a catalog entity."""
    metadata = entity.get('metadata', {})
    return stringify_entity_ref(
        entity.get('kind', ''), metadata.get('name', ''), metadata.get('namespace')
    )


def get_entity_relations(
    entity: Optional[Dict[str, Any]],
    relation_type: str,
    kind: Optional[str] = None
) -> List[str]:
    """
    Target references of an entity's relations of one type.

    Args:
        entity: Catalog entity
        relation_type: Relation type (e.g. memberOf)
        kind: Optional target kind filter, case-insensitive

    Returns:
        Normalized target entity references
    """
    if not entity:
        return []

    refs = []
    for relation in entity.get('relations') or []:
        if relation.get('type') != relation_type:
            continue
        target = parse_entity_ref(relation.get('targetRef', ''))
        if kind and target.kind.lower() != kind.lower():
            continue
        refs.append(str(target))
    return refs


class OwnershipService:
    """
    Service for listing entities owned by a user or group.
    """

    def __init__(self, catalog_client: CatalogClient):
        """
        Initialize ownership service.

        Args:
            catalog_client: Catalog API client
        """
        self.catalog_client = catalog_client

    def get_owner_refs(
        self,
        entity: Dict[str, Any],
        relations_type: str = RELATIONS_DIRECT
    ) -> List[str]:
        """
        Resolve the owner references credited to an entity.

        Args:
            entity: User or group entity
            relations_type: 'direct' or 'aggregated'

        Returns:
            Owner references. A user's groups come before the user; a
            group comes before its descendants

        Raises:
            ValueError: If relations_type is unknown
            CatalogApiError: If child groups cannot be fetched
        """
        if relations_type not in (RELATIONS_DIRECT, RELATIONS_AGGREGATED):
            raise ValueError(
                f"relations_type must be '{RELATIONS_DIRECT}' or "
                f"'{RELATIONS_AGGREGATED}', got {relations_type!r}"
            )

        own_ref = entity_ref_of(entity)
        if relations_type == RELATIONS_DIRECT:
            return [own_ref]

        if entity.get('kind', '').lower() == 'user':
            groups = get_entity_relations(entity, RELATION_MEMBER_OF, kind='Group')
            return _unique(groups + [own_ref])

        return _unique([own_ref] + self._descendant_group_refs(entity))

    def _descendant_group_refs(self, group: Dict[str, Any]) -> List[str]:
        """
        Walk parentOf relations breadth-first.

        Each level of child groups is fetched in one request. Groups are
        visited once even if the hierarchy contains a cycle.
        """
        seen: Set[str] = {entity_ref_of(group)}
        descendants: List[str] = []
        frontier = [
            ref for ref in get_entity_relations(group, RELATION_PARENT_OF, kind='Group')
            if ref not in seen
        ]

        while frontier:
            frontier = _unique(frontier)
            seen.update(frontier)
            descendants.extend(frontier)

            children = self.catalog_client.get_entities_by_refs(
                frontier, fields=CHILD_GROUP_FIELDS
            )
            next_frontier = []
            for child in children:
                for ref in get_entity_relations(child, RELATION_PARENT_OF, kind='Group'):
                    if ref not in seen:
                        next_frontier.append(ref)
            frontier = next_frontier

        logger.debug(
            f"Resolved {len(descendants)} descendant groups for {entity_ref_of(group)}"
        )
        return descendants

    def get_owned_entities(
        self,
        entity: Dict[str, Any],
        relations_type: str = RELATIONS_DIRECT,
        kinds: Sequence[str] = DEFAULT_OWNED_KINDS
    ) -> List[Dict[str, Any]]:
        """
        List entities owned by the resolved owners.

        Args:
            entity: User or group entity
            relations_type: 'direct' or 'aggregated'
            kinds: Entity kinds to include

        Returns:
            Owned entities

        Raises:
            ValueError: If relations_type is unknown
            CatalogApiError: On catalog request failure
        """
        owners = self.get_owner_refs(entity, relations_type)
        entities = self.catalog_client.get_entities(
            entity_filter=[{'kind': list(kinds), 'relations.ownedBy': owners}],
            fields=OWNED_ENTITY_FIELDS
        )
        logger.info(
            f"Found {len(entities)} entities owned by {len(owners)} owners "
            f"of {entity_ref_of(entity)} ({relations_type})"
        )
        return entities

    def count_owned_entities(
        self,
        entity: Dict[str, Any],
        relations_type: str = RELATIONS_DIRECT,
        kinds: Sequence[str] = DEFAULT_OWNED_KINDS
    ) -> List[OwnershipCount]:
        """
        Count owned entities by kind and type.

        Returns:
            Counts sorted by kind, then type
        """
        entities = self.get_owned_entities(entity, relations_type, kinds)
        counter = Counter(
            (owned.get('kind', ''), (owned.get('spec') or {}).get('type'))
            for owned in entities
        )
        return sorted(
            (OwnershipCount(kind=kind, type=type_, count=count)
             for (kind, type_), count in counter.items()),
            key=lambda c: (c.kind, c.type or '')
        )


def _unique(refs: List[str]) -> List[str]:
    return list(dict.fromkeys(refs))

"""
Entity reference helpers.

Entity references take the form ``<kind>:<namespace>/<name>``, e.g.
``component:default/playback-order``.
"""
import re
from dataclasses import dataclass
from typing import Optional

from .visit import VisitInput

DEFAULT_NAMESPACE = 'default'

# /catalog/<namespace>/<kind>/<name>[/...]
_CATALOG_PATHNAME_PATTERN = re.compile(r'^/catalog/([^/]+)/([^/]+)/([^/]+)')


@dataclass(frozen=True)
class CompoundEntityRef:
    """Parsed entity reference."""
    kind: str
    namespace: str
    name: str

    def __str__(self) -> str:
        return stringify_entity_ref(self.kind, self.name, self.namespace)


def stringify_entity_ref(kind: str, name: str, namespace: Optional[str] = None) -> str:
    """
    Build an entity reference string.

    The kind is lowercased; the namespace defaults to ``default``.

    Example:
        >>> stringify_entity_ref('Group', 'team.squad1')
        'group:default/team.squad1'
    """
    if not kind or not name:
        raise ValueError("Entity reference requires both kind and name")
    return f"{kind.lower()}:{namespace or DEFAULT_NAMESPACE}/{name}"


def parse_entity_ref(
    ref: str,
    default_kind: Optional[str] = None,
    default_namespace: str = DEFAULT_NAMESPACE
) -> CompoundEntityRef:
    """
    Parse ``[kind:][namespace/]name``.

    Args:
        ref: Entity reference string
        default_kind: Kind to use when the reference has none
        default_namespace: Namespace to use when the reference has none

    Returns:
        CompoundEntityRef

    Raises:
        ValueError: If the reference is empty or a part is missing
    """
    if not ref:
        raise ValueError("Entity reference must be a non-empty string")

    kind: Optional[str] = default_kind
    rest = ref
    if ':' in rest:
        kind, rest = rest.split(':', 1)
    namespace = default_namespace
    if '/' in rest:
        namespace, rest = rest.split('/', 1)

    if not kind:
        raise ValueError(f"Entity reference {ref!r} has no kind and no default kind was given")
    if not namespace or not rest:
        raise ValueError(f"Entity reference {ref!r} is malformed")

    return CompoundEntityRef(kind=kind, namespace=namespace, name=rest)


def entity_ref_from_pathname(pathname: str) -> Optional[str]:
    """
    Derive an entity reference from a catalog entity page pathname.

    Example:
        >>> entity_ref_from_pathname('/catalog/default/component/playback-order/docs')
        'component:default/playback-order'

    Returns:
        Entity reference, or None if the pathname is not an entity page
    """
    match = _CATALOG_PATHNAME_PATTERN.match(pathname or '')
    if not match:
        return None
    namespace, kind, name = match.groups()
    return f"{kind}:{namespace}/{name}"


def visit_for_pathname(pathname: str, name: str) -> VisitInput:
    """
    Build a visit for a location, keyed by its entity when it has one.

    Pages that are not catalog entity pages use the pathname itself as
    the entity reference.
    """
    return VisitInput(
        entity_ref=entity_ref_from_pathname(pathname) or pathname,
        pathname=pathname,
        name=name
    )

"""
HTTP client for the software catalog API.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import requests

from ..exceptions import CatalogApiError

logger = logging.getLogger(__name__)

FilterValue = Union[str, Sequence[str]]
EntityFilter = Union[Mapping[str, FilterValue], Sequence[Mapping[str, FilterValue]]]


def build_filter_params(entity_filter: Optional[EntityFilter]) -> List[Tuple[str, str]]:
    """
    Encode entity filters as ``filter`` query parameters.

    Each mapping becomes one ``filter`` parameter whose ``key=value``
    parts are joined with commas. A list value repeats the key, which the
    catalog reads as "any of". Separate mappings are OR-ed by the catalog.

    Example:
        >>> build_filter_params({'kind': ['component', 'api'], 'spec.type': 'service'})
        [('filter', 'kind=component,kind=api,spec.type=service')]
    """
    if not entity_filter:
        return []
    filters = [entity_filter] if isinstance(entity_filter, Mapping) else list(entity_filter)

    params = []
    for filter_item in filters:
        parts = []
        for key, value in filter_item.items():
            values = [value] if isinstance(value, str) else list(value)
            parts.extend(f"{key}={v}" for v in values)
        if parts:
            params.append(('filter', ','.join(parts)))
    return params


class CatalogClient:
    """
    Client for the catalog REST API.

    Only the read endpoints used for ownership lookups are implemented.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Catalog API base URL (e.g. http://localhost:7007/api/catalog)
            token: Optional bearer token
            session: Optional requests session
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {'Accept': 'application/json'}
        if token:
            self.headers['Authorization'] = f'Bearer {token}'

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, headers=self.headers, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"Catalog request {method} {url} failed with status {status_code}")
            raise CatalogApiError(
                f"Catalog request failed: {e}", status_code=status_code
            ) from e
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Catalog request {method} {url} failed: {e}")
            raise CatalogApiError(f"Catalog request failed: {e}") from e

    def get_entities(
        self,
        entity_filter: Optional[EntityFilter] = None,
        fields: Optional[Sequence[str]] = None
    ) -> List[Dict[str, Any]]:
        """
        Query entities, following pagination cursors.

        Args:
            entity_filter: One filter mapping, or a list of mappings OR-ed together
            fields: Optional projection of entity fields

        Returns:
            List of entities

        Raises:
            CatalogApiError: On request failure
        """
        params = build_filter_params(entity_filter)
        if fields:
            params.append(('fields', ','.join(fields)))

        items: List[Dict[str, Any]] = []
        while True:
            body = self._request('GET', '/entities/by-query', params=params)
            items.extend(body.get('items', []))

            cursor = (body.get('pageInfo') or {}).get('nextCursor')
            if not cursor:
                break
            params = [('cursor', cursor)]
            if fields:
                params.append(('fields', ','.join(fields)))

        logger.debug(f"Catalog query returned {len(items)} entities")
        return items

    def get_entities_by_refs(
        self,
        entity_refs: Sequence[str],
        fields: Optional[Sequence[str]] = None
    ) -> List[Optional[Dict[str, Any]]]:
        """
        Fetch entities by reference.

        Args:
            entity_refs: Entity references to fetch
            fields: Optional projection of entity fields

        Returns:
            Entities in request order; None where a reference was not found

        Raises:
            CatalogApiError: On request failure
        """
        if not entity_refs:
            return []

        payload: Dict[str, Any] = {'entityRefs': list(entity_refs)}
        if fields:
            payload['fields'] = list(fields)

        body = self._request('POST', '/entities/by-refs', json=payload)
        return body.get('items', [])

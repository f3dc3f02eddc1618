"""
Unit tests for CatalogClient.
"""
from unittest.mock import Mock

import pytest
import requests

from visit_store.exceptions import CatalogApiError
from visit_store.services.catalog_client import CatalogClient, build_filter_params


def make_response(body=None, status_code=200):
    """Create a mock requests response."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f'{status_code} Error', response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_session():
    """Create mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(mock_session):
    """Create CatalogClient with a mock session."""
    return CatalogClient(
        'http://catalog.test/api/catalog/', token='secret', session=mock_session, timeout=5
    )


class TestBuildFilterParams:
    """Test suite for filter encoding."""

    def test_empty_filter(self):
        assert build_filter_params(None) == []

    def test_list_values_repeat_key(self):
        params = build_filter_params({
            'kind': ['Component', 'API'],
            'relations.ownedBy': ['group:default/a', 'user:default/b'],
        })

        assert params == [(
            'filter',
            'kind=Component,kind=API,'
            'relations.ownedBy=group:default/a,relations.ownedBy=user:default/b'
        )]

    def test_multiple_filters_become_separate_params(self):
        params = build_filter_params([{'kind': 'Group'}, {'kind': 'User'}])

        assert params == [('filter', 'kind=Group'), ('filter', 'kind=User')]


class TestCatalogClient:
    """Test suite for CatalogClient requests."""

    def test_get_entities_sends_filter_fields_and_auth(self, client, mock_session):
        """Test query parameters and headers of entity queries."""
        # Arrange
        mock_session.request.return_value = make_response({'items': [{'kind': 'Component'}]})

        # Act
        items = client.get_entities({'kind': 'Component'}, fields=['kind', 'metadata.name'])

        # Assert
        assert items == [{'kind': 'Component'}]
        mock_session.request.assert_called_once_with(
            'GET',
            'http://catalog.test/api/catalog/entities/by-query',
            headers={'Accept': 'application/json', 'Authorization': 'Bearer secret'},
            timeout=5,
            params=[('filter', 'kind=Component'), ('fields', 'kind,metadata.name')]
        )

    def test_get_entities_follows_cursor(self, client, mock_session):
        """Test that paginated results are concatenated."""
        mock_session.request.side_effect = [
            make_response({'items': [{'id': 1}], 'pageInfo': {'nextCursor': 'c2'}}),
            make_response({'items': [{'id': 2}], 'pageInfo': {}}),
        ]

        items = client.get_entities({'kind': 'Component'})

        assert items == [{'id': 1}, {'id': 2}]
        second_call = mock_session.request.call_args_list[1]
        assert second_call.kwargs['params'] == [('cursor', 'c2')]

    def test_get_entities_by_refs_posts_refs(self, client, mock_session):
        """Test the by-refs request body."""
        mock_session.request.return_value = make_response({'items': [{'kind': 'Group'}, None]})

        items = client.get_entities_by_refs(
            ['group:default/a', 'group:default/missing'], fields=['kind']
        )

        assert items == [{'kind': 'Group'}, None]
        args, kwargs = mock_session.request.call_args
        assert args == ('POST', 'http://catalog.test/api/catalog/entities/by-refs')
        assert kwargs['json'] == {
            'entityRefs': ['group:default/a', 'group:default/missing'],
            'fields': ['kind'],
        }

    def test_get_entities_by_refs_empty_skips_request(self, client, mock_session):
        """Test that no request is made for an empty ref list."""
        assert client.get_entities_by_refs([]) == []
        mock_session.request.assert_not_called()

    def test_http_error_raises_catalog_api_error(self, client, mock_session):
        """Test that HTTP failures carry the status code."""
        mock_session.request.return_value = make_response(status_code=503)

        with pytest.raises(CatalogApiError) as exc_info:
            client.get_entities({'kind': 'Component'})

        assert exc_info.value.status_code == 503

    def test_connection_error_raises_catalog_api_error(self, client, mock_session):
        """Test that transport failures are wrapped."""
        mock_session.request.side_effect = requests.ConnectionError('refused')

        with pytest.raises(CatalogApiError) as exc_info:
            client.get_entities_by_refs(['group:default/a'])

        assert exc_info.value.status_code is None

    def test_no_token_omits_authorization(self, mock_session):
        """Test anonymous access."""
        client = CatalogClient('http://catalog.test', session=mock_session)

        assert 'Authorization' not in client.headers

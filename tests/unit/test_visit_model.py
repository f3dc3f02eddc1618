"""
Unit tests for the Visit and VisitInput models.
"""
from decimal import Decimal

import pytest

from visit_store.models.visit import Visit, VisitInput


class TestVisitInput:
    """Test suite for VisitInput."""

    def test_requires_entity_ref(self):
        """Test that an empty entity_ref is rejected."""
        with pytest.raises(ValueError, match='entity_ref'):
            VisitInput(entity_ref='', pathname='/catalog', name='Catalog')

    def test_requires_pathname(self):
        """Test that an empty pathname is rejected."""
        with pytest.raises(ValueError, match='pathname'):
            VisitInput(entity_ref='component:default/a', pathname='', name='A')

    def test_key_is_entity_ref_and_pathname(self, playback_order_visit):
        """Test dedup key composition."""
        assert playback_order_visit.key == (
            'component:default/playback-order',
            '/catalog/default/component/playback-order'
        )


class TestVisit:
    """Test suite for Visit."""

    def test_create_starts_with_one_hit(self, playback_order_visit):
        """Test that a new visit has hits=1 and the given id and timestamp."""
        # Act
        visit = Visit.create(playback_order_visit, visit_id='v-1', timestamp=1000)

        # Assert
        assert visit.id == 'v-1'
        assert visit.timestamp == 1000
        assert visit.hits == 1
        assert visit.name == 'Playback Order'
        assert visit.key == playback_order_visit.key

    def test_bump_keeps_id_and_increments_hits(self, playback_order_visit):
        """Test that a repeat visit keeps the id and updates the rest."""
        # Arrange
        visit = Visit.create(playback_order_visit, visit_id='v-1', timestamp=1000)

        # Act
        bumped = visit.bump(name='Playback Order v2', timestamp=2000)

        # Assert
        assert bumped.id == 'v-1'
        assert bumped.hits == 2
        assert bumped.timestamp == 2000
        assert bumped.name == 'Playback Order v2'
        assert visit.hits == 1  # original is unchanged

    def test_to_dict_uses_camel_case_keys(self):
        """Test stored representation."""
        visit = Visit(
            id='v-1',
            entity_ref='component:default/a',
            pathname='/catalog/default/component/a',
            name='A',
            timestamp=1000,
            hits=3
        )

        assert visit.to_dict() == {
            'id': 'v-1',
            'entityRef': 'component:default/a',
            'pathname': '/catalog/default/component/a',
            'name': 'A',
            'timestamp': 1000,
            'hits': 3
        }

    def test_from_dict_converts_decimals(self):
        """Test that DynamoDB Decimal numbers become ints."""
        visit = Visit.from_dict({
            'id': 'v-1',
            'entityRef': 'component:default/a',
            'pathname': '/catalog/default/component/a',
            'name': 'A',
            'timestamp': Decimal('1700000000000'),
            'hits': Decimal('4')
        })

        assert visit.timestamp == 1700000000000
        assert isinstance(visit.timestamp, int)
        assert visit.hits == 4
        assert isinstance(visit.hits, int)

    def test_from_dict_missing_field_raises(self):
        """Test that a missing required field raises ValueError."""
        with pytest.raises(ValueError, match='timestamp'):
            Visit.from_dict({
                'id': 'v-1',
                'entityRef': 'component:default/a',
                'pathname': '/a',
                'name': 'A'
            })

    def test_from_dict_malformed_number_raises(self):
        """Test that a non-numeric timestamp raises ValueError."""
        with pytest.raises(ValueError):
            Visit.from_dict({
                'id': 'v-1',
                'entityRef': 'component:default/a',
                'pathname': '/a',
                'name': 'A',
                'timestamp': 'yesterday'
            })

    def test_create_and_bump_truncate_float_timestamps(self, playback_order_visit):
        """Test that fractional millisecond clocks still give int timestamps."""
        visit = Visit.create(playback_order_visit, visit_id='v-1', timestamp=1000.9)
        bumped = visit.bump(name='Playback Order', timestamp=2000.5)

        assert visit.timestamp == 1000
        assert isinstance(visit.timestamp, int)
        assert bumped.timestamp == 2000
        assert isinstance(bumped.timestamp, int)

    @pytest.mark.parametrize('key', ['id', 'entityRef', 'pathname', 'name'])
    def test_from_dict_rejects_null_text_fields(self, key):
        """Test that a stored None is not turned into the string 'None'."""
        data = {
            'id': 'v-1',
            'entityRef': 'component:default/a',
            'pathname': '/a',
            'name': 'A',
            'timestamp': 1000
        }
        data[key] = None

        with pytest.raises(ValueError, match=key):
            Visit.from_dict(data)

    def test_from_dict_rejects_numeric_id(self):
        with pytest.raises(ValueError, match='id'):
            Visit.from_dict({
                'id': 7,
                'entityRef': 'component:default/a',
                'pathname': '/a',
                'timestamp': 1000
            })

    def test_from_dict_name_defaults_to_empty(self):
        visit = Visit.from_dict({
            'id': 'v-1',
            'entityRef': 'component:default/a',
            'pathname': '/a',
            'timestamp': 1000
        })

        assert visit.name == ''

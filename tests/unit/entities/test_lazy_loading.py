##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Tests for the `lazy_loading.py` module.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from ghostdb.backends.memory_store import MemoryStore
from ghostdb.entities import LazyLoading
from ghostdb.exceptions import EntityNotFoundError
from tests.entity_types import Author


class TestGhostMixin:
    """Tests for ghost entities created with `GhostMixin.ghost`."""

    def test_ghost_holds_only_the_id(self, author_store: MagicMock):
        """
        Test that a ghost holds its id and nothing is read from the store.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)

        assert isinstance(author, LazyLoading)
        assert author.is_ghost()
        assert author.id == "a1"
        assert author.__dict__["name"] is None
        author_store.retrieve_data.assert_not_called()

    def test_ghost_does_not_run_post_init(self, author_store: MagicMock):
        """
        Test that creating a ghost does not initialize the entity.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)
        assert not hasattr(author, "_init_calls")

    def test_expand_loads_values_and_initializes(self, author_store: MagicMock):
        """
        Test that expanding fetches the stored values and runs `__post_init__` once.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)
        author.expand()

        assert not author.is_ghost()
        assert author.name == "Edgar"
        assert author.born == datetime(1809, 1, 19)
        assert author._init_calls == 1
        author_store.retrieve_data.assert_called_once_with("a1")

    def test_expand_twice_has_no_effect(self, author_store: MagicMock):
        """
        Test that expanding an entity that is already expanded does nothing.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)
        author.expand()
        author.expand()

        assert author._init_calls == 1
        author_store.retrieve_data.assert_called_once()

    def test_get_values_expands_ghost(self, author_store: MagicMock):
        """
        Test that extracting values from a ghost expands it first.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)

        assert author.get_values() == {"id": "a1", "name": "Edgar", "born": datetime(1809, 1, 19)}
        assert not author.is_ghost()

    def test_store_is_not_an_external_value(self, author_store: MagicMock):
        """
        Test that the bookkeeping attributes of a ghost never leak into its values.

        Args:
            author_store: A mocked store holding author "a1".
        """
        values = Author.ghost("a1", author_store).get_values()

        assert "_store" not in values
        assert "_ghost" not in values

    def test_expand_missing_entity(self, author_store: MagicMock):
        """
        Test that expanding a ghost whose values are gone raises an `EntityNotFoundError`.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author_store.retrieve_data.return_value = None
        author = Author.ghost("missing", author_store)

        with pytest.raises(EntityNotFoundError, match="Author with id 'missing' not found"):
            author.expand()
        assert author.is_ghost()

    def test_constructed_entity_is_not_a_ghost(self):
        """
        Test that an entity built through its constructor is never a ghost.
        """
        author = Author(id="a2", name="Mary")

        assert not author.is_ghost()
        author.expand()
        assert author.name == "Mary"

    def test_get_values_twice_expands_once(self, author_store: MagicMock):
        """
        Test that reading the values of an expanded ghost again doesn't hit the store.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)

        first = author.get_values()
        second = author.get_values()

        assert first == second
        assert author._init_calls == 1
        author_store.retrieve_data.assert_called_once_with("a1")

    def test_values_set_on_ghost_survive_expansion(self, author_store: MagicMock):
        """
        Test that values assigned to a ghost are kept when the rest of it is loaded.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)
        author.set_values({"name": "Allan"})

        assert author.get_values() == {"id": "a1", "name": "Allan", "born": datetime(1809, 1, 19)}
        assert author._init_calls == 1

    def test_attribute_written_on_ghost_survives_expansion(self, author_store: MagicMock):
        """
        Test that a plain attribute write on a ghost is kept when it is expanded.

        Args:
            author_store: A mocked store holding author "a1".
        """
        author = Author.ghost("a1", author_store)
        author.born = datetime(1810, 1, 1)
        author.expand()

        assert author.born == datetime(1810, 1, 1)
        assert author.name == "Edgar"
        assert "_ghost_edits" not in vars(author)

    def test_edited_ghost_is_saved_with_new_values(self):
        """
        Test that editing a ghost retrieved from a store and saving it persists the edit.
        """
        store = MemoryStore(Author)
        store.save(Author(id="a1", name="Edgar"))

        ghost = store.retrieve_ghost("a1")
        ghost.set_values({"name": "Allan"})
        store.save(ghost)

        assert ghost.name == "Allan"
        assert store.retrieve("a1").name == "Allan"

##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Entity types shared by the test suite.

They are defined at module level (rather than inside fixtures) so that stores and
entity sets can rebuild them with `from_data`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from ghostdb.entities import Data, Dynamic, Entity, GhostMixin, internal_field
from ghostdb.entity_sets import EntitySet


@dataclass
class Money(Data):
    """A structured value with its own storage form."""

    amount: int
    currency: str

    def to_data(self) -> Dict:
        return {"amount": self.amount, "currency": self.currency}


@dataclass
class Article(Entity):
    """An entity with external, internal, and underscored fields."""

    id: int = None
    title: str = None
    body: str = ""
    tags: List[str] = field(default_factory=list)
    secret: str = internal_field(default=None)
    _revision: int = 0


@dataclass
class DynamicArticle(Article, Dynamic):
    """An article that keeps fields it does not declare."""


@dataclass
class Counter(Entity):
    """An entity whose `__post_init__` records what it sees."""

    id: int = None
    items: List[str] = field(default_factory=list)

    def __post_init__(self):
        self._seen_items = list(self.items)
        self._init_calls = getattr(self, "_init_calls", 0) + 1


@dataclass
class Invoice(Entity):
    """An entity holding a structured value and a timestamp."""

    id: str = None
    price: Money = None
    issued: datetime = None
    customer: Article = None


@dataclass
class Author(GhostMixin, Entity):
    """An entity that can be loaded as a ghost."""

    id: str = None
    name: str = None
    born: datetime = None

    def __post_init__(self):
        self._init_calls = getattr(self, "_init_calls", 0) + 1


@dataclass
class Library(Entity):
    """An entity holding a deferred collection."""

    id: str = None
    opened: datetime = None
    books: EntitySet = None


@dataclass
class RedactedUser(Entity):
    """An entity that filters its external form."""

    id: int = None
    email: str = None
    role: str = "member"

    def json_serialize_filter(self, values: Dict) -> Dict:
        values.pop("email", None)
        values["kind"] = values.pop("role")
        return values


class ArticleSet(EntitySet):
    """A custom entity set for articles."""

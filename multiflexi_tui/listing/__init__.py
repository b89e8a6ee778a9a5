"""Entity listings: registry of entity types and pagination controller."""

from __future__ import annotations

from .controller import ListingController, ListingState, PageRequest, next_page, prev_page
from .registry import ENTITIES, Column, EntitySpec, entity_for_record, get_entity

__all__ = [
    "Column",
    "ENTITIES",
    "EntitySpec",
    "ListingController",
    "ListingState",
    "PageRequest",
    "entity_for_record",
    "get_entity",
    "next_page",
    "prev_page",
]

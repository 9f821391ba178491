"""
Immutable input snapshot shared by all validators in a run.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from .catalog import CatalogIndex
from .models import DamageObservation, Room, ScopeItem, WaterClassification
from .policy import ScopePolicy

UNKNOWN_ROOM = "unknown room"


def _coerce(model: type, values: Iterable[Any]) -> tuple[Any, ...]:
    return tuple(
        value if isinstance(value, model) else model.model_validate(value)
        for value in values
    )


@dataclass(frozen=True)
class ValidationSnapshot:
    """
    Point-in-time view of rooms, damages and scope items plus the catalog.

    Validators only read from the snapshot. Derived views are computed
    lazily and cached on first access.
    """

    rooms: tuple[Room, ...]
    damages: tuple[DamageObservation, ...]
    scope_items: tuple[ScopeItem, ...]
    catalog: CatalogIndex = field(default_factory=CatalogIndex)
    policy: ScopePolicy = field(default_factory=ScopePolicy)
    water_classification: WaterClassification | None = None

    @classmethod
    def build(
        cls,
        scope_items: Iterable[ScopeItem | dict[str, Any]],
        rooms: Iterable[Room | dict[str, Any]],
        damages: Iterable[DamageObservation | dict[str, Any]],
        catalog: CatalogIndex | None = None,
        policy: ScopePolicy | None = None,
        water_classification: WaterClassification | dict[str, Any] | None = None,
    ) -> "ValidationSnapshot":
        """Build a snapshot from models or plain dicts."""
        if isinstance(water_classification, dict):
            water_classification = WaterClassification.model_validate(water_classification)
        return cls(
            rooms=_coerce(Room, rooms),
            damages=_coerce(DamageObservation, damages),
            scope_items=_coerce(ScopeItem, scope_items),
            catalog=catalog if catalog is not None else CatalogIndex(),
            policy=policy if policy is not None else ScopePolicy(),
            water_classification=water_classification,
        )

    @cached_property
    def active_items(self) -> tuple[ScopeItem, ...]:
        """Scope items that participate in validation."""
        return tuple(item for item in self.scope_items if item.is_active)

    @cached_property
    def rooms_by_id(self) -> dict[int, Room]:
        return {room.id: room for room in self.rooms}

    @cached_property
    def active_items_by_room(self) -> dict[int | None, list[ScopeItem]]:
        grouped: dict[int | None, list[ScopeItem]] = {}
        for item in self.active_items:
            grouped.setdefault(item.room_id, []).append(item)
        return grouped

    @cached_property
    def active_trade_codes(self) -> set[str]:
        return {item.trade_code for item in self.active_items}

    def room_name(self, room_id: int | None) -> str:
        """Room name for messages; dangling references render as unknown."""
        room = self.rooms_by_id.get(room_id) if room_id is not None else None
        return room.name if room else UNKNOWN_ROOM

    def damages_in_room(self, room_id: int) -> list[DamageObservation]:
        return [damage for damage in self.damages if damage.room_id == room_id]

    def active_items_in_room(self, room_id: int | None) -> list[ScopeItem]:
        return self.active_items_by_room.get(room_id, [])

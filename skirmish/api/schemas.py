"""
Pydantic Schemas - Flat snapshot records for persisting a match.

These models define the exact contract for storing a MatchState as
JSON (or any nested key/value store) and restoring it. A round trip
reproduces an observably identical state: same scores, same legal
next actions.

Record shapes:
- AbilityRecord: {type, params}
- PrizeRecord: {id, victoryPoints, name?, description?, class?, abilities}
- MultiplierTableRecord: {id, name, class_multipliers}
- SpecialUnitRecord: {id, name, base_strength, ability_type, params}
- MatchSnapshot: the whole match, per-player maps keyed by player id
"""

from __future__ import annotations
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..engine_core import MAX_HAND_VALUE
from ..engine_core.entities import (
    MultiplierTable,
    Prize,
    PrizeAbility,
    PrizeAbilityType,
    PrizeClass,
    SpecialAbilityType,
    SpecialUnit,
)
from ..engine_core.state import EndReason, MatchState


# =============================================================================
# Entity Records
# =============================================================================

class AbilityRecord(BaseModel):
    """A prize ability: type tag plus opaque params."""
    type: PrizeAbilityType
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_ability(cls, ability: PrizeAbility) -> AbilityRecord:
        return cls(type=ability.type, params=dict(ability.params))

    def to_ability(self) -> PrizeAbility:
        return PrizeAbility(type=self.type, params=dict(self.params))


class PrizeRecord(BaseModel):
    """A prize as stored."""
    id: str
    victory_points: int = Field(alias="victoryPoints")
    name: Optional[str] = None
    description: Optional[str] = None
    prize_class: Optional[PrizeClass] = Field(default=None, alias="class")
    abilities: list[AbilityRecord] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_prize(cls, prize: Prize) -> PrizeRecord:
        return cls(
            id=prize.id,
            victory_points=prize.victory_points,
            name=prize.name,
            description=prize.description,
            prize_class=prize.prize_class,
            abilities=[AbilityRecord.from_ability(a) for a in prize.abilities],
        )

    def to_prize(self) -> Prize:
        return Prize(
            id=self.id,
            victory_points=self.victory_points,
            name=self.name,
            description=self.description,
            prize_class=self.prize_class,
            abilities=tuple(a.to_ability() for a in self.abilities),
        )


class MultiplierTableRecord(BaseModel):
    """A corporation as stored."""
    id: str
    name: str
    class_multipliers: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_table(cls, table: MultiplierTable) -> MultiplierTableRecord:
        return cls(id=table.id, name=table.name, class_multipliers=dict(table.class_multipliers))

    def to_table(self) -> MultiplierTable:
        return MultiplierTable(id=self.id, name=self.name, class_multipliers=dict(self.class_multipliers))


class SpecialUnitRecord(BaseModel):
    """A mercenary as stored."""
    id: str
    name: str
    base_strength: int
    ability_type: SpecialAbilityType
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_special(cls, special: SpecialUnit) -> SpecialUnitRecord:
        return cls(
            id=special.id,
            name=special.name,
            base_strength=special.base_strength,
            ability_type=special.ability_type,
            params=dict(special.params),
        )

    def to_special(self) -> SpecialUnit:
        return SpecialUnit(
            id=self.id,
            name=self.name,
            base_strength=self.base_strength,
            ability_type=self.ability_type,
            params=dict(self.params),
        )


# =============================================================================
# Match Snapshot
# =============================================================================

class MatchSnapshot(BaseModel):
    """
    A complete match, flattened.

    Integer player keys become strings in JSON and are coerced back to
    integers on load.
    """
    player_count: int = Field(ge=2)
    hands: dict[int, list[int]]
    prize_deck: list[PrizeRecord]
    current_prize_index: int = Field(ge=0)
    prize_pot: list[PrizeRecord] = Field(default_factory=list)
    claimed_prizes: dict[int, list[PrizeRecord]]
    current_plays: dict[int, Optional[int]]
    current_special_plays: dict[int, Optional[SpecialUnitRecord]] = Field(default_factory=dict)
    game_over: bool = False
    end_reason: Optional[EndReason] = None
    multiplier_tables: dict[int, Optional[MultiplierTableRecord]] = Field(default_factory=dict)
    specials: dict[int, list[SpecialUnitRecord]] = Field(default_factory=dict)
    discarded_prizes: list[PrizeRecord] = Field(default_factory=list)
    max_hand_value: int = MAX_HAND_VALUE

    @classmethod
    def from_state(cls, state: MatchState) -> MatchSnapshot:
        """Flatten a MatchState."""
        return cls(
            player_count=state.player_count,
            hands={p: list(h) for p, h in state.hands.items()},
            prize_deck=[PrizeRecord.from_prize(p) for p in state.prize_deck],
            current_prize_index=state.current_prize_index,
            prize_pot=[PrizeRecord.from_prize(p) for p in state.prize_pot],
            claimed_prizes={
                p: [PrizeRecord.from_prize(prize) for prize in prizes]
                for p, prizes in state.claimed_prizes.items()
            },
            current_plays=dict(state.current_plays),
            current_special_plays={
                p: SpecialUnitRecord.from_special(s) if s else None
                for p, s in state.current_special_plays.items()
            },
            game_over=state.game_over,
            end_reason=state.end_reason,
            multiplier_tables={
                p: MultiplierTableRecord.from_table(t) if t else None
                for p, t in state.multiplier_tables.items()
            },
            specials={
                p: [SpecialUnitRecord.from_special(s) for s in units]
                for p, units in state.specials.items()
            },
            discarded_prizes=[PrizeRecord.from_prize(p) for p in state.discarded_prizes],
            max_hand_value=state.max_hand_value,
        )

    def to_state(self) -> MatchState:
        """Rebuild a MatchState. Missing per-player slots get their empty defaults."""
        players = range(1, self.player_count + 1)
        return MatchState(
            player_count=self.player_count,
            hands={p: list(self.hands.get(p, [])) for p in players},
            prize_deck=[r.to_prize() for r in self.prize_deck],
            current_prize_index=self.current_prize_index,
            prize_pot=[r.to_prize() for r in self.prize_pot],
            claimed_prizes={
                p: [r.to_prize() for r in self.claimed_prizes.get(p, [])]
                for p in players
            },
            current_plays={p: self.current_plays.get(p) for p in players},
            current_special_plays={
                p: self.current_special_plays[p].to_special()
                if self.current_special_plays.get(p) else None
                for p in players
            },
            game_over=self.game_over,
            end_reason=self.end_reason,
            multiplier_tables={
                p: self.multiplier_tables[p].to_table()
                if self.multiplier_tables.get(p) else None
                for p in players
            },
            specials={
                p: [r.to_special() for r in self.specials.get(p, [])]
                for p in players
            },
            discarded_prizes=[r.to_prize() for r in self.discarded_prizes],
            max_hand_value=self.max_hand_value,
        )

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> MatchSnapshot:
        return cls.model_validate_json(json_str)


def snapshot_state(state: MatchState) -> dict[str, Any]:
    """MatchState -> plain JSON-compatible dict."""
    return MatchSnapshot.from_state(state).model_dump(mode="json", by_alias=True)


def restore_state(data: dict[str, Any]) -> MatchState:
    """Plain dict (as produced by snapshot_state) -> MatchState."""
    return MatchSnapshot.model_validate(data).to_state()

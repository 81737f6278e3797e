"""Battle state for the creature battle simulator.

``BattleState`` is the single root aggregate of one battle.  It is only
ever replaced wholesale by the reducer (see ``creature_battle.sim.reducer``);
callers outside the store treat it as read-only.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from creature_battle.sim.core.entities import Creature, Side, SpellItem, ToolItem


class GameStatus(str, Enum):
    """Top-level lifecycle of a battle."""

    SETUP = "setup"
    BATTLE = "battle"
    VICTORY = "victory"
    DEFEAT = "defeat"


# ---------------------------------------------------------------------------
# SideState
# ---------------------------------------------------------------------------

class SideState(BaseModel):
    """Everything one side owns during a battle.

    ``deck``, ``hand`` and ``field`` partition the side's creatures:
    creatures move between them, they are never copied.
    """

    deck: list[Creature] = Field(default_factory=list)
    """Front of the list is the next draw."""

    hand: list[Creature] = Field(default_factory=list)
    field: list[Creature] = Field(default_factory=list)
    energy: int = 10
    tools: list[ToolItem] = Field(default_factory=list)
    spells: list[SpellItem] = Field(default_factory=list)

    # -- queries -------------------------------------------------------------

    @property
    def is_exhausted(self) -> bool:
        """True when the side has no creature left anywhere."""
        return not self.field and not self.hand and not self.deck

    @property
    def remaining_creatures(self) -> int:
        return len(self.field) + len(self.hand) + len(self.deck)

    def find_on_field(self, creature_id: str) -> Creature | None:
        for creature in self.field:
            if creature.id == creature_id:
                return creature
        return None

    def find_in_hand(self, creature_id: str) -> Creature | None:
        for creature in self.hand:
            if creature.id == creature_id:
                return creature
        return None

    def find_tool(self, tool_id: str) -> ToolItem | None:
        return next((t for t in self.tools if t.id == tool_id), None)

    def find_spell(self, spell_id: str) -> SpellItem | None:
        return next((s for s in self.spells if s.id == spell_id), None)


# ---------------------------------------------------------------------------
# SidePair
# ---------------------------------------------------------------------------

class SidePair(BaseModel):
    """An integer counter kept per side (streaks, momentum)."""

    player: int = 0
    enemy: int = 0

    def get(self, side: Side) -> int:
        return self.player if side is Side.PLAYER else self.enemy

    def set(self, side: Side, value: int) -> None:
        if side is Side.PLAYER:
            self.player = value
        else:
            self.enemy = value

    def add(self, side: Side, amount: int) -> None:
        self.set(side, self.get(side) + amount)

    def reset(self) -> None:
        self.player = 0
        self.enemy = 0


# ---------------------------------------------------------------------------
# LogEntry
# ---------------------------------------------------------------------------

class LogEntry(BaseModel):
    """One line of the battle log, stamped with the turn it happened on."""

    turn: int
    message: str


# ---------------------------------------------------------------------------
# BattleState
# ---------------------------------------------------------------------------

class BattleState(BaseModel):
    """Full state of a single battle."""

    game_state: GameStatus = GameStatus.SETUP
    turn: int = 1
    active_player: Side = Side.PLAYER
    difficulty: str = "easy"

    player: SideState = Field(default_factory=SideState)
    enemy: SideState = Field(default_factory=SideState)

    consecutive_actions: SidePair = Field(default_factory=SidePair)
    """Per-side streak of successful actions since the active player changed."""

    energy_momentum: SidePair = Field(default_factory=SidePair)
    """Energy spent per side since the last regeneration cycle."""

    battle_log: list[LogEntry] = Field(default_factory=list)

    # -- queries -------------------------------------------------------------

    @property
    def is_in_battle(self) -> bool:
        return self.game_state is GameStatus.BATTLE

    @property
    def is_over(self) -> bool:
        return self.game_state in (GameStatus.VICTORY, GameStatus.DEFEAT)

    def side(self, side: Side) -> SideState:
        return self.player if side is Side.PLAYER else self.enemy

    def locate_on_field(self, creature_id: str) -> Side | None:
        """Return which side's field holds *creature_id*, if any.

        The player field is checked first.
        """
        if self.player.find_on_field(creature_id) is not None:
            return Side.PLAYER
        if self.enemy.find_on_field(creature_id) is not None:
            return Side.ENEMY
        return None

    # -- log -----------------------------------------------------------------

    def log(self, message: str) -> None:
        """Append *message* to the battle log under the current turn."""
        self.battle_log.append(LogEntry(turn=self.turn, message=message))

"""Tests for SideState, SidePair and BattleState."""

import pytest

from creature_battle.sim.core.entities import Creature, Side, SpellItem, ToolItem
from creature_battle.sim.core.game_state import BattleState, GameStatus, SidePair, SideState


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_creature(cid: str, name: str = "Emberfox") -> Creature:
    return Creature(id=cid, species_name=name)


# ---------------------------------------------------------------------------
# SideState
# ---------------------------------------------------------------------------

class TestSideState:
    def test_exhausted_only_when_all_empty(self):
        side = SideState()
        assert side.is_exhausted

        side.deck = [_make_creature("a")]
        assert not side.is_exhausted

    def test_remaining_creatures_counts_all_containers(self):
        side = SideState(
            field=[_make_creature("a")],
            hand=[_make_creature("b"), _make_creature("c")],
            deck=[_make_creature("d")],
        )
        assert side.remaining_creatures == 4

    def test_lookups(self):
        side = SideState(
            field=[_make_creature("f")],
            hand=[_make_creature("h")],
            tools=[ToolItem(id="t", name="Salve")],
            spells=[SpellItem(id="s", name="Fireball")],
        )

        assert side.find_on_field("f").id == "f"
        assert side.find_on_field("h") is None
        assert side.find_in_hand("h").id == "h"
        assert side.find_tool("t").name == "Salve"
        assert side.find_spell("s").name == "Fireball"
        assert side.find_spell("missing") is None

    def test_default_energy(self):
        assert SideState().energy == 10


# ---------------------------------------------------------------------------
# SidePair
# ---------------------------------------------------------------------------

class TestSidePair:
    def test_add_and_get(self):
        pair = SidePair()
        pair.add(Side.PLAYER, 2)
        pair.add(Side.ENEMY, 5)
        pair.add(Side.PLAYER, 1)

        assert pair.get(Side.PLAYER) == 3
        assert pair.get(Side.ENEMY) == 5

    def test_reset(self):
        pair = SidePair(player=4, enemy=7)
        pair.reset()

        assert pair.player == 0
        assert pair.enemy == 0


# ---------------------------------------------------------------------------
# BattleState
# ---------------------------------------------------------------------------

class TestBattleState:
    def test_defaults(self):
        state = BattleState()

        assert state.game_state is GameStatus.SETUP
        assert state.turn == 1
        assert state.active_player is Side.PLAYER
        assert not state.is_in_battle
        assert state.battle_log == []

    def test_log_stamps_current_turn(self):
        state = BattleState(turn=4)
        state.log("Something happened")

        assert state.battle_log[-1].turn == 4
        assert state.battle_log[-1].message == "Something happened"

    def test_locate_on_field(self):
        state = BattleState(
            player=SideState(field=[_make_creature("p")]),
            enemy=SideState(field=[_make_creature("e")]),
        )

        assert state.locate_on_field("p") is Side.PLAYER
        assert state.locate_on_field("e") is Side.ENEMY
        assert state.locate_on_field("nowhere") is None

    def test_is_over(self):
        assert BattleState(game_state=GameStatus.VICTORY).is_over
        assert BattleState(game_state=GameStatus.DEFEAT).is_over
        assert not BattleState(game_state=GameStatus.BATTLE).is_over

    def test_side_accessor(self):
        state = BattleState()
        assert state.side(Side.PLAYER) is state.player
        assert state.side(Side.ENEMY) is state.enemy

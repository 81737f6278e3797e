"""Tests for deck / hand / field movement helpers."""

from creature_battle.sim.core.entities import Creature
from creature_battle.sim.core.game_state import SideState
from creature_battle.sim.mechanics.field import (
    draw_from_deck,
    move_hand_to_field,
    remove_casualties,
    replace_on_field,
)


def _make_creature(cid: str, health: int = 10) -> Creature:
    return Creature(id=cid, species_name=cid.title(), current_health=health)


class TestFieldHelpers:
    def test_replace_on_field(self):
        side = SideState(field=[_make_creature("a"), _make_creature("b")])
        updated = _make_creature("b", health=3)

        assert replace_on_field(side, updated)
        assert side.field[1].current_health == 3
        assert [c.id for c in side.field] == ["a", "b"]

    def test_replace_missing_returns_false(self):
        side = SideState(field=[_make_creature("a")])
        assert not replace_on_field(side, _make_creature("z"))

    def test_remove_casualties(self):
        side = SideState(field=[_make_creature("a", 0), _make_creature("b", 5)])
        fallen = remove_casualties(side)

        assert [c.id for c in fallen] == ["a"]
        assert [c.id for c in side.field] == ["b"]

    def test_move_hand_to_field(self):
        side = SideState(hand=[_make_creature("a"), _make_creature("b")])
        move_hand_to_field(side, side.hand[0])

        assert [c.id for c in side.hand] == ["b"]
        assert [c.id for c in side.field] == ["a"]

    def test_draw_from_front_of_deck(self):
        side = SideState(deck=[_make_creature("a"), _make_creature("b")])
        drawn = draw_from_deck(side)

        assert drawn.id == "a"
        assert [c.id for c in side.hand] == ["a"]
        assert [c.id for c in side.deck] == ["b"]

    def test_draw_from_empty_deck(self):
        side = SideState()
        assert draw_from_deck(side) is None
        assert side.hand == []

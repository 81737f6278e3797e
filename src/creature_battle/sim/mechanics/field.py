"""Deck / hand / field movement helpers.

A side's creatures are partitioned between its deck, hand and field.
These helpers move creatures between the three containers and replace
field entries by id; none of them ever duplicates a creature.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature
    from creature_battle.sim.core.game_state import SideState


def replace_on_field(side_state: SideState, creature: Creature) -> bool:
    """Swap the field entry whose id matches *creature*.

    Returns False if no such entry exists.
    """
    for i, existing in enumerate(side_state.field):
        if existing.id == creature.id:
            side_state.field[i] = creature
            return True
    return False


def remove_casualties(side_state: SideState) -> list[Creature]:
    """Drop every field creature at 0 HP or below.  Returns the fallen."""
    fallen = [c for c in side_state.field if c.current_health <= 0]
    if fallen:
        side_state.field = [c for c in side_state.field if c.current_health > 0]
    return fallen


def move_hand_to_field(side_state: SideState, creature: Creature) -> None:
    """Remove *creature* from the hand (by id) and append it to the field."""
    side_state.hand = [c for c in side_state.hand if c.id != creature.id]
    side_state.field.append(creature)


def draw_from_deck(side_state: SideState) -> Creature | None:
    """Move the front of the deck into the hand.  ``None`` if the deck is empty."""
    if not side_state.deck:
        return None
    card = side_state.deck.pop(0)
    side_state.hand.append(card)
    return card

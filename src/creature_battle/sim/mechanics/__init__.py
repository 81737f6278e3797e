"""Core battle mechanics.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from creature_battle.sim.mechanics import (
        deploy_cost, spend_energy, compute_regen, regenerate, apply_decay,
        record_action, reset_streaks, apply_combo_bonus,
        apply_ongoing_effects,
        replace_on_field, remove_casualties, move_hand_to_field, draw_from_deck,
    )
"""

# -- energy ------------------------------------------------------------------
from .energy import (
    apply_decay,
    can_afford,
    compute_regen,
    decay_amount,
    deploy_cost,
    field_energy_bonus,
    regenerate,
    should_decay,
    spend_energy,
)

# -- combo -------------------------------------------------------------------
from .combo import apply_combo_bonus, combo_ready, record_action, reset_streaks

# -- effects -----------------------------------------------------------------
from .effects import apply_ongoing_effects, tick_creature

# -- field -------------------------------------------------------------------
from .field import (
    draw_from_deck,
    move_hand_to_field,
    remove_casualties,
    replace_on_field,
)

__all__ = [
    # energy
    "deploy_cost",
    "can_afford",
    "spend_energy",
    "field_energy_bonus",
    "compute_regen",
    "regenerate",
    "decay_amount",
    "should_decay",
    "apply_decay",
    # combo
    "record_action",
    "reset_streaks",
    "combo_ready",
    "apply_combo_bonus",
    # effects
    "tick_creature",
    "apply_ongoing_effects",
    # field
    "replace_on_field",
    "remove_casualties",
    "move_hand_to_field",
    "draw_from_deck",
]

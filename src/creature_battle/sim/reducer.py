"""Battle reducer -- the pure ``(state, action) -> state`` transition function.

``BattleReducer.reduce`` never mutates the state it is given.  Accepted
transitions work on a deep copy and return it; rejected transitions
return the *same* input object together with a ``RejectionReason``.  No
precondition failure raises: callers inspect ``TransitionResult.accepted``
to decide what to show the user.

Each action type has a ``_handle_*`` method registered in ``_DISPATCH``.
Handlers receive the original state (returned on rejection) and a
private working copy (mutated and returned on success).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.core.actions import (
    AIActionDescriptor,
    AIActionKind,
    Attack,
    BattleActionType,
    DeployCreature,
    Defend,
    UseSpell,
    UseTool,
)
from creature_battle.sim.core.entities import Side
from creature_battle.sim.core.game_state import (
    BattleState,
    GameStatus,
    LogEntry,
    SidePair,
    SideState,
)
from creature_battle.sim.core.results import RejectionReason, TransitionResult
from creature_battle.sim.mechanics.combo import (
    apply_combo_bonus,
    combo_ready,
    record_action,
    reset_streaks,
)
from creature_battle.sim.mechanics.effects import apply_ongoing_effects
from creature_battle.sim.mechanics.energy import apply_decay, regenerate, spend_energy
from creature_battle.sim.mechanics.field import (
    draw_from_deck,
    move_hand_to_field,
    remove_casualties,
    replace_on_field,
)
from creature_battle.sim.rules.basic import BasicCombatRules

if TYPE_CHECKING:
    from creature_battle.sim.core.actions import (
        AddLog,
        ApplyEnergyDecay,
        ApplyOngoingEffects,
        BattleAction,
        ComboBonus,
        DrawCard,
        ExecuteAIAction,
        ExecuteAIActionSequence,
        IncrementTurn,
        RegenerateEnergy,
        SetActivePlayer,
        SetGameState,
        StartBattle,
        UpdateCreature,
    )
    from creature_battle.sim.rules.base import CombatRules

logger = logging.getLogger(__name__)

# Rejections that are expected in normal play and not worth a warning.
_QUIET_REASONS = frozenset({
    RejectionReason.EMPTY_SOURCE,
    RejectionReason.NOT_FOUND,
    RejectionReason.BELOW_THRESHOLD,
})


class BattleReducer:
    """Applies battle actions to battle states.

    Parameters
    ----------
    rules:
        Combat math used to resolve AI action descriptors.  Defaults to
        ``BasicCombatRules``.
    config:
        Balance constants (costs, caps, thresholds).
    """

    def __init__(
        self,
        rules: CombatRules | None = None,
        config: BattleConfig = DEFAULT_CONFIG,
    ) -> None:
        self.rules: CombatRules = rules or BasicCombatRules()
        self.config = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reduce(self, state: BattleState, action: BattleAction) -> TransitionResult:
        """Apply *action* to *state* and return the outcome.

        Raises ``ValueError`` only for an action type with no handler,
        which is a programming error rather than a game rule.
        """
        handler = _DISPATCH.get(action.action_type)
        if handler is None:
            raise ValueError(f"No handler for action type {action.action_type!r}")
        work = state.model_copy(deep=True)
        return handler(self, state, work, action)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reject(
        self,
        state: BattleState,
        reason: RejectionReason,
        detail: str,
    ) -> TransitionResult:
        if reason in _QUIET_REASONS:
            logger.debug("Transition rejected (%s): %s", reason.value, detail)
        else:
            logger.warning("Transition rejected (%s): %s", reason.value, detail)
        return TransitionResult.rejected(state, reason, detail)

    def _check_cost(
        self,
        state: BattleState,
        side: Side,
        what: str,
        cost: int,
    ) -> TransitionResult | None:
        """Return a rejection if *cost* is negative or *side* cannot pay it."""
        if cost < 0:
            return self._reject(
                state, RejectionReason.INVALID_TARGET, f"{what} has a negative cost ({cost})",
            )
        if state.side(side).energy < cost:
            return self._reject(
                state,
                RejectionReason.INSUFFICIENT_RESOURCE,
                f"{side.value} has {state.side(side).energy} energy, {what} needs {cost}",
            )
        return None

    @staticmethod
    def _combo_suffix(work: BattleState, side: Side) -> str:
        streak = work.consecutive_actions.get(side)
        if side is Side.PLAYER and streak > 1:
            return f" Combo x{streak}!"
        return ""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _handle_start_battle(
        self,
        state: BattleState,
        work: BattleState,
        action: StartBattle,
    ) -> TransitionResult:
        roster = [
            *action.player_deck, *action.player_hand,
            *action.enemy_deck, *action.enemy_hand,
        ]
        ids = [c.id for c in roster]
        if len(ids) != len(set(ids)):
            return self._reject(
                state, RejectionReason.DUPLICATE_ENTITY,
                "creature ids must be unique across both rosters",
            )

        def _side(deck, hand, tools, spells) -> SideState:
            return SideState(
                deck=[c.model_copy(deep=True) for c in deck],
                hand=[c.model_copy(deep=True) for c in hand],
                field=[],
                energy=self.config.starting_energy,
                tools=[t.model_copy(deep=True) for t in tools],
                spells=[s.model_copy(deep=True) for s in spells],
            )

        fresh = BattleState(
            game_state=GameStatus.BATTLE,
            turn=1,
            active_player=Side.PLAYER,
            difficulty=action.difficulty,
            player=_side(action.player_deck, action.player_hand,
                         action.player_tools, action.player_spells),
            enemy=_side(action.enemy_deck, action.enemy_hand,
                        action.enemy_tools, action.enemy_spells),
            consecutive_actions=SidePair(),
            energy_momentum=SidePair(),
            battle_log=[LogEntry(
                turn=1,
                message=(
                    f"Battle started! Difficulty: {action.difficulty.capitalize()}"
                    " - Prepare for intense combat!"
                ),
            )],
        )
        return TransitionResult.ok(fresh)

    def _handle_set_game_state(
        self,
        state: BattleState,
        work: BattleState,
        action: SetGameState,
    ) -> TransitionResult:
        work.game_state = action.status
        return TransitionResult.ok(work)

    def _handle_set_active_player(
        self,
        state: BattleState,
        work: BattleState,
        action: SetActivePlayer,
    ) -> TransitionResult:
        work.active_player = action.side
        reset_streaks(work)
        return TransitionResult.ok(work)

    def _handle_increment_turn(
        self,
        state: BattleState,
        work: BattleState,
        action: IncrementTurn,
    ) -> TransitionResult:
        work.turn += 1
        return TransitionResult.ok(work)

    def _handle_add_log(
        self,
        state: BattleState,
        work: BattleState,
        action: AddLog,
    ) -> TransitionResult:
        work.log(action.message)
        return TransitionResult.ok(work)

    # ------------------------------------------------------------------
    # Creature actions
    # ------------------------------------------------------------------

    def _handle_deploy_creature(
        self,
        state: BattleState,
        work: BattleState,
        action: DeployCreature,
    ) -> TransitionResult:
        side = action.side
        side_state = work.side(side)
        # Only the id of the incoming creature is trusted; the hand entry moves.
        stored = side_state.find_in_hand(action.creature.id)
        creature = stored if stored is not None else action.creature
        cost = action.cost if action.cost is not None else creature.battle_stats.energy_cost

        rejection = self._check_cost(state, side, f"deploying {creature.species_name}", cost)
        if rejection is not None:
            return rejection
        if side_state.find_on_field(creature.id) is not None:
            return self._reject(
                state, RejectionReason.DUPLICATE_ENTITY,
                f"{creature.species_name} ({creature.id}) is already deployed",
            )
        if stored is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"{creature.species_name} ({creature.id}) is not in the {side.value} hand",
            )
        if len(side_state.field) >= self.config.max_field_size:
            return self._reject(
                state, RejectionReason.FIELD_FULL,
                f"{side.value} field already holds {len(side_state.field)} creatures",
            )

        move_hand_to_field(side_state, stored)
        spend_energy(work, side, cost, config=self.config)
        record_action(work, side)

        if side is Side.PLAYER:
            work.log(
                f"You deployed {creature.species_name} to the battlefield! "
                f"(-{cost} energy){self._combo_suffix(work, side)}"
            )
        else:
            work.log(f"Enemy deployed {creature.species_name} to the battlefield! (-{cost} energy)")
        return TransitionResult.ok(work)

    def _handle_update_creature(
        self,
        state: BattleState,
        work: BattleState,
        action: UpdateCreature,
    ) -> TransitionResult:
        side_state = work.side(action.side)
        if not replace_on_field(side_state, action.creature.model_copy(deep=True)):
            return self._reject(
                state, RejectionReason.NOT_FOUND,
                f"{action.creature.id} is not on the {action.side.value} field",
            )
        remove_casualties(side_state)
        return TransitionResult.ok(work)

    def _handle_attack(
        self,
        state: BattleState,
        work: BattleState,
        action: Attack,
    ) -> TransitionResult:
        result = action.result
        attacker_side = state.locate_on_field(result.updated_attacker.id)
        defender_side = state.locate_on_field(result.updated_defender.id)
        if attacker_side is None or defender_side is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                "attacker or defender is not on a field",
            )

        cost = action.cost if action.cost is not None else self.config.costs.attack
        rejection = self._check_cost(state, attacker_side, "attacking", cost)
        if rejection is not None:
            return rejection

        replace_on_field(work.side(attacker_side), result.updated_attacker.model_copy(deep=True))
        replace_on_field(work.side(defender_side), result.updated_defender.model_copy(deep=True))
        remove_casualties(work.player)
        remove_casualties(work.enemy)

        spend_energy(work, attacker_side, cost, config=self.config)
        record_action(work, attacker_side)

        if attacker_side is Side.PLAYER:
            work.log(
                f"{result.battle_log} (-{cost} energy)"
                f"{self._combo_suffix(work, attacker_side)}"
            )
        else:
            work.log(f"Enemy: {result.battle_log} (-{cost} energy)")
        return TransitionResult.ok(work)

    def _handle_use_tool(
        self,
        state: BattleState,
        work: BattleState,
        action: UseTool,
    ) -> TransitionResult:
        result = action.result
        if result is None or result.updated_creature is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"tool {action.tool.name} produced no result",
            )
        updated = result.updated_creature
        target_side = state.locate_on_field(updated.id)
        if target_side is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"tool target {updated.id} is not on a field",
            )
        owner = work.side(action.side)
        if owner.find_tool(action.tool.id) is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"{action.side.value} does not own tool {action.tool.name}",
            )

        replace_on_field(work.side(target_side), updated.model_copy(deep=True))
        remove_casualties(work.side(target_side))
        owner.tools = [t for t in owner.tools if t.id != action.tool.id]
        record_action(work, action.side)

        if action.side is Side.PLAYER:
            if target_side is Side.PLAYER:
                description = updated.species_name
            else:
                description = f"enemy {updated.species_name}"
            work.log(f"{action.tool.name} was used on {description}.")
            stat_changes = result.tool_effect.get("stat_changes") or {}
            if stat_changes:
                changes = ", ".join(
                    f"{stat} {'+' if value > 0 else ''}{value}"
                    for stat, value in stat_changes.items()
                )
                work.log(f"Effect: {changes}")
            healed = result.tool_effect.get("health_change") or 0
            if healed > 0:
                work.log(f"Healed for {healed} health.")
        else:
            work.log(f"Enemy used {action.tool.name} on {updated.species_name}!")
        return TransitionResult.ok(work)

    def _handle_use_spell(
        self,
        state: BattleState,
        work: BattleState,
        action: UseSpell,
    ) -> TransitionResult:
        result = action.result
        if result is None or result.updated_caster is None or result.updated_target is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"spell {action.spell.name} produced a malformed result",
            )
        caster = result.updated_caster
        target = result.updated_target
        side = action.caster_side

        cost = action.cost if action.cost is not None else self.config.costs.spell
        rejection = self._check_cost(state, side, f"casting {action.spell.name}", cost)
        if rejection is not None:
            return rejection

        if state.side(side).find_on_field(caster.id) is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"caster {caster.id} is not on the {side.value} field",
            )
        target_side = state.locate_on_field(target.id)
        if target_side is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"spell target {target.id} is not on a field",
            )
        owner = work.side(side)
        if owner.find_spell(action.spell.id) is None:
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"{side.value} does not own spell {action.spell.name}",
            )

        replace_on_field(owner, caster.model_copy(deep=True))
        replace_on_field(work.side(target_side), target.model_copy(deep=True))
        remove_casualties(work.player)
        remove_casualties(work.enemy)

        spend_energy(work, side, cost, config=self.config)
        owner.spells = [s for s in owner.spells if s.id != action.spell.id]
        record_action(work, side)

        if side is Side.PLAYER:
            if target.id == caster.id:
                target_text = "on self"
            elif target_side is Side.PLAYER:
                target_text = f"on {target.species_name}"
            else:
                target_text = f"on enemy {target.species_name}"
            work.log(
                f"{caster.species_name} cast {action.spell.name} {target_text}. (-{cost} energy)"
            )
            damage = result.spell_effect.get("damage") or 0
            healing = result.spell_effect.get("healing") or 0
            if damage:
                work.log(f"The spell dealt {damage} damage!")
            if healing:
                work.log(f"The spell healed for {healing} health!")
        else:
            target_name = "themselves" if target.id == caster.id else target.species_name
            work.log(
                f"Enemy {caster.species_name} cast {action.spell.name} on {target_name}! "
                f"(-{cost} energy)"
            )
        return TransitionResult.ok(work)

    def _handle_defend(
        self,
        state: BattleState,
        work: BattleState,
        action: Defend,
    ) -> TransitionResult:
        side = action.side
        cost = action.cost if action.cost is not None else self.config.costs.defend
        side_state = work.side(side)

        rejection = self._check_cost(state, side, "defending", cost)
        if rejection is not None:
            return rejection
        if not replace_on_field(side_state, action.creature.model_copy(deep=True)):
            return self._reject(
                state, RejectionReason.INVALID_TARGET,
                f"defender {action.creature.id} is not on the {side.value} field",
            )
        remove_casualties(side_state)

        # Defending costs energy but does not build momentum.
        spend_energy(work, side, cost, momentum=False, config=self.config)
        record_action(work, side)

        prefix = "" if side is Side.PLAYER else "Enemy "
        work.log(f"{prefix}{action.creature.species_name} took a defensive stance! (-{cost} energy)")
        return TransitionResult.ok(work)

    def _handle_draw_card(
        self,
        state: BattleState,
        work: BattleState,
        action: DrawCard,
    ) -> TransitionResult:
        drawn = draw_from_deck(work.side(action.side))
        if drawn is None:
            return self._reject(
                state, RejectionReason.EMPTY_SOURCE,
                f"{action.side.value} deck is empty",
            )
        if action.side is Side.PLAYER:
            work.log(f"You drew {drawn.species_name}.")
        else:
            work.log("Enemy drew a card.")
        return TransitionResult.ok(work)

    # ------------------------------------------------------------------
    # Energy, combo, effects
    # ------------------------------------------------------------------

    def _handle_regenerate_energy(
        self,
        state: BattleState,
        work: BattleState,
        action: RegenerateEnergy,
    ) -> TransitionResult:
        gained = regenerate(work, action.player_regen, action.enemy_regen, self.config)
        if work.active_player is Side.PLAYER:
            work.log(f"You gained +{gained[Side.PLAYER]} energy.")
        else:
            work.log(f"Enemy gained +{gained[Side.ENEMY]} energy.")
        return TransitionResult.ok(work)

    def _handle_apply_energy_decay(
        self,
        state: BattleState,
        work: BattleState,
        action: ApplyEnergyDecay,
    ) -> TransitionResult:
        lost = apply_decay(work, self.config)
        logger.debug(
            "Energy decay: player -%d, enemy -%d", lost[Side.PLAYER], lost[Side.ENEMY],
        )
        return TransitionResult.ok(work)

    def _handle_combo_bonus(
        self,
        state: BattleState,
        work: BattleState,
        action: ComboBonus,
    ) -> TransitionResult:
        side = action.side
        if not combo_ready(work, side, self.config):
            return self._reject(
                state, RejectionReason.BELOW_THRESHOLD,
                f"{side.value} streak {work.consecutive_actions.get(side)} "
                f"is below {self.config.combo_threshold}",
            )
        apply_combo_bonus(work, side, self.config)
        if side is Side.PLAYER:
            work.log(
                "You achieved a combo bonus! All creatures gain "
                f"+{self.config.combo_attack_bonus} attack!"
            )
        else:
            work.log("Enemy achieved a combo bonus!")
        return TransitionResult.ok(work)

    def _handle_apply_ongoing_effects(
        self,
        state: BattleState,
        work: BattleState,
        action: ApplyOngoingEffects,
    ) -> TransitionResult:
        for line in apply_ongoing_effects(work):
            work.log(line)
        return TransitionResult.ok(work)

    # ------------------------------------------------------------------
    # AI actions
    # ------------------------------------------------------------------

    def _handle_execute_ai_action(
        self,
        state: BattleState,
        work: BattleState,
        action: ExecuteAIAction,
    ) -> TransitionResult:
        return self.run_ai_step(state, action.descriptor, action.side)

    def _handle_execute_ai_action_sequence(
        self,
        state: BattleState,
        work: BattleState,
        action: ExecuteAIActionSequence,
    ) -> TransitionResult:
        current = state
        accepted = 0
        skipped = 0
        last: TransitionResult | None = None
        for descriptor in action.descriptors:
            last = self.run_ai_step(current, descriptor, action.side)
            if last.accepted:
                current = last.state
                accepted += 1
            else:
                skipped += 1
                logger.debug(
                    "Skipping AI step %s: %s", descriptor.type.value, last.detail,
                )

        if accepted == 0:
            reason = last.reason if last is not None else RejectionReason.INVALID_TARGET
            detail = last.detail if last is not None else "empty action sequence"
            return TransitionResult(
                state=state, accepted=False, reason=reason,
                detail=detail, skipped_steps=skipped,
            )
        return TransitionResult.ok(current, skipped_steps=skipped)

    def run_ai_step(
        self,
        state: BattleState,
        descriptor: AIActionDescriptor,
        side: Side = Side.ENEMY,
    ) -> TransitionResult:
        """Resolve one AI descriptor against *state* and apply it.

        Creatures named by the descriptor are looked up by id in the
        current state, so a descriptor built from a stale snapshot acts on
        the live creatures or is rejected if they are gone.
        """
        kind = descriptor.type
        own = state.side(side)
        opponent = state.side(side.opponent)

        if kind is AIActionKind.END_TURN:
            return self._reject(state, RejectionReason.INVALID_TARGET,
                                "end turn is not an executable step")

        if kind is AIActionKind.DEPLOY:
            if descriptor.creature is None:
                return self._reject(state, RejectionReason.INVALID_TARGET, "no creature to deploy")
            creature = own.find_in_hand(descriptor.creature.id) or descriptor.creature
            return self.reduce(state, DeployCreature(
                side=side, creature=creature, cost=descriptor.energy_cost,
            ))

        if kind is AIActionKind.ATTACK:
            if descriptor.attacker is None or descriptor.target is None:
                return self._reject(state, RejectionReason.INVALID_TARGET,
                                    "missing attacker or target")
            attacker = own.find_on_field(descriptor.attacker.id)
            target = opponent.find_on_field(descriptor.target.id)
            if attacker is None or target is None:
                return self._reject(state, RejectionReason.INVALID_TARGET,
                                    "attacker or target is no longer on the field")
            cost = descriptor.energy_cost
            if cost is None:
                cost = self.config.costs.attack
            rejection = self._check_cost(state, side, "attacking", cost)
            if rejection is not None:
                return rejection
            result = self.rules.process_attack(attacker, target)
            return self.reduce(state, Attack(result=result, cost=cost))

        if kind is AIActionKind.DEFEND:
            if descriptor.creature is None:
                return self._reject(state, RejectionReason.INVALID_TARGET, "no creature to defend")
            creature = own.find_on_field(descriptor.creature.id)
            if creature is None:
                return self._reject(state, RejectionReason.INVALID_TARGET,
                                    "defender is no longer on the field")
            cost = descriptor.energy_cost
            if cost is None:
                cost = self.config.costs.defend
            rejection = self._check_cost(state, side, "defending", cost)
            if rejection is not None:
                return rejection
            updated = self.rules.defend_creature(creature, state.difficulty)
            return self.reduce(state, Defend(creature=updated, side=side, cost=cost))

        if kind is AIActionKind.USE_TOOL:
            if descriptor.tool is None or descriptor.target is None:
                return self._reject(state, RejectionReason.INVALID_TARGET, "missing tool or target")
            tool = own.find_tool(descriptor.tool.id)
            target_side = state.locate_on_field(descriptor.target.id)
            if tool is None or target_side is None:
                return self._reject(state, RejectionReason.INVALID_TARGET,
                                    "tool or target is no longer available")
            target = state.side(target_side).find_on_field(descriptor.target.id)
            result = self.rules.apply_tool(target, tool, state.difficulty)
            return self.reduce(state, UseTool(result=result, tool=tool, side=side))

        if kind is AIActionKind.USE_SPELL:
            if descriptor.spell is None or descriptor.caster is None or descriptor.target is None:
                return self._reject(state, RejectionReason.INVALID_TARGET,
                                    "missing spell, caster or target")
            spell = own.find_spell(descriptor.spell.id)
            caster = own.find_on_field(descriptor.caster.id)
            target_side = state.locate_on_field(descriptor.target.id)
            if spell is None or caster is None or target_side is None:
                return self._reject(state, RejectionReason.INVALID_TARGET,
                                    "spell, caster or target is no longer available")
            cost = descriptor.energy_cost
            if cost is None:
                cost = self.config.costs.spell
            rejection = self._check_cost(state, side, f"casting {spell.name}", cost)
            if rejection is not None:
                return rejection
            target = state.side(target_side).find_on_field(descriptor.target.id)
            result = self.rules.apply_spell(caster, target, spell, state.difficulty)
            return self.reduce(state, UseSpell(
                result=result, spell=spell, caster_side=side, cost=cost,
            ))

        raise ValueError(f"Unknown AI action kind {kind!r}")


_Handler = Callable[[BattleReducer, BattleState, BattleState, "BattleAction"], TransitionResult]

_DISPATCH: dict[BattleActionType, _Handler] = {
    BattleActionType.START_BATTLE: BattleReducer._handle_start_battle,
    BattleActionType.DEPLOY_CREATURE: BattleReducer._handle_deploy_creature,
    BattleActionType.UPDATE_CREATURE: BattleReducer._handle_update_creature,
    BattleActionType.ATTACK: BattleReducer._handle_attack,
    BattleActionType.USE_TOOL: BattleReducer._handle_use_tool,
    BattleActionType.USE_SPELL: BattleReducer._handle_use_spell,
    BattleActionType.DEFEND: BattleReducer._handle_defend,
    BattleActionType.DRAW_CARD: BattleReducer._handle_draw_card,
    BattleActionType.REGENERATE_ENERGY: BattleReducer._handle_regenerate_energy,
    BattleActionType.APPLY_ENERGY_DECAY: BattleReducer._handle_apply_energy_decay,
    BattleActionType.SET_ACTIVE_PLAYER: BattleReducer._handle_set_active_player,
    BattleActionType.INCREMENT_TURN: BattleReducer._handle_increment_turn,
    BattleActionType.SET_GAME_STATE: BattleReducer._handle_set_game_state,
    BattleActionType.APPLY_ONGOING_EFFECTS: BattleReducer._handle_apply_ongoing_effects,
    BattleActionType.ADD_LOG: BattleReducer._handle_add_log,
    BattleActionType.EXECUTE_AI_ACTION: BattleReducer._handle_execute_ai_action,
    BattleActionType.EXECUTE_AI_ACTION_SEQUENCE: BattleReducer._handle_execute_ai_action_sequence,
    BattleActionType.COMBO_BONUS: BattleReducer._handle_combo_bonus,
}

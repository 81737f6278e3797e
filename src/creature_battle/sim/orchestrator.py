"""Turn orchestrator -- validates player intents and drives the enemy turn.

The orchestrator is the only caller of the store.  It:

- rejects player intents outright while an action or phase is in flight,
  while the enemy is active, or outside a battle;
- pre-validates accepted intents, producing the same user-facing battle
  log messages the game shows, then asks the combat rules for results
  and dispatches the matching reducer action;
- runs the end-of-turn phases and the AI turn as a chain of scheduled
  continuations, each stamped with a ``ContinuationToken`` so that a
  restarted or finished battle silently drops them;
- re-evaluates victory/defeat a short settle delay after each accepted
  transition (debounced: only the latest scheduled check runs).

Phase flow::

    PLAYER_IDLE -> PLAYER_ACTION_IN_FLIGHT -> PLAYER_IDLE ...
    PLAYER_IDLE -> END_TURN_REQUESTED -> EFFECTS_AND_DECAY
        -> ENEMY_TURN_SCHEDULED -> AI_DECIDING -> AI_ACTION_IN_FLIGHT
        -> (AI_DECIDING ...) -> ENEMY_END_TURN -> PLAYER_IDLE
    any -> FINISHED
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from pydantic import BaseModel

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.content.difficulty import DifficultyRegistry
from creature_battle.sim.core.actions import (
    AddLog,
    ApplyEnergyDecay,
    ApplyOngoingEffects,
    Attack,
    ComboBonus,
    Defend,
    DeployCreature,
    DrawCard,
    ExecuteAIAction,
    IncrementTurn,
    RegenerateEnergy,
    SetActivePlayer,
    SetGameState,
    UseSpell,
    UseTool,
)
from creature_battle.sim.core.entities import Creature, Side, SpellItem, ToolItem
from creature_battle.sim.core.rng import BattleRNG
from creature_battle.sim.mechanics.combo import combo_ready
from creature_battle.sim.mechanics.energy import compute_regen, should_decay
from creature_battle.sim.outcome import evaluate_outcome, outcome_message
from creature_battle.sim.session import BattleSession
from creature_battle.sim.store import BattleStore

if TYPE_CHECKING:
    from creature_battle.sim.ai_policies.base import AIPolicy
    from creature_battle.sim.core.actions import AIActionDescriptor, BattleAction, StartBattle
    from creature_battle.sim.core.game_state import BattleState
    from creature_battle.sim.core.results import TransitionResult
    from creature_battle.sim.core.scheduler import Scheduler
    from creature_battle.sim.rules.base import CombatRules
    from creature_battle.sim.session import ContinuationToken

logger = logging.getLogger(__name__)

_DEFAULT_MULTI_ACTION_CHANCE = 0.3


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------

class IntentType(str, Enum):
    DEPLOY = "deploy"
    ATTACK = "attack"
    USE_TOOL = "useTool"
    USE_SPELL = "useSpell"
    DEFEND = "defend"
    END_TURN = "endTurn"


class PlayerIntent(BaseModel):
    """What the player asked for.

    ``source_creature`` is the acting creature (the one deployed,
    attacking, defending, casting, or receiving a tool) and
    ``target_creature`` the creature acted upon.
    """

    type: IntentType
    target_creature: Creature | None = None
    source_creature: Creature | None = None
    tool: ToolItem | None = None
    spell: SpellItem | None = None


class IntentRejection(str, Enum):
    BUSY = "busy"
    NOT_PLAYER_TURN = "not_player_turn"
    NOT_IN_BATTLE = "not_in_battle"
    INVALID = "invalid"
    """Failed pre-validation or was refused by the reducer."""


@dataclass(frozen=True)
class IntentOutcome:
    accepted: bool
    rejection: IntentRejection | None = None
    message: str = ""
    transition: TransitionResult | None = None


class TurnPhase(str, Enum):
    PLAYER_IDLE = "player_idle"
    PLAYER_ACTION_IN_FLIGHT = "player_action_in_flight"
    END_TURN_REQUESTED = "end_turn_requested"
    EFFECTS_AND_DECAY = "effects_and_decay"
    ENEMY_TURN_SCHEDULED = "enemy_turn_scheduled"
    AI_DECIDING = "ai_deciding"
    AI_ACTION_IN_FLIGHT = "ai_action_in_flight"
    ENEMY_END_TURN = "enemy_end_turn"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# BattleOrchestrator
# ---------------------------------------------------------------------------

class BattleOrchestrator:
    """Drives one battle at a time on top of a ``BattleStore``.

    Parameters
    ----------
    policy:
        Decides the enemy's actions.
    scheduler:
        Runs deferred continuations.
    rules:
        Combat rules; defaults to ``BasicCombatRules``.
    registry:
        Difficulty tiers (multi-action chance, enemy regen, enemy hand).
    rng:
        Seeded source for the AI multi-action continuation roll.
    config:
        Balance constants and delays.
    """

    def __init__(
        self,
        policy: AIPolicy,
        scheduler: Scheduler,
        rules: CombatRules | None = None,
        registry: DifficultyRegistry | None = None,
        rng: BattleRNG | None = None,
        config: BattleConfig = DEFAULT_CONFIG,
    ) -> None:
        self.policy = policy
        self.scheduler = scheduler
        self.registry = registry or DifficultyRegistry()
        self.rng = rng or BattleRNG(seed=0)
        self.config = config

        self.store = BattleStore(rules, config)
        self.rules = self.store.reducer.rules
        self.store.subscribe(self._on_transition)

        self.session = BattleSession()
        self.phase = TurnPhase.PLAYER_IDLE
        self.action_in_progress = False

        self.max_player_combo = 0
        self._ai_actions_this_turn = 0
        self._outcome_serial = 0

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> BattleState:
        return self.store.state

    @property
    def is_idle(self) -> bool:
        """True when a player intent would be accepted right now."""
        state = self.state
        return (
            state.is_in_battle
            and not self.action_in_progress
            and state.active_player is Side.PLAYER
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_battle(self, start: StartBattle) -> TransitionResult:
        """Begin a new battle, dropping any continuation from a previous one."""
        self.session.invalidate()
        self.action_in_progress = False
        self.max_player_combo = 0
        self._ai_actions_this_turn = 0

        result = self.store.dispatch(start)
        if not result.accepted:
            return result

        self.phase = TurnPhase.PLAYER_IDLE
        state = self.state
        items = len(state.enemy.tools) + len(state.enemy.spells)
        self._dispatch(AddLog(message=f"Your turn. The enemy has {items} special items!"))
        logger.debug("Battle %s started on %s", self.session.session_id, state.difficulty)
        return result

    def reset(self) -> None:
        """Leave the battle and return to setup.

        Every outstanding continuation becomes stale and will do nothing.
        """
        self.session.invalidate()
        self.store.reset()
        self.action_in_progress = False
        self.phase = TurnPhase.PLAYER_IDLE
        logger.debug("Orchestrator reset")

    # ------------------------------------------------------------------
    # Player intents
    # ------------------------------------------------------------------

    def dispatch_intent(self, intent: PlayerIntent) -> IntentOutcome:
        """Validate and apply one player intent."""
        state = self.state
        if not state.is_in_battle:
            return IntentOutcome(False, IntentRejection.NOT_IN_BATTLE, "Not in battle.")
        if self.action_in_progress:
            return IntentOutcome(False, IntentRejection.BUSY, "Action in progress.")
        if state.active_player is not Side.PLAYER:
            return IntentOutcome(False, IntentRejection.NOT_PLAYER_TURN, "Not your turn.")

        handler = _INTENT_HANDLERS.get(intent.type)
        if handler is None:
            return self._refuse("Invalid action")
        return handler(self, intent)

    def _refuse(self, message: str) -> IntentOutcome:
        self._dispatch(AddLog(message=message))
        return IntentOutcome(False, IntentRejection.INVALID, message)

    def _complete(self, result: TransitionResult) -> IntentOutcome:
        if not result.accepted:
            return IntentOutcome(
                False, IntentRejection.INVALID, result.detail, transition=result,
            )
        self.action_in_progress = True
        self.phase = TurnPhase.PLAYER_ACTION_IN_FLIGHT
        self._schedule(self.config.timing.player_action_cooldown, self._release_player_action)
        return IntentOutcome(True, transition=result)

    def _release_player_action(self) -> None:
        if self.phase is TurnPhase.PLAYER_ACTION_IN_FLIGHT:
            self.action_in_progress = False
            self.phase = TurnPhase.PLAYER_IDLE

    def _intent_deploy(self, intent: PlayerIntent) -> IntentOutcome:
        state = self.state
        if intent.source_creature is None:
            return self._refuse("Invalid action")
        creature = state.player.find_in_hand(intent.source_creature.id)
        if creature is None:
            return self._refuse("Invalid action")
        if len(state.player.field) >= self.config.max_field_size:
            return self._refuse("Your battlefield is full! Cannot deploy more creatures.")
        cost = creature.battle_stats.energy_cost
        if state.player.energy < cost:
            return self._refuse(
                f"Not enough energy to deploy {creature.species_name}. Needs {cost} energy."
            )
        return self._complete(self.store.dispatch(
            DeployCreature(side=Side.PLAYER, creature=creature, cost=cost)
        ))

    def _intent_attack(self, intent: PlayerIntent) -> IntentOutcome:
        state = self.state
        cost = self.config.costs.attack
        if state.player.energy < cost:
            return self._refuse(f"Not enough energy to attack. Needs {cost} energy.")
        attacker = defender = None
        if intent.source_creature is not None:
            attacker = state.player.find_on_field(intent.source_creature.id)
        if intent.target_creature is not None:
            defender = state.enemy.find_on_field(intent.target_creature.id)
        if attacker is None or defender is None:
            return self._refuse("Invalid attack - missing attacker or defender")

        result = self.rules.process_attack(attacker, defender, attacker.preferred_attack_type)
        return self._complete(self.store.dispatch(Attack(result=result, cost=cost)))

    def _intent_use_tool(self, intent: PlayerIntent) -> IntentOutcome:
        state = self.state
        target = None
        if intent.source_creature is not None:
            side = state.locate_on_field(intent.source_creature.id)
            if side is not None:
                target = state.side(side).find_on_field(intent.source_creature.id)
        tool = state.player.find_tool(intent.tool.id) if intent.tool is not None else None
        if tool is None or target is None:
            return self._refuse("Invalid tool use - missing tool or target")

        result = self.rules.apply_tool(target, tool, state.difficulty)
        if result is None:
            return self._refuse(f"Failed to use {tool.name}.")
        return self._complete(self.store.dispatch(
            UseTool(result=result, tool=tool, side=Side.PLAYER)
        ))

    def _intent_use_spell(self, intent: PlayerIntent) -> IntentOutcome:
        state = self.state
        caster = None
        if intent.source_creature is not None:
            caster = state.player.find_on_field(intent.source_creature.id)
        spell = state.player.find_spell(intent.spell.id) if intent.spell is not None else None
        if spell is None or caster is None:
            return self._refuse("Invalid spell cast - missing spell or caster")

        cost = self.config.costs.spell
        if state.player.energy < cost:
            return self._refuse(f"Not enough energy to cast {spell.name}. Needs {cost} energy.")

        target = caster
        if intent.target_creature is not None:
            side = state.locate_on_field(intent.target_creature.id)
            if side is None:
                return self._refuse("Invalid spell cast - missing spell or caster")
            target = state.side(side).find_on_field(intent.target_creature.id)

        result = self.rules.apply_spell(caster, target, spell, state.difficulty)
        if result is None:
            return self._refuse(f"Failed to cast {spell.name}.")
        return self._complete(self.store.dispatch(
            UseSpell(result=result, spell=spell, caster_side=Side.PLAYER, cost=cost)
        ))

    def _intent_defend(self, intent: PlayerIntent) -> IntentOutcome:
        state = self.state
        cost = self.config.costs.defend
        if state.player.energy < cost:
            return self._refuse(f"Not enough energy to defend. Needs {cost} energy.")
        creature = None
        if intent.source_creature is not None:
            creature = state.player.find_on_field(intent.source_creature.id)
        if creature is None:
            return self._refuse("Invalid defend action - no creature selected")

        updated = self.rules.defend_creature(creature, state.difficulty)
        return self._complete(self.store.dispatch(
            Defend(creature=updated, side=Side.PLAYER, cost=cost)
        ))

    def _intent_end_turn(self, intent: PlayerIntent) -> IntentOutcome:
        self.action_in_progress = True
        self.phase = TurnPhase.END_TURN_REQUESTED

        if combo_ready(self.state, Side.PLAYER, self.config):
            self._dispatch(ComboBonus(side=Side.PLAYER))

        self.phase = TurnPhase.EFFECTS_AND_DECAY
        self._dispatch(ApplyOngoingEffects())
        if should_decay(self.state, self.config):
            self._dispatch(ApplyEnergyDecay())

        self._dispatch(SetActivePlayer(side=Side.ENEMY))
        self._dispatch(AddLog(message=f"Turn {self.state.turn} - Enemy's turn."))

        self.phase = TurnPhase.ENEMY_TURN_SCHEDULED
        self._schedule(self.config.timing.enemy_turn_delay, self._process_enemy_turn)
        return IntentOutcome(True)

    # ------------------------------------------------------------------
    # Enemy turn
    # ------------------------------------------------------------------

    def _process_enemy_turn(self) -> None:
        self._schedule(self.config.timing.enemy_turn_delay, self._begin_ai_turn)

    def _begin_ai_turn(self) -> None:
        self._ai_actions_this_turn = 0
        self._ai_decide()

    def _ai_decide(self) -> None:
        self.phase = TurnPhase.AI_DECIDING
        state = self.state
        enemy = state.enemy
        decision = self.policy.determine_action(
            state.difficulty,
            list(enemy.hand),
            list(enemy.field),
            list(state.player.field),
            list(enemy.tools),
            list(enemy.spells),
            enemy.energy,
        )

        if isinstance(decision, list):
            if decision:
                logger.debug("AI executing %d actions", len(decision))
                self._run_sequence(decision, 0)
                return
            decision = None

        if decision is None or decision.is_end_turn:
            self._dispatch(AddLog(message="Enemy ended their turn."))
            self._schedule(self.config.timing.ai_end_turn_delay, self._finish_enemy_turn)
            return

        self.phase = TurnPhase.AI_ACTION_IN_FLIGHT
        self._execute_ai_step(decision)
        self._schedule(self.config.timing.ai_continuation_delay, self._after_single_action)

    def _run_sequence(self, descriptors: list[AIActionDescriptor], index: int) -> None:
        if index >= len(descriptors):
            self._schedule(self.config.timing.ai_end_turn_delay, self._finish_enemy_turn)
            return
        self.phase = TurnPhase.AI_ACTION_IN_FLIGHT
        self._execute_ai_step(descriptors[index])
        self._schedule(
            self.config.timing.ai_step_delay,
            lambda: self._run_sequence(descriptors, index + 1),
        )

    def _execute_ai_step(self, descriptor: AIActionDescriptor) -> None:
        if descriptor.is_end_turn:
            self._dispatch(AddLog(message="Enemy ended their turn."))
            return
        self._ai_actions_this_turn += 1
        result = self.store.dispatch(ExecuteAIAction(descriptor=descriptor, side=Side.ENEMY))
        if not result.accepted:
            logger.debug("Enemy %s skipped: %s", descriptor.type.value, result.detail)

    def _after_single_action(self) -> None:
        settings = self.registry.get_settings(self.state.difficulty)
        chance = settings.multi_action_chance or _DEFAULT_MULTI_ACTION_CHANCE
        acts_again = self.rng.chance(chance)
        if (
            acts_again
            and self.state.enemy.energy >= self.config.min_energy_for_continuation
            and self._ai_actions_this_turn < self.config.max_ai_actions_per_turn
        ):
            logger.debug("AI performing another action")
            self._ai_decide()
        else:
            self._finish_enemy_turn()

    def _finish_enemy_turn(self) -> None:
        self.phase = TurnPhase.ENEMY_END_TURN
        settings = self.registry.get_settings(self.state.difficulty)

        self._dispatch(ApplyOngoingEffects())
        if should_decay(self.state, self.config):
            self._dispatch(ApplyEnergyDecay())

        state = self.state
        if len(state.player.hand) < self.config.max_hand_size and state.player.deck:
            self._dispatch(DrawCard(side=Side.PLAYER))
        state = self.state
        if len(state.enemy.hand) < settings.initial_hand_size + 1 and state.enemy.deck:
            self._dispatch(DrawCard(side=Side.ENEMY))

        player_regen, enemy_regen = compute_regen(
            self.state, settings.enemy_energy_regen, self.config,
        )
        self._dispatch(RegenerateEnergy(player_regen=player_regen, enemy_regen=enemy_regen))

        if combo_ready(self.state, Side.ENEMY, self.config):
            self._dispatch(ComboBonus(side=Side.ENEMY))

        self._dispatch(IncrementTurn())
        self._dispatch(SetActivePlayer(side=Side.PLAYER))
        self._dispatch(AddLog(message=f"Turn {self.state.turn} - Your turn."))

        self.action_in_progress = False
        self.phase = TurnPhase.PLAYER_IDLE
        logger.debug("Enemy turn complete, turn %d", self.state.turn)

    # ------------------------------------------------------------------
    # Outcome check
    # ------------------------------------------------------------------

    def _on_transition(self, state: BattleState, action: BattleAction) -> None:
        self.max_player_combo = max(self.max_player_combo, state.consecutive_actions.player)
        if not state.is_in_battle:
            return
        self._outcome_serial += 1
        serial = self._outcome_serial
        token = self.session.token()
        self.scheduler.call_later(
            self.config.timing.settle_delay,
            lambda: self._check_outcome(token, serial),
        )

    def _check_outcome(self, token: ContinuationToken, serial: int) -> None:
        if serial != self._outcome_serial or not self.session.is_current(token):
            return
        status = evaluate_outcome(self.state)
        if status is None:
            return
        self.store.dispatch(SetGameState(status=status))
        self.store.dispatch(AddLog(message=outcome_message(status)))
        self.action_in_progress = False
        self.phase = TurnPhase.FINISHED
        self.session.invalidate()
        logger.debug("Battle %s ended: %s", self.session.session_id, status.value)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _dispatch(self, action: BattleAction) -> TransitionResult:
        return self.store.dispatch(action)

    def _schedule(self, delay: float, step: Callable[[], None]) -> None:
        """Run *step* after *delay* unless the battle has moved on by then."""
        token = self.session.token()

        def _continuation() -> None:
            if not self.session.is_current(token):
                logger.debug("Dropping stale continuation %s", getattr(step, "__name__", step))
                return
            if not self.state.is_in_battle:
                self.action_in_progress = False
                return
            step()

        self.scheduler.call_later(delay, _continuation)


_INTENT_HANDLERS: dict[IntentType, Callable[[BattleOrchestrator, PlayerIntent], IntentOutcome]] = {
    IntentType.DEPLOY: BattleOrchestrator._intent_deploy,
    IntentType.ATTACK: BattleOrchestrator._intent_attack,
    IntentType.USE_TOOL: BattleOrchestrator._intent_use_tool,
    IntentType.USE_SPELL: BattleOrchestrator._intent_use_spell,
    IntentType.DEFEND: BattleOrchestrator._intent_defend,
    IntentType.END_TURN: BattleOrchestrator._intent_end_turn,
}

"""Battle actions, AI action descriptors and collaborator results.

Every transition the store accepts is one of the action models below.
They are plain Pydantic models tagged by ``action_type`` so a whole
action log can be serialized and replayed.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from creature_battle.sim.core.entities import Creature, Side, SpellItem, ToolItem
from creature_battle.sim.core.game_state import GameStatus


class BattleActionType(str, Enum):
    """Every transition kind understood by the reducer."""

    START_BATTLE = "start_battle"
    DEPLOY_CREATURE = "deploy_creature"
    UPDATE_CREATURE = "update_creature"
    ATTACK = "attack"
    USE_TOOL = "use_tool"
    USE_SPELL = "use_spell"
    DEFEND = "defend"
    DRAW_CARD = "draw_card"
    REGENERATE_ENERGY = "regenerate_energy"
    APPLY_ENERGY_DECAY = "apply_energy_decay"
    SET_ACTIVE_PLAYER = "set_active_player"
    INCREMENT_TURN = "increment_turn"
    SET_GAME_STATE = "set_game_state"
    APPLY_ONGOING_EFFECTS = "apply_ongoing_effects"
    ADD_LOG = "add_log"
    EXECUTE_AI_ACTION = "execute_ai_action"
    EXECUTE_AI_ACTION_SEQUENCE = "execute_ai_action_sequence"
    COMBO_BONUS = "combo_bonus"


# ---------------------------------------------------------------------------
# Collaborator results
# ---------------------------------------------------------------------------

class AttackResult(BaseModel):
    """Outcome of ``CombatRules.process_attack``."""

    updated_attacker: Creature
    updated_defender: Creature
    battle_log: str = ""


class ToolResult(BaseModel):
    """Outcome of ``CombatRules.apply_tool``."""

    updated_creature: Creature | None = None
    tool_effect: dict[str, Any] = Field(default_factory=dict)


class SpellResult(BaseModel):
    """Outcome of ``CombatRules.apply_spell``."""

    updated_caster: Creature | None = None
    updated_target: Creature | None = None
    spell_effect: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# AI action descriptors
# ---------------------------------------------------------------------------

class AIActionKind(str, Enum):
    """Action kinds an AI policy may request."""

    DEPLOY = "deploy"
    ATTACK = "attack"
    DEFEND = "defend"
    USE_TOOL = "useTool"
    USE_SPELL = "useSpell"
    END_TURN = "endTurn"


class AIActionDescriptor(BaseModel):
    """A single step requested by an AI policy.

    Creatures are carried as snapshots; the reducer resolves them by ``id``
    against the state at execution time.  ``energy_cost`` of ``None``
    means "use the default cost for this kind".
    """

    type: AIActionKind
    creature: Creature | None = None
    attacker: Creature | None = None
    target: Creature | None = None
    caster: Creature | None = None
    tool: ToolItem | None = None
    spell: SpellItem | None = None
    energy_cost: int | None = None

    @property
    def is_end_turn(self) -> bool:
        return self.type is AIActionKind.END_TURN


END_TURN = AIActionDescriptor(type=AIActionKind.END_TURN)
"""Sentinel a policy returns to end its turn immediately."""


# ---------------------------------------------------------------------------
# Reducer actions
# ---------------------------------------------------------------------------

class StartBattle(BaseModel):
    action_type: Literal[BattleActionType.START_BATTLE] = BattleActionType.START_BATTLE
    difficulty: str
    player_deck: list[Creature] = Field(default_factory=list)
    player_hand: list[Creature] = Field(default_factory=list)
    player_tools: list[ToolItem] = Field(default_factory=list)
    player_spells: list[SpellItem] = Field(default_factory=list)
    enemy_deck: list[Creature] = Field(default_factory=list)
    enemy_hand: list[Creature] = Field(default_factory=list)
    enemy_tools: list[ToolItem] = Field(default_factory=list)
    enemy_spells: list[SpellItem] = Field(default_factory=list)


class DeployCreature(BaseModel):
    action_type: Literal[BattleActionType.DEPLOY_CREATURE] = BattleActionType.DEPLOY_CREATURE
    side: Side
    creature: Creature
    cost: int | None = None
    """Defaults to the creature's ``battle_stats.energy_cost``."""


class UpdateCreature(BaseModel):
    action_type: Literal[BattleActionType.UPDATE_CREATURE] = BattleActionType.UPDATE_CREATURE
    side: Side
    creature: Creature


class Attack(BaseModel):
    action_type: Literal[BattleActionType.ATTACK] = BattleActionType.ATTACK
    result: AttackResult
    cost: int | None = None


class UseTool(BaseModel):
    action_type: Literal[BattleActionType.USE_TOOL] = BattleActionType.USE_TOOL
    result: ToolResult | None
    tool: ToolItem
    side: Side


class UseSpell(BaseModel):
    action_type: Literal[BattleActionType.USE_SPELL] = BattleActionType.USE_SPELL
    result: SpellResult | None
    spell: SpellItem
    caster_side: Side
    cost: int | None = None


class Defend(BaseModel):
    action_type: Literal[BattleActionType.DEFEND] = BattleActionType.DEFEND
    creature: Creature
    side: Side
    cost: int | None = None


class DrawCard(BaseModel):
    action_type: Literal[BattleActionType.DRAW_CARD] = BattleActionType.DRAW_CARD
    side: Side


class RegenerateEnergy(BaseModel):
    action_type: Literal[BattleActionType.REGENERATE_ENERGY] = BattleActionType.REGENERATE_ENERGY
    player_regen: int
    enemy_regen: int


class ApplyEnergyDecay(BaseModel):
    action_type: Literal[BattleActionType.APPLY_ENERGY_DECAY] = BattleActionType.APPLY_ENERGY_DECAY


class SetActivePlayer(BaseModel):
    action_type: Literal[BattleActionType.SET_ACTIVE_PLAYER] = BattleActionType.SET_ACTIVE_PLAYER
    side: Side


class IncrementTurn(BaseModel):
    action_type: Literal[BattleActionType.INCREMENT_TURN] = BattleActionType.INCREMENT_TURN


class SetGameState(BaseModel):
    action_type: Literal[BattleActionType.SET_GAME_STATE] = BattleActionType.SET_GAME_STATE
    status: GameStatus


class ApplyOngoingEffects(BaseModel):
    action_type: Literal[BattleActionType.APPLY_ONGOING_EFFECTS] = BattleActionType.APPLY_ONGOING_EFFECTS


class AddLog(BaseModel):
    action_type: Literal[BattleActionType.ADD_LOG] = BattleActionType.ADD_LOG
    message: str


class ExecuteAIAction(BaseModel):
    action_type: Literal[BattleActionType.EXECUTE_AI_ACTION] = BattleActionType.EXECUTE_AI_ACTION
    descriptor: AIActionDescriptor
    side: Side = Side.ENEMY


class ExecuteAIActionSequence(BaseModel):
    action_type: Literal[BattleActionType.EXECUTE_AI_ACTION_SEQUENCE] = (
        BattleActionType.EXECUTE_AI_ACTION_SEQUENCE
    )
    descriptors: list[AIActionDescriptor]
    side: Side = Side.ENEMY


class ComboBonus(BaseModel):
    action_type: Literal[BattleActionType.COMBO_BONUS] = BattleActionType.COMBO_BONUS
    side: Side


BattleAction = Annotated[
    Union[
        StartBattle,
        DeployCreature,
        UpdateCreature,
        Attack,
        UseTool,
        UseSpell,
        Defend,
        DrawCard,
        RegenerateEnergy,
        ApplyEnergyDecay,
        SetActivePlayer,
        IncrementTurn,
        SetGameState,
        ApplyOngoingEffects,
        AddLog,
        ExecuteAIAction,
        ExecuteAIActionSequence,
        ComboBonus,
    ],
    Field(discriminator="action_type"),
]

"""Tests for BattleStore and BattleSession."""

from creature_battle.sim.core.actions import AddLog, DrawCard, IncrementTurn
from creature_battle.sim.core.entities import Side
from creature_battle.sim.core.game_state import BattleState, GameStatus
from creature_battle.sim.session import BattleSession
from creature_battle.sim.store import BattleStore


class TestBattleStore:
    def test_starts_in_setup(self):
        store = BattleStore()
        assert store.state.game_state is GameStatus.SETUP
        assert store.action_count == 0

    def test_accepted_dispatch_replaces_state(self, battle):
        store = BattleStore(initial=battle)
        result = store.dispatch(IncrementTurn())

        assert result.accepted
        assert store.state is result.state
        assert store.state is not battle
        assert store.state.turn == 2
        assert battle.turn == 1
        assert store.action_count == 1

    def test_rejected_dispatch_keeps_state(self, battle):
        battle.player.deck = []
        store = BattleStore(initial=battle)
        result = store.dispatch(DrawCard(side=Side.PLAYER))

        assert not result.accepted
        assert store.state is battle
        assert store.action_count == 0

    def test_listeners_see_accepted_transitions_only(self, battle):
        battle.player.deck = []
        store = BattleStore(initial=battle)
        seen = []
        store.subscribe(lambda state, action: seen.append((state.turn, type(action).__name__)))

        store.dispatch(DrawCard(side=Side.PLAYER))
        store.dispatch(IncrementTurn())
        store.dispatch(AddLog(message="hi"))

        assert seen == [(2, "IncrementTurn"), (2, "AddLog")]

    def test_reset(self, battle):
        store = BattleStore(initial=battle)
        store.reset()
        assert store.state == BattleState()

        store.reset(battle)
        assert store.state is battle


class TestBattleSession:
    def test_token_current_until_invalidated(self):
        session = BattleSession()
        token = session.token()
        assert session.is_current(token)

        session.invalidate()
        assert not session.is_current(token)
        assert session.is_current(session.token())

    def test_tokens_from_other_sessions_are_stale(self):
        a, b = BattleSession(), BattleSession()
        assert a.session_id != b.session_id
        assert not a.is_current(b.token())

"""Tests for the seeded BattleRNG."""

from creature_battle.sim.core.rng import BattleRNG


class TestBattleRNG:
    def test_same_seed_same_rolls(self):
        a = BattleRNG(7)
        b = BattleRNG(7)

        assert [a.roll(0, 100) for _ in range(10)] == [b.roll(0, 100) for _ in range(10)]

    def test_chance_extremes(self):
        rng = BattleRNG(1)

        assert not any(rng.chance(0.0) for _ in range(50))
        assert all(rng.chance(1.0) for _ in range(50))

    def test_pick_stays_in_options(self):
        rng = BattleRNG(9)
        assert all(rng.pick("abc") in "abc" for _ in range(30))

    def test_fork_is_independent_of_draw_position(self):
        a = BattleRNG(3)
        b = BattleRNG(3)
        a.chance(0.5)
        a.roll(1, 6)

        assert a.fork("ai").roll(0, 10_000) == b.fork("ai").roll(0, 10_000)

    def test_forks_with_different_names_differ(self):
        rng = BattleRNG(3)
        assert rng.fork("ai").seed != rng.fork("enemy").seed

    def test_fork_records_stream_path(self):
        child = BattleRNG(3).fork("enemy").fork("items")

        assert child.stream == "root/enemy/items"
        assert "root/enemy/items" in repr(child)

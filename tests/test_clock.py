"""Tests for tick ordering, firing and the end of a run."""

import random

import pytest

from conftest import add_enemy
from game.pioneer.clock import SimulationClock
from game.pioneer.constants import BULLET_ANGLE, TRIPLE_SHOT_SPREAD
from game.pioneer.controls import InputState
from game.pioneer.entities import Shockwave
from game.pioneer.events import GameOver, LevelChanged, ShotFired


class TestFiring:
    def test_cooldown_between_volleys(self, world, clock):
        shots = []
        for _ in range(3):
            result = clock.tick(InputState(fire=True), elapsed=0.15)
            shots.extend(result.of_type(ShotFired))
        assert [e.tick for e in shots] == [1, 3]

    def test_bullet_spawns_at_player(self, world, clock):
        p = world.player
        clock.tick(InputState(fire=True))
        assert len(world.store.bullets) == 1
        bullet = world.store.bullets[0]
        assert bullet.is_player_bullet
        assert bullet.x == pytest.approx(p.x)
        assert bullet.y == pytest.approx(p.y - 7.0)

    def test_triple_shot_volley(self, world, clock):
        world.player.power_ups.triple_shot = 10
        result = clock.tick(InputState(fire=True))
        assert [e.bullets for e in result.of_type(ShotFired)] == [3]
        angles = sorted(b.angle for b in world.store.bullets)
        assert angles == pytest.approx(sorted([
            BULLET_ANGLE, BULLET_ANGLE - TRIPLE_SHOT_SPREAD, BULLET_ANGLE + TRIPLE_SHOT_SPREAD,
        ]))

    def test_pointer_moves_and_fires(self, world, clock):
        result = clock.tick(InputState(pointer=(200.0, 300.0)))
        assert (world.player.x, world.player.y) == (200.0, 300.0)
        assert result.of_type(ShotFired)


class TestTimers:
    def test_triple_shot_counts_down(self, world, clock):
        world.player.power_ups.triple_shot = 2
        clock.tick()
        clock.tick()
        clock.tick()
        assert world.player.power_ups.triple_shot == 0

    def test_invincibility_expires(self, world, clock):
        world.player.grant_invincibility()
        for _ in range(119):
            clock.tick()
        assert world.player.invincible
        clock.tick()
        assert not world.player.invincible

    def test_enemy_spawns_on_schedule(self, world, clock):
        for _ in range(58):
            clock.tick()
        assert world.store.enemies == []
        clock.tick()
        assert len(world.store.enemies) == 1

    def test_shockwave_removed_after_forty_ticks(self, world, clock):
        world.store.shockwaves.append(Shockwave(x=100.0, y=100.0, max_radius=100.0, color="#fff"))
        for _ in range(39):
            clock.tick()
        assert len(world.store.shockwaves) == 1
        clock.tick()
        assert world.store.shockwaves == []


class TestTickResult:
    def test_events_stamped_with_tick(self, world, clock):
        clock.tick()
        result = clock.tick(InputState(fire=True))
        assert [e.tick for e in result.events] == [2]

    def test_view_reflects_state(self, world, clock):
        result = clock.tick(InputState(right=True))
        assert result.ran
        assert result.view.player.x == world.player.x

    def test_level_rechecked_at_end_of_tick(self, world, clock):
        world.tracker.score = 1000
        result = clock.tick()
        assert [e.level for e in result.of_type(LevelChanged)] == [2]
        assert world.level == 2

    def test_player_stays_in_bounds(self, world, clock):
        rng = random.Random(9)
        p = world.player
        for _ in range(300):
            keys = {k: rng.random() > 0.5 for k in ("up", "down", "left", "right", "fire")}
            clock.tick(InputState.from_keys(keys))
            assert p.radius <= p.x <= world.width - p.radius
            assert p.radius <= p.y <= world.height - p.radius
            assert 0 <= p.health <= p.max_health
            assert 0 <= p.ultimate_charge <= 100


class TestGameOver:
    def test_last_hit_ends_run(self, world, clock):
        p = world.player
        p.health = 1
        add_enemy(world, p.x, p.y - 2.2)

        result = clock.tick()

        assert world.over
        games = result.of_type(GameOver)
        assert len(games) == 1
        assert games[0].score == 0

    def test_finished_world_ignores_ticks(self, world, clock):
        world.over = True
        result = clock.tick(InputState(fire=True, right=True))
        assert result.ran is False
        assert world.tick_count == 0
        assert world.store.bullets == []

    def test_separate_clocks_share_nothing(self, rng):
        from game.pioneer.world import World

        a = SimulationClock(World(rng=rng, star_count=0))
        b = SimulationClock(World(rng=rng, star_count=0))
        a.tick(InputState(right=True))
        assert a.world.player.x != b.world.player.x


class TestEnemyInvariants:
    def test_enemy_health_never_rises_and_only_live_enemies_remain(self):
        from game.pioneer.world import World

        world = World(rng=random.Random(21), star_count=0)
        clock = SimulationClock(world)
        rng = random.Random(4)
        seen = {}
        for _ in range(900):
            targets = world.store.live_enemies()
            if targets and rng.random() > 0.1:
                # chase the oldest enemy from below, pointer input holds fire
                inputs = InputState(pointer=(targets[0].x, 450.0))
            else:
                inputs = InputState.from_keys({k: rng.random() > 0.5 for k in ("left", "right", "fire")})
            clock.tick(inputs)
            for e in world.store.enemies:
                assert e.alive
                assert e.health > 0
                previous = seen.get(id(e))
                if previous is not None:
                    assert e.health <= previous[1]
                seen[id(e)] = (e, e.health)
            if world.over:
                break
        assert world.tracker.kills > 0


class TestPayloads:
    def test_tick_payloads_are_plain_dicts(self, world, clock):
        result = clock.tick(InputState(fire=True))
        assert result.to_payload_list() == [{"type": "shot_fired", "tick": 1, "bullets": 1}]

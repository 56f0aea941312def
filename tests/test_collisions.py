"""Tests for collision outcomes: hits, fuses, rings, escapes and pickups."""

import pytest

from conftest import add_bullet, add_enemy
from game.pioneer.collisions import DIRECT, RING
from game.pioneer.entities import Enemy, EnemyType, PowerUpType, Shockwave
from game.pioneer.events import (
    AchievementUnlocked,
    CoinCollected,
    EnemyDestroyed,
    EnemyEscaped,
    HealthChanged,
    LevelChanged,
    PlayerHit,
)
from game.pioneer.spawner import create_coin, create_power_up
from game.pioneer.utils import circle_collide


def drained(world, event_cls):
    return [e for e in world.log.drain() if isinstance(e, event_cls)]


class TestCircleCollide:
    def test_symmetric(self):
        a = Shockwave(x=0.0, y=0.0, max_radius=1.0, color="#fff", radius=10.0)
        b = Shockwave(x=12.0, y=5.0, max_radius=1.0, color="#fff", radius=5.0)
        assert circle_collide(a, b) == circle_collide(b, a)

    def test_touching_is_not_overlap(self):
        a = Enemy(x=0.0, y=0.0, type=EnemyType.BASIC, radius=10.0, speed=0.0,
                  health=1, score_value=0, color="#fff")
        b = Enemy(x=25.0, y=0.0, type=EnemyType.BASIC, radius=15.0, speed=0.0,
                  health=1, score_value=0, color="#fff")
        assert not circle_collide(a, b)
        b.x = 24.9
        assert circle_collide(a, b)


class TestDirectHits:
    def test_basic_enemy_destroyed(self, world):
        enemy = add_enemy(world, 100.0, 100.0)
        bullet = add_bullet(world, 100.0, 100.0)

        assert world.resolver.resolve_direct_hits() == 1

        assert not enemy.alive
        assert not bullet.alive
        assert world.score == 100
        assert world.tracker.kills == 1
        assert len(world.store.coins) == 1
        assert len(world.store.particles) == 15
        assert len(world.store.shockwaves) == 1
        assert world.player.ultimate_charge == 2
        assert world.store.power_ups == []
        assert world.tracker.is_unlocked("first_blood")

        destroyed = drained(world, EnemyDestroyed)
        assert [e.cause for e in destroyed] == [DIRECT]

    def test_heavy_enemy_survives_one_hit(self, world):
        enemy = add_enemy(world, 100.0, 100.0, "HEAVY")
        add_bullet(world, 100.0, 100.0)
        world.resolver.resolve_direct_hits()
        assert enemy.alive
        assert enemy.health == 2
        assert world.score == 0
        assert world.store.coins == []

    def test_bullet_spent_on_first_enemy(self, world):
        first = add_enemy(world, 100.0, 100.0, "HEAVY")
        second = add_enemy(world, 105.0, 100.0, "HEAVY")
        add_bullet(world, 102.0, 100.0)
        world.resolver.resolve_direct_hits()
        assert first.health == 2
        assert second.health == 3

    def test_enemy_bullets_ignored(self, world):
        enemy = add_enemy(world, 100.0, 100.0)
        add_bullet(world, 100.0, 100.0, is_player=False)
        assert world.resolver.resolve_direct_hits() == 0
        assert enemy.alive

    def test_charge_capped(self, world):
        world.player.ultimate_charge = 99
        add_enemy(world, 100.0, 100.0)
        add_bullet(world, 100.0, 100.0)
        world.resolver.resolve_direct_hits()
        assert world.player.ultimate_charge == 100

    def test_level_up_clears_wave_without_penalty(self, world):
        world.tracker.score = 950
        add_enemy(world, 100.0, 100.0)
        bystander = add_enemy(world, 500.0, 100.0)
        add_bullet(world, 100.0, 100.0)

        world.resolver.resolve_direct_hits()

        assert world.level == 2
        assert world.score == 1050
        assert not bystander.alive
        level_events = drained(world, LevelChanged)
        assert [(e.level, e.cleared) for e in level_events] == [(2, 1)]


class TestProximityFuse:
    def test_bullet_detonates_near_enemy(self, world):
        enemy = add_enemy(world, 100.0, 100.0)
        bullet = add_bullet(world, 100.0, 150.0)
        assert world.resolver.fuse_bullets() == 1
        assert not bullet.alive
        assert enemy.health == 1
        sw = world.store.shockwaves[0]
        assert (sw.x, sw.y) == (100.0, 150.0)

    def test_bullet_out_of_range(self, world):
        add_enemy(world, 100.0, 100.0)
        bullet = add_bullet(world, 100.0, 170.0)
        assert world.resolver.fuse_bullets() == 0
        assert bullet.alive

    def test_enemy_bullets_never_fuse(self, world):
        add_enemy(world, 100.0, 100.0)
        bullet = add_bullet(world, 100.0, 110.0, is_player=False)
        world.resolver.fuse_bullets()
        assert bullet.alive

    def test_bullets_leaving_field_culled(self, world):
        gone = add_bullet(world, 100.0, -1.0)
        kept = add_bullet(world, 100.0, 0.0)
        world.resolver.cull_bullets()
        assert not gone.alive
        assert kept.alive


class TestShockwaveRing:
    def test_enemy_in_band_takes_damage(self, world):
        world.store.shockwaves.append(Shockwave(x=100.0, y=100.0, max_radius=100.0, color="#fff", radius=50.0))
        enemy = add_enemy(world, 100.0, 150.0, "HEAVY")
        world.resolver.apply_shockwaves()
        assert enemy.health == pytest.approx(2.8)

    def test_band_edges_are_exclusive(self, world):
        world.store.shockwaves.append(Shockwave(x=100.0, y=100.0, max_radius=100.0, color="#fff", radius=50.0))
        outer = add_enemy(world, 100.0, 170.0, "HEAVY")
        inner = add_enemy(world, 100.0, 130.0, "HEAVY")
        world.resolver.apply_shockwaves()
        assert outer.health == 3
        assert inner.health == 3

    def test_ring_kill(self, world):
        world.store.shockwaves.append(Shockwave(x=100.0, y=100.0, max_radius=100.0, color="#fff", radius=50.0))
        enemy = add_enemy(world, 100.0, 150.0)
        enemy.health = 0.1
        world.resolver.apply_shockwaves()

        assert not enemy.alive
        assert world.score == 100
        assert world.player.ultimate_charge == 1
        assert len(world.store.particles) == 10
        assert len(world.store.coins) == 1
        assert [e.cause for e in drained(world, EnemyDestroyed)] == [RING]


class TestEnemyResolution:
    def test_escape_costs_score(self, world):
        world.tracker.score = 30
        enemy = add_enemy(world, 100.0, 600.0 + 15.0 + 1.0)
        assert world.resolver.resolve_enemies() is False
        assert not enemy.alive
        assert world.score == 0
        assert world.store.coins == []
        assert world.store.particles == []
        escaped = drained(world, EnemyEscaped)
        assert [e.penalty for e in escaped] == [50]

    def test_enemy_at_edge_has_not_escaped(self, world):
        enemy = add_enemy(world, 100.0, 600.0 + 15.0)
        world.resolver.resolve_enemies()
        assert enemy.alive

    def test_contact_costs_health(self, world):
        p = world.player
        enemy = add_enemy(world, p.x, p.y)
        assert world.resolver.resolve_enemies() is False
        assert p.health == 2
        assert p.invincible
        assert p.invincible_timer == 120
        assert not enemy.alive
        assert world.score == 0
        assert len(world.store.particles) == 10
        events = world.log.drain()
        assert [e.shielded for e in events if isinstance(e, PlayerHit)] == [False]
        assert [e.health for e in events if isinstance(e, HealthChanged)] == [2]

    def test_shield_absorbs_contact(self, world):
        p = world.player
        p.power_ups.shield = True
        add_enemy(world, p.x, p.y)
        world.resolver.resolve_enemies()
        assert p.health == 3
        assert p.power_ups.shield is False
        assert p.invincible
        events = world.log.drain()
        assert [e.shielded for e in events if isinstance(e, PlayerHit)] == [True]
        assert not [e for e in events if isinstance(e, HealthChanged)]

    def test_invincible_player_ignores_contact(self, world):
        p = world.player
        p.grant_invincibility()
        enemy = add_enemy(world, p.x, p.y)
        world.resolver.resolve_enemies()
        assert p.health == 3
        assert enemy.alive

    def test_last_hit_ends_game(self, world):
        p = world.player
        p.health = 1
        add_enemy(world, p.x, p.y)
        assert world.resolver.resolve_enemies() is True
        assert p.health == 0


class TestPickups:
    def test_triple_shot_duration_resets(self, world):
        p = world.player
        p.power_ups.triple_shot = 100
        world.store.power_ups.append(create_power_up(p.x, p.y, PowerUpType.TRIPLE_SHOT))
        world.resolver.collect_power_ups()
        assert p.power_ups.triple_shot == 600
        assert world.tracker.pickups == 1

    def test_shield_pickup(self, world):
        p = world.player
        world.store.power_ups.append(create_power_up(p.x, p.y, "SHIELD"))
        world.resolver.collect_power_ups()
        assert p.power_ups.shield is True

    def test_power_collector_unlocked_once(self, world):
        p = world.player
        for _ in range(6):
            world.store.power_ups.append(create_power_up(p.x, p.y, "SHIELD"))
            world.resolver.collect_power_ups()
        unlocked = [e.achievement.id for e in drained(world, AchievementUnlocked)]
        assert unlocked == ["power_collector"]

    def test_power_up_lost_below_field(self, world):
        pu = create_power_up(100.0, 601.0, "SHIELD")
        world.store.power_ups.append(pu)
        world.resolver.collect_power_ups()
        assert not pu.alive
        assert world.tracker.pickups == 0

    def test_coin_pickup(self, world):
        p = world.player
        coin = create_coin(p.x, p.y)
        world.store.coins.append(coin)
        world.resolver.collect_coins()
        assert not coin.alive
        assert world.coins == 1
        assert [e.value for e in drained(world, CoinCollected)] == [1]

"""Tests for the session state machine."""

import pytest
from loguru import logger

from conftest import FixedRandom, add_enemy
from game.pioneer.controls import InputState
from game.pioneer.economy import ShopItem
from game.pioneer.events import CoinsChanged, GameOver
from game.pioneer.session import GameSession, GameState


@pytest.fixture
def session():
    return GameSession(initial_coins=100, rng=FixedRandom(0.5))


@pytest.fixture
def debug_messages():
    messages = []
    handler_id = logger.add(
        lambda m: messages.append(m.record["message"]),
        level="DEBUG",
        filter=lambda record: record["level"].name == "DEBUG",
    )
    yield messages
    logger.remove(handler_id)


def finish_run(session):
    p = session.world.player
    p.health = 1
    add_enemy(session.world, p.x, p.y - 2.2)
    return session.tick()


class TestTransitions:
    def test_starts_idle(self, session):
        assert session.state is GameState.START
        result = session.tick(InputState(fire=True))
        assert result.ran is False
        assert session.world.tick_count == 0

    def test_start_begins_play(self, session):
        assert session.start()
        assert session.state is GameState.PLAYING
        assert session.tick().ran
        assert session.start() is False

    def test_pause_freezes_simulation(self, session):
        session.start()
        session.tick()
        assert session.pause()
        assert session.state is GameState.PAUSED
        assert session.tick().ran is False
        assert session.world.tick_count == 1
        assert session.resume()
        assert session.state is GameState.PLAYING

    def test_toggle_pause(self, session):
        session.start()
        assert session.toggle_pause()
        assert session.state is GameState.PAUSED
        assert session.toggle_pause()
        assert session.state is GameState.PLAYING

    def test_pause_outside_play_ignored(self, session, debug_messages):
        assert session.pause() is False
        assert session.resume() is False
        assert session.toggle_pause() is False
        assert session.exit_to_game_over() is False
        assert session.state is GameState.START
        assert debug_messages == [
            "pause() ignored in state START",
            "resume() ignored in state START",
            "toggle_pause() ignored in state START",
            "exit_to_game_over() ignored in state START",
        ]

    def test_restart_ignored_while_playing(self, session, debug_messages):
        session.start()
        world = session.world
        assert session.restart() is False
        assert session.world is world
        assert debug_messages == ["start() ignored in state PLAYING"]


class TestMilestone:
    def test_milestone_pauses_for_victory(self, session):
        session.start()
        session.world.tracker.add_score(5000)
        session.tick()
        assert session.state is GameState.MILESTONE_VICTORY
        assert session.tick().ran is False

    def test_continue_after_milestone(self, session):
        session.start()
        session.world.tracker.add_score(5000)
        session.tick()
        assert session.resume()
        session.tick()
        assert session.state is GameState.PLAYING

    def test_exit_after_milestone(self, session):
        session.start()
        session.world.tracker.add_score(5000)
        session.tick()
        assert session.exit_to_game_over()
        assert session.state is GameState.GAME_OVER
        assert session.last_game_over.score == 5000
        assert [e.score for e in session.drain_events() if isinstance(e, GameOver)] == [5000]

    def test_start_from_milestone_begins_fresh_run(self, session):
        session.start()
        session.world.tracker.add_score(5000)
        session.tick()
        old = session.world
        assert session.start()
        assert session.state is GameState.PLAYING
        assert session.world is not old
        assert session.world.score == 0
        assert session.world.tracker.is_unlocked("sharpshooter")

    def test_exit_only_from_milestone(self, session):
        session.start()
        assert session.exit_to_game_over() is False
        assert session.state is GameState.PLAYING


class TestGameOver:
    def test_run_ends_on_last_hit(self, session):
        session.start()
        finish_run(session)
        assert session.state is GameState.GAME_OVER
        assert session.last_game_over is not None
        assert session.tick().ran is False

    def test_restart_replaces_world(self, session):
        session.start()
        session.world.tracker.unlock("first_blood")
        session.world.ledger.deposit(5)
        old = session.world
        finish_run(session)

        assert session.start()

        world = session.world
        assert world is not old
        assert session.state is GameState.PLAYING
        assert world.score == 0
        assert world.level == 1
        assert world.player.health == 3
        assert world.store.enemies == []
        assert world.coins == 105
        assert world.tracker.is_unlocked("first_blood")

    def test_restart_from_pause(self, session):
        session.start()
        for _ in range(5):
            session.tick(InputState(left=True))
        session.pause()
        assert session.restart()
        assert session.state is GameState.PLAYING
        assert session.world.tick_count == 0
        assert session.world.player.x == 400.0


class TestShop:
    def test_purchase_at_catalog_price(self, session):
        session.start()
        assert session.purchase(ShopItem.SHIELD)
        assert session.world.coins == 70
        assert session.world.player.power_ups.shield
        assert [e.balance for e in session.drain_events() if isinstance(e, CoinsChanged)] == [70]

    def test_purchase_with_explicit_price(self, session):
        assert session.purchase("TRIPLE_SHOT", 10)
        assert session.world.coins == 90

    def test_unknown_item(self, session):
        assert session.purchase("LASER") is False
        assert session.world.coins == 100

    def test_purchase_after_game_over_carries_over(self, session):
        session.start()
        finish_run(session)
        assert session.state is GameState.GAME_OVER

        assert session.purchase(ShopItem.SHIELD) is True
        assert session.world.coins == 70

        session.start()
        assert session.world.coins == 70


class TestShopOverlay:
    def test_shop_pauses_running_game(self, session):
        session.start()
        assert session.open_shop()
        assert session.state is GameState.PAUSED
        assert session.tick().ran is False
        assert session.close_shop()
        assert session.state is GameState.PLAYING

    def test_pause_key_ignored_while_shopping(self, session):
        session.start()
        session.open_shop()
        assert session.toggle_pause() is False
        assert session.resume() is False
        assert session.state is GameState.PAUSED
        assert session.shop_open

    def test_closing_keeps_milestone_screen(self, session):
        session.start()
        session.world.tracker.add_score(5000)
        session.tick()
        session.open_shop()
        assert session.state is GameState.MILESTONE_VICTORY
        session.close_shop()
        assert session.state is GameState.MILESTONE_VICTORY

    def test_closing_keeps_player_pause(self, session):
        session.start()
        session.pause()
        session.open_shop()
        session.close_shop()
        assert session.state is GameState.PAUSED

    def test_start_closes_shop(self, session):
        session.open_shop()
        session.start()
        assert not session.shop_open
        assert session.state is GameState.PLAYING

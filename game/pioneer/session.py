"""
GameSession - state machine around the simulation.

  START -> PLAYING <-> PAUSED
  PLAYING -> MILESTONE_VICTORY -> PLAYING (continue) | GAME_OVER (exit)
  PLAYING -> GAME_OVER -> PLAYING (restart)

start() and restart() work from every state except PLAYING. Outside
START they replace the whole World in one step; coins carry over from
the previous balance and unlocked achievements stay unlocked.

The shop overlay can open from any state. It pauses a running game and,
when closed, resumes only the pause it made itself.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Tuple, Union

from loguru import logger

from .clock import SimulationClock
from .constants import FPS, GAME_HEIGHT, GAME_WIDTH
from .controls import InputState
from .economy import ShopItem, parse_item
from .events import BaseEvent, GameOver, MilestoneReached, TickResult
from .world import World


class GameState(str, Enum):
    START = "START"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"
    MILESTONE_VICTORY = "MILESTONE_VICTORY"


class GameSession:
    """What a host talks to: transitions, tick, purchase, events"""

    def __init__(
        self,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        initial_coins: int = 0,
        rng: Optional[random.Random] = None,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.state = GameState.START
        self.world = World(width, height, rng=self.rng, coins=initial_coins)
        self.clock = SimulationClock(self.world)
        self.last_game_over: Optional[GameOver] = None
        self.shop_open = False
        self._shop_paused = False

    # ----------------------------
    # Transitions
    # ----------------------------

    def _transition(self, new_state: GameState):
        logger.info("Session {} -> {}", self.state.value, new_state.value)
        self.state = new_state

    def _new_world(self):
        old = self.world
        self.world = World(
            self.width,
            self.height,
            rng=self.rng,
            coins=old.coins,
            unlocked=old.tracker.unlocked,
        )
        self.clock = SimulationClock(self.world)

    def _ignored(self, action: str) -> bool:
        logger.debug("{}() ignored in state {}", action, self.state.value)
        return False

    def start(self) -> bool:
        """Fresh world and PLAYING, from any state but PLAYING"""
        if self.state is GameState.PLAYING:
            return self._ignored("start")
        if self.state is not GameState.START:
            self._new_world()
        self.shop_open = False
        self._shop_paused = False
        self._transition(GameState.PLAYING)
        return True

    def restart(self) -> bool:
        return self.start()

    def pause(self) -> bool:
        if self.state is not GameState.PLAYING:
            return self._ignored("pause")
        self._transition(GameState.PAUSED)
        return True

    def resume(self) -> bool:
        if self.shop_open:
            return self._ignored("resume")
        if self.state not in (GameState.PAUSED, GameState.MILESTONE_VICTORY):
            return self._ignored("resume")
        self._transition(GameState.PLAYING)
        return True

    def toggle_pause(self) -> bool:
        if self.shop_open:
            return self._ignored("toggle_pause")
        if self.state is GameState.PLAYING:
            return self.pause()
        if self.state is GameState.PAUSED:
            return self.resume()
        return self._ignored("toggle_pause")

    def exit_to_game_over(self) -> bool:
        if self.state is not GameState.MILESTONE_VICTORY:
            return self._ignored("exit_to_game_over")
        self.last_game_over = self.world.tracker.game_over()
        self.world.over = True
        self._transition(GameState.GAME_OVER)
        return True

    def open_shop(self) -> bool:
        """Open the shop overlay, pausing only if the game was running"""
        if self.shop_open:
            return self._ignored("open_shop")
        self._shop_paused = self.state is GameState.PLAYING
        if self._shop_paused:
            self._transition(GameState.PAUSED)
        self.shop_open = True
        return True

    def close_shop(self) -> bool:
        """Close the shop; resumes only a pause the shop itself made"""
        if not self.shop_open:
            return self._ignored("close_shop")
        self.shop_open = False
        if self._shop_paused and self.state is GameState.PAUSED:
            self._transition(GameState.PLAYING)
        self._shop_paused = False
        return True

    # ----------------------------
    # Simulation
    # ----------------------------

    @property
    def playing(self) -> bool:
        return self.state is GameState.PLAYING

    def tick(self, inputs: Optional[InputState] = None, elapsed: float = 1.0 / FPS) -> TickResult:
        """One frame; a no-op outside PLAYING"""
        if not self.playing:
            return TickResult(events=(), view=None, ran=False)

        result = self.clock.tick(inputs, elapsed)
        game_over = result.of_type(GameOver)
        if game_over:
            self.last_game_over = game_over[-1]
            self._transition(GameState.GAME_OVER)
        elif result.of_type(MilestoneReached):
            self._transition(GameState.MILESTONE_VICTORY)
        return result

    def purchase(self, item: Union[ShopItem, str], price: Optional[int] = None) -> bool:
        """Shop entry point; price defaults to the catalog price"""
        if price is None:
            shop_item = parse_item(item)
            if shop_item is None:
                return False
            price = shop_item.price
        return self.world.purchase(item, price)

    def drain_events(self) -> Tuple[BaseEvent, ...]:
        """Events produced between ticks (purchases, exit)"""
        return self.world.log.drain()

    def view(self):
        return self.world.view()

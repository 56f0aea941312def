"""
Arcade desktop host: keyboard/mouse -> keys held, session tick, drawing.
The simulation uses y-down coordinates; arcade draws y-up, so every draw
call flips y against the window height.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

import arcade

from .constants import FPS, GAME_HEIGHT, GAME_WIDTH
from .controls import InputState
from .economy import ShopItem
from .entities import EnemyType, PowerUpType
from .events import AchievementUnlocked, CoinsChanged
from .session import GameSession, GameState
from .storage import CoinStore
from .utils import hex_to_rgb

KEY_BINDINGS = {
    arcade.key.UP: "up",
    arcade.key.W: "up",
    arcade.key.DOWN: "down",
    arcade.key.S: "down",
    arcade.key.LEFT: "left",
    arcade.key.A: "left",
    arcade.key.RIGHT: "right",
    arcade.key.D: "right",
    arcade.key.SPACE: "fire",
    arcade.key.E: "ability",
}

SHOP_KEYS = {
    arcade.key.KEY_1: ShopItem.TRIPLE_SHOT,
    arcade.key.KEY_2: ShopItem.SHIELD,
    arcade.key.KEY_3: ShopItem.HEALTH,
    arcade.key.KEY_4: ShopItem.ULTIMATE,
}


def rgba(color: str, alpha: float = 1.0):
    r, g, b = hex_to_rgb(color)
    return r, g, b, int(255 * max(0.0, min(1.0, alpha)))


class PioneerWindow(arcade.Window):
    """
    Arcade window for playing (or watching) a session.

    With ``autoplay=False`` the window only draws; something else (e.g.
    the gymnasium env) drives the session.
    """

    def __init__(
        self,
        session: GameSession,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        coin_store: Optional[CoinStore] = None,
        autoplay: bool = True,
    ):
        super().__init__(width, height, "Interstellar Pioneers", update_rate=1 / FPS)
        self.session = session
        self.coin_store = coin_store
        self.autoplay = autoplay
        self.keys: Dict[str, bool] = {}
        self.pointer = None
        self.banner: Optional[str] = None
        self.banner_ticks = 0

        self.BG = (5, 5, 5)
        self.HUD_C = (220, 220, 220)
        arcade.set_background_color(self.BG)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        action = KEY_BINDINGS.get(symbol)
        if action:
            self.keys[action] = True
            return
        s = self.session
        if symbol == arcade.key.P:
            s.toggle_pause()
        elif symbol == arcade.key.B:
            if s.shop_open:
                s.close_shop()
            else:
                s.open_shop()
        elif symbol in SHOP_KEYS and s.shop_open:
            s.purchase(SHOP_KEYS[symbol])
            self._dispatch(s.drain_events())
        elif symbol == arcade.key.ENTER:
            if s.state in (GameState.START, GameState.GAME_OVER):
                s.start()
            elif s.state is GameState.MILESTONE_VICTORY:
                s.resume()
        elif symbol == arcade.key.R and s.state is GameState.PAUSED:
            s.restart()
        elif symbol == arcade.key.ESCAPE and s.state is GameState.MILESTONE_VICTORY:
            s.exit_to_game_over()
            self._dispatch(s.drain_events())

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_BINDINGS.get(symbol)
        if action:
            self.keys[action] = False

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.pointer = (x, self.height - y)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        if self.pointer is not None:
            self.pointer = (x, self.height - y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.pointer = None

    def inputs(self) -> InputState:
        return InputState.from_keys(self.keys, pointer=self.pointer)

    # ----------------------------
    # Loop
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.autoplay:
            return
        result = self.session.tick(self.inputs(), delta_time)
        self._dispatch(result.events)
        if self.banner_ticks > 0:
            self.banner_ticks -= 1
            if self.banner_ticks == 0:
                self.banner = None

    def _dispatch(self, events):
        for e in events:
            if isinstance(e, CoinsChanged) and self.coin_store is not None:
                self.coin_store.save(e.balance)
            elif isinstance(e, AchievementUnlocked):
                self.banner = f"Achievement: {e.achievement.title} - {e.achievement.description}"
                self.banner_ticks = 3 * FPS

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        view = self.session.view()
        self.draw_view(view)
        self.draw_hud(view)

    def _y(self, y: float) -> float:
        return self.height - y

    def draw_view(self, view):
        for star in view.stars:
            arcade.draw_circle_filled(star.x, self._y(star.y), max(star.size, 0.5), (255, 255, 255, int(255 * star.opacity)))

        for sw in view.shockwaves:
            if sw.radius <= 0:
                continue
            arcade.draw_circle_outline(sw.x, self._y(sw.y), sw.radius, rgba(sw.color, sw.alpha), 3)
            arcade.draw_circle_filled(sw.x, self._y(sw.y), sw.radius, rgba(sw.color, sw.alpha * 0.3))

        for coin in view.coins:
            arcade.draw_circle_filled(coin.x, self._y(coin.y), coin.radius, rgba(coin.color))
            arcade.draw_circle_outline(coin.x, self._y(coin.y), coin.radius - 3, (0, 0, 0, 80), 1)

        for p in view.particles:
            arcade.draw_circle_filled(p.x, self._y(p.y), p.radius, rgba(p.color, p.alpha))

        for pu in view.power_ups:
            arcade.draw_circle_filled(pu.x, self._y(pu.y), pu.radius, rgba(pu.color))
            label = "T" if pu.type is PowerUpType.TRIPLE_SHOT else "S"
            arcade.draw_text(label, pu.x, self._y(pu.y), arcade.color.WHITE, 12,
                             anchor_x="center", anchor_y="center", bold=True)

        for e in view.enemies:
            x, y, r = e.x, self._y(e.y), e.radius
            if e.type is EnemyType.HEAVY:
                arcade.draw_lrbt_rectangle_filled(x - r, x + r, y - r, y + r, rgba(e.color))
            elif e.type is EnemyType.FAST:
                # nose points down the screen
                arcade.draw_triangle_filled(x, y - r, x - r, y + r, x + r, y + r, rgba(e.color))
            else:
                arcade.draw_circle_filled(x, y, r, rgba(e.color))

        for b in view.bullets:
            arcade.draw_circle_filled(b.x, self._y(b.y), b.radius, rgba(b.color))

        player = view.player
        blink = player.invincible and (self.session.world.tick_count // 6) % 2 == 1
        if not blink:
            x, y, r = player.x, self._y(player.y), player.radius
            arcade.draw_triangle_filled(x, y + r, x - r, y - r, x + r, y - r, rgba(player.color))
            arcade.draw_circle_filled(x, y - 5, 5, arcade.color.WHITE)
            if player.power_ups.shield:
                arcade.draw_circle_filled(x, y, r + 10, rgba("#8b5cf6", 0.2))
                arcade.draw_circle_outline(x, y, r + 10, rgba("#8b5cf6"), 3)

    def draw_hud(self, view):
        s = self.session
        w = s.world
        player = view.player
        txt = (f"Score: {w.score}  Level: {w.level}  "
               f"HP: {player.health}/{player.max_health}  "
               f"Coins: {w.coins}  Charge: {math.floor(player.ultimate_charge)}%")
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)

        # Charge bar
        bar_w, bar_h = 180, 8
        x0, y0 = 12, self.height - 40
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * player.ultimate_charge / 100
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, (96, 165, 250))

        cx, cy = self.width / 2, self.height / 2
        if s.shop_open:
            lines = ["SHOP  (B to close)"] + [
                f"{i + 1}. {item.value.replace('_', ' ').title()}  -  {item.price} coins"
                for i, item in enumerate(ShopItem)
            ]
            for i, line in enumerate(lines):
                arcade.draw_text(line, cx, cy + 60 - i * 28, self.HUD_C, 16, anchor_x="center")
        elif s.state is GameState.START:
            arcade.draw_text("INTERSTELLAR PIONEERS", cx, cy + 20, self.HUD_C, 28, anchor_x="center")
            arcade.draw_text("Press ENTER to start", cx, cy - 20, self.HUD_C, 16, anchor_x="center")
        elif s.state is GameState.PAUSED:
            arcade.draw_text("PAUSED  (P resume, R restart)", cx, cy, self.HUD_C, 20, anchor_x="center")
        elif s.state is GameState.MILESTONE_VICTORY:
            arcade.draw_text("MILESTONE REACHED!", cx, cy + 20, self.HUD_C, 28, anchor_x="center")
            arcade.draw_text("ENTER continue  /  ESC finish", cx, cy - 20, self.HUD_C, 16, anchor_x="center")
        elif s.state is GameState.GAME_OVER:
            final = s.last_game_over
            score = final.score if final else w.score
            level = final.level if final else w.level
            arcade.draw_text("GAME OVER", cx, cy + 40, self.HUD_C, 28, anchor_x="center")
            arcade.draw_text(f"Score {score}  Level {level}", cx, cy, self.HUD_C, 16, anchor_x="center")
            unlocked = sum(1 for a in w.tracker.achievements() if a.unlocked)
            arcade.draw_text(f"Achievements {unlocked}/{len(w.tracker.catalog)}  -  ENTER to restart",
                             cx, cy - 28, self.HUD_C, 14, anchor_x="center")

        if self.banner:
            arcade.draw_text(self.banner, cx, 24, (251, 191, 36), 14, anchor_x="center")


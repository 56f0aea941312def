"""
Play Interstellar Pioneers in a desktop window.

    python -m game.pioneer [--coins-file PATH] [--seed N]
"""

import argparse

import arcade

from .session import GameSession
from .storage import CoinStore
from .utils import seed_everything
from .window import PioneerWindow


def main():
    parser = argparse.ArgumentParser(description="Play Interstellar Pioneers")
    parser.add_argument(
        "--coins-file",
        type=str,
        default=None,
        help="Where the coin balance is saved (default: ~/.pioneer/save.json)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: unseeded)",
    )
    args = parser.parse_args()

    store = CoinStore(args.coins_file)
    session = GameSession(initial_coins=store.load(), rng=seed_everything(args.seed))
    PioneerWindow(session, coin_store=store)
    arcade.run()


if __name__ == "__main__":
    main()

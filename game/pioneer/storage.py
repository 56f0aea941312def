"""
Coin balance persistence for hosts.
One integer stored under a fixed key in a small JSON file.
"""

from __future__ import annotations

import json
import os
from typing import Optional

from loguru import logger

from .constants import COINS_STORAGE_KEY

DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".pioneer", "save.json")


class CoinStore:
    """Loads and saves the coin balance"""

    def __init__(self, path: Optional[str] = None, key: str = COINS_STORAGE_KEY):
        self.path = path or DEFAULT_PATH
        self.key = key

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            return max(0, int(data.get(self.key, 0)))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not read coin balance from {}: {}", self.path, e)
            return 0

    def save(self, balance: int):
        data = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r") as f:
                    data = json.load(f)
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}
        data[self.key] = int(balance)
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f)

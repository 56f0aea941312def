"""
Normalized input consumed by the simulation
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class InputState:
    """Keys held during a tick; the host refreshes this between ticks"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False
    ability: bool = False
    # pointer/touch: moves the player directly and holds fire
    pointer: Optional[Tuple[float, float]] = None

    @property
    def firing(self) -> bool:
        return self.fire or self.pointer is not None

    @classmethod
    def from_keys(cls, keys: Mapping[str, bool], pointer: Optional[Tuple[float, float]] = None) -> "InputState":
        """Build from a 'keys held' map keyed by action name"""
        return cls(
            up=bool(keys.get("up", False)),
            down=bool(keys.get("down", False)),
            left=bool(keys.get("left", False)),
            right=bool(keys.get("right", False)),
            fire=bool(keys.get("fire", False)),
            ability=bool(keys.get("ability", False)),
            pointer=pointer,
        )


IDLE = InputState()

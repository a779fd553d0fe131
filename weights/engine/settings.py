"""
Module: weights.engine.settings
"""

from dataclasses import dataclass
from typing import Tuple

from weights.config import config


@dataclass
class WeightsSettings:
    column: int = 65
    show_weights: bool = True
    style: str = "class:weights"
    # left delimiter, left signal, right signal, right delimiter
    cookie: Tuple[str, str, str, str] = ("[", "+", "", "]")

    @classmethod
    def from_config(cls) -> "WeightsSettings":
        return cls(
            column=int(config.get_value("weights.column", 65)),
            show_weights=bool(config.get_value("weights.show", True)),
            style=config.get_value("weights.style", "class:weights"),
            cookie=(
                config.get_value("weights.cookie.left", "["),
                config.get_value("weights.cookie.left-signal", "+"),
                config.get_value("weights.cookie.right-signal", ""),
                config.get_value("weights.cookie.right", "]"),
            ),
        )

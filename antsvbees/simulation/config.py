"""Config — load game setup from YAML files.

Board size, starting food, bee strength and the wave schedule live in
YAML and are parsed into a typed dataclass here, so scenarios can be
swapped without touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


def _default_waves() -> dict[int, int]:
    return {2: 1, 3: 1, 5: 2, 7: 2, 9: 3, 11: 3, 13: 4, 15: 8}


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed for deterministic replay; None draws fresh entropy.
        starting_food: Food the colony begins with.
        num_tunnels: Number of parallel tunnels.
        tunnel_length: Places per tunnel.
        moat_frequency: Every n-th place is flooded; 0 for none.
        bee_armor: Armor of every bee the hive creates.
        bee_damage: Sting damage of every bee the hive creates.
        waves: Turn number to number of bees released that turn.
    """

    seed: int | None = None
    starting_food: int = 10
    num_tunnels: int = 3
    tunnel_length: int = 8
    moat_frequency: int = 0
    bee_armor: int = 3
    bee_damage: int = 1
    waves: dict[int, int] = field(default_factory=_default_waves)

    def validate(self) -> None:
        """Check that the setup describes a playable board.

        Raises:
            ValueError: If any dimension, amount or wave is out of range.
        """
        if self.num_tunnels < 1 or self.tunnel_length < 1:
            msg = (
                f"board must have at least one place, got "
                f"{self.num_tunnels}x{self.tunnel_length}"
            )
            raise ValueError(msg)
        if self.starting_food < 0:
            msg = f"starting_food must be non-negative, got {self.starting_food}"
            raise ValueError(msg)
        if self.moat_frequency < 0:
            msg = f"moat_frequency must be non-negative, got {self.moat_frequency}"
            raise ValueError(msg)
        if self.bee_armor < 1 or self.bee_damage < 1:
            msg = (
                f"bees need positive armor and damage, got "
                f"armor={self.bee_armor} damage={self.bee_damage}"
            )
            raise ValueError(msg)
        for turn, count in self.waves.items():
            if turn < 0 or count < 1:
                msg = f"invalid wave {count} bee(s) on turn {turn}"
                raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        ``waves`` may be a mapping of turn to count, or a list of
        ``{turn, count}`` entries.

        Args:
            path: Path to the YAML config file.

        Returns:
            A validated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If the loaded values are out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            seed=data.get("seed"),
            starting_food=data.get("starting_food", cls.starting_food),
            num_tunnels=data.get("num_tunnels", cls.num_tunnels),
            tunnel_length=data.get("tunnel_length", cls.tunnel_length),
            moat_frequency=data.get("moat_frequency", cls.moat_frequency),
            bee_armor=data.get("bee_armor", cls.bee_armor),
            bee_damage=data.get("bee_damage", cls.bee_damage),
            waves=_parse_waves(data["waves"]) if "waves" in data else _default_waves(),
        )
        config.validate()
        return config


def _parse_waves(raw: Any) -> dict[int, int]:
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return {int(turn): int(count) for turn, count in raw.items()}
    waves: dict[int, int] = {}
    for entry in raw:
        turn = int(entry["turn"])
        if turn in waves:
            msg = f"wave for turn {turn} is listed twice"
            raise ValueError(msg)
        waves[turn] = int(entry["count"])
    return waves

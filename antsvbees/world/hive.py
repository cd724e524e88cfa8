"""Hive — the place bees wait in before each scheduled wave."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antsvbees.colony.insect import Bee
from antsvbees.simulation.events import EventKind
from antsvbees.world.place import Place

if TYPE_CHECKING:
    from antsvbees.colony.colony import Colony


@dataclass(eq=False)
class Hive(Place):
    """Spawn pool holding every bee that has not yet entered a tunnel.

    Attributes:
        bee_armor: Armor given to each bee created by ``add_wave``.
        bee_damage: Sting damage of each bee created by ``add_wave``.
        waves: Turn number to the bees released on that turn.
    """

    name: str = "Hive"
    bee_armor: int = 3
    bee_damage: int = 1
    waves: dict[int, list[Bee]] = field(default_factory=dict, repr=False)

    def add_wave(self, attack_turn: int, num_bees: int) -> Hive:
        """Schedule ``num_bees`` new bees to invade on ``attack_turn``.

        The bees wait in the hive until then, so they count as pending.
        A second wave for the same turn replaces the first in the
        schedule.

        Returns:
            This hive, for chaining.
        """
        wave: list[Bee] = []
        for _ in range(num_bees):
            bee = Bee(self.bee_armor, self.bee_damage)
            self.add_bee(bee)
            wave.append(bee)
        self.waves[attack_turn] = wave
        return self

    def invade(self, colony: Colony, current_turn: int) -> list[Bee]:
        """Send this turn's wave into random tunnel entrances.

        Each bee picks its entrance independently and uniformly.

        Args:
            colony: The colony under attack.
            current_turn: Turn whose wave should be released.

        Returns:
            The bees that entered the colony (empty if no wave is due).
        """
        wave = self.waves.get(current_turn)
        if wave is None:
            return []
        entrances = colony.get_entrances()
        for bee in wave:
            self.remove_bee(bee)
            entrance = entrances[int(colony.rng.integers(len(entrances)))]
            entrance.add_bee(bee)
        self.emit(EventKind.WAVE_SPAWNED, turn=current_turn, count=len(wave))
        return wave

"""Insect — shared capabilities of ants and bees, plus the Bee itself.

Every insect has armor, a place on the board, and an ``act`` called once
per turn.  Damage is applied through ``reduce_armor``; an insect whose
armor reaches zero is removed from its place and never acts again.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from antsvbees.simulation.events import EventKind

if TYPE_CHECKING:
    from antsvbees.colony.ant import Ant
    from antsvbees.colony.colony import Colony
    from antsvbees.world.place import Place

_uids = itertools.count(1)


class BeeStatus(Enum):
    """Transient condition inflicted by special leaves; lasts one act."""

    NONE = auto()
    STUCK = auto()
    COLD = auto()


class Insect(ABC):
    """Base class for every unit on the board.

    Attributes:
        uid: Unique, stable identifier.
        armor: Remaining hit points; the insect dies at 0 or below.
        place: Where the insect stands, or None when off the board.
    """

    name: str = "Insect"

    def __init__(self, armor: int, place: Place | None = None) -> None:
        self.uid = next(_uids)
        self.armor = armor
        self.place = place

    @property
    def is_alive(self) -> bool:
        """Return True while armor is positive."""
        return self.armor > 0

    def get_armor(self) -> int:
        return self.armor

    def get_place(self) -> Place | None:
        return self.place

    def reduce_armor(self, amount: int) -> bool:
        """Apply damage and remove the insect if it dies.

        Args:
            amount: Armor to subtract.

        Returns:
            True if the insect died from this damage.
        """
        self.armor -= amount
        self.emit(
            EventKind.UNIT_DAMAGED,
            unit=str(self),
            amount=amount,
            armor=self.armor,
        )
        if self.armor <= 0:
            self.emit(EventKind.UNIT_DIED, unit=str(self))
            if self.place is not None:
                self.place.remove_insect(self)
            return True
        return False

    @abstractmethod
    def leave(self, place: Place) -> None:
        """Detach this insect from ``place`` using the right slot."""

    @abstractmethod
    def act(self, colony: Colony | None = None) -> None:
        """Take this insect's action for the turn."""

    def emit(self, kind: EventKind, **data: Any) -> None:
        if self.place is not None:
            self.place.emit(kind, **data)

    def __str__(self) -> str:
        return f"{self.name}({self.place.name if self.place else ''})"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} #{self.uid} armor={self.armor}>"


class Bee(Insect):
    """An attacker that advances toward the queen and stings ants.

    Attributes:
        damage: Armor removed from an ant per sting.
        status: Effect applied by the last special leaf, cleared after
            every act.
    """

    name = "Bee"

    def __init__(self, armor: int, damage: int, place: Place | None = None) -> None:
        super().__init__(armor, place)
        self.damage = damage
        self.status = BeeStatus.NONE

    def set_status(self, status: BeeStatus) -> None:
        self.status = status
        self.emit(EventKind.BEE_STATUS, unit=str(self), status=status.name)

    def sting(self, ant: Ant) -> bool:
        """Damage ``ant``; return True if it died."""
        return ant.reduce_armor(self.damage)

    def is_blocked(self) -> bool:
        """Return True if an ant (or guard) stands on this bee's place."""
        return self.place is not None and self.place.get_ant() is not None

    def act(self, colony: Colony | None = None) -> None:
        """Sting the blocking ant, otherwise fly one step toward the queen.

        A cold bee cannot sting and a stuck bee cannot move.  Either
        status wears off at the end of this call.
        """
        if self.is_blocked():
            if self.status is not BeeStatus.COLD:
                self.sting(self.place.get_ant())
        elif self.place is not None and self.is_alive:
            if self.status is not BeeStatus.STUCK:
                self.place.exit_bee(self)
        self.status = BeeStatus.NONE

    def leave(self, place: Place) -> None:
        place.remove_bee(self)

"""Place — a single cell of a tunnel.

Places are chained into tunnels: ``exit`` points one step toward the
queen, ``entrance`` one step toward the hive.  A place holds at most one
ordinary ant, at most one guard ant layered on top of it, and any number
of bees in arrival order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from antsvbees.simulation.events import EventKind

if TYPE_CHECKING:
    from antsvbees.colony.ant import Ant
    from antsvbees.colony.insect import Bee, Insect
    from antsvbees.simulation.events import EventLog


@dataclass(eq=False)
class Place:
    """A node in the tunnel graph.

    Attributes:
        name: Display name, e.g. ``"tunnel[0,3]"``.
        water: Whether this place is flooded (immutable).
        exit: Neighbour toward the queen; ``None`` for the queen's place.
        entrance: Neighbour toward the hive; set when that neighbour is built.
        coord: ``(tunnel, step)`` for tunnel places, else ``None``.
        events: Optional sink that insects on this place emit through.
        ant: The non-guard ant, if any.
        guard: The guard ant, if any.
        bees: Bees here in arrival order; index 0 is nearest the queen.
    """

    name: str
    water: bool = False
    exit: Place | None = field(default=None, repr=False)
    entrance: Place | None = field(default=None, repr=False)
    coord: tuple[int, int] | None = None
    events: EventLog | None = field(default=None, repr=False)
    ant: Ant | None = field(default=None, init=False, repr=False)
    guard: Ant | None = field(default=None, init=False, repr=False)
    bees: list[Bee] = field(default_factory=list, init=False, repr=False)

    @property
    def is_water(self) -> bool:
        """Return True if this place drowns non-swimming ants."""
        return self.water

    def get_exit(self) -> Place | None:
        return self.exit

    def set_entrance(self, place: Place) -> None:
        self.entrance = place

    # -- Ants --

    def get_ant(self) -> Ant | None:
        """Return the ant that bees interact with: the guard if present."""
        if self.guard is not None:
            return self.guard
        return self.ant

    def get_guarded_ant(self) -> Ant | None:
        """Return the non-guard ant regardless of any guard on top."""
        return self.ant

    def add_ant(self, ant: Ant) -> bool:
        """Place an ant into its slot.

        Guards go into the guard slot, every other kind into the plain
        slot.  Each slot admits one ant.

        Args:
            ant: The ant to place.

        Returns:
            True if the ant was placed, False if its slot was taken.
        """
        if ant.kind.is_guard:
            if self.guard is not None:
                return False
            self.guard = ant
        else:
            if self.ant is not None:
                return False
            self.ant = ant
        ant.place = self
        return True

    def remove_ant(self, ant: Ant | None = None) -> Ant | None:
        """Detach an ant from this place.

        Args:
            ant: A specific ant to remove.  When omitted, the guard is
                removed if present, otherwise the plain ant.

        Returns:
            The removed ant, or None if nothing matched.
        """
        if ant is None:
            ant = self.get_ant()
        if ant is None:
            return None
        if ant is self.guard:
            self.guard = None
        elif ant is self.ant:
            self.ant = None
        else:
            return None
        ant.place = None
        return ant

    # -- Bees --

    def get_bees(self) -> list[Bee]:
        return self.bees

    def add_bee(self, bee: Bee) -> None:
        self.bees.append(bee)
        bee.place = self

    def remove_bee(self, bee: Bee) -> None:
        """Detach a bee; bees not on this place are ignored."""
        if bee in self.bees:
            self.bees.remove(bee)
            bee.place = None

    def remove_all_bees(self) -> None:
        for bee in self.bees:
            bee.place = None
        self.bees = []

    def exit_bee(self, bee: Bee) -> None:
        """Move a bee one step toward the queen."""
        if self.exit is None:
            return
        self.remove_bee(bee)
        self.exit.add_bee(bee)
        self.emit(
            EventKind.UNIT_MOVED,
            unit=str(bee),
            origin=self.name,
            to=self.exit.name,
        )

    def get_closest_bee(self, max_distance: int, min_distance: int = 0) -> Bee | None:
        """Find the nearest bee walking from here toward the hive.

        Args:
            max_distance: Furthest hop count to inspect (inclusive).
            min_distance: Nearest hop count that qualifies (inclusive).

        Returns:
            The front bee of the first qualifying place, or None.
        """
        place: Place | None = self
        dist = 0
        while place is not None and dist <= max_distance:
            if dist >= min_distance and place.bees:
                return place.bees[0]
            place = place.entrance
            dist += 1
        return None

    def remove_insect(self, insect: Insect) -> None:
        """Detach whichever kind of insect is given."""
        insect.leave(self)

    # -- Terrain --

    def act(self) -> None:
        """Drown ants standing in water.

        The guard always drowns; the plain ant drowns unless it is
        waterproof.
        """
        if not self.water:
            return
        if self.guard is not None:
            self._drown(self.guard)
        if self.ant is not None and not self.ant.kind.waterproof:
            self._drown(self.ant)

    def _drown(self, ant: Ant) -> None:
        self.remove_ant(ant)
        self.emit(EventKind.UNIT_DROWNED, unit=str(ant), place=self.name)

    def emit(self, kind: EventKind, **data: Any) -> None:
        """Forward an event to the attached sink, if there is one."""
        if self.events is not None:
            self.events.emit(kind, **data)

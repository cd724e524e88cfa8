"""Colony — the tunnels, the queen, and the colony's stores.

A Colony owns the tunnel matrix, the food counter and the boost
inventory, and runs the per-turn action phases over everything on the
board.  Commands report failure as a short reason string; ``None``
means success.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from antsvbees.colony.ant import Boost
from antsvbees.simulation.events import EventKind
from antsvbees.world.place import Place

if TYPE_CHECKING:
    from numpy.random import Generator

    from antsvbees.colony.ant import Ant
    from antsvbees.colony.insect import Bee
    from antsvbees.simulation.events import EventLog

NOT_ENOUGH_FOOD = "not enough food"
TUNNEL_OCCUPIED = "tunnel already occupied"
NO_SUCH_BOOST = "no such boost"
NO_ANT = "no Ant at location"


def _default_boosts() -> dict[Boost, int]:
    return {
        Boost.FLYING_LEAF: 1,
        Boost.STICKY_LEAF: 1,
        Boost.ICY_LEAF: 1,
        Boost.BUG_SPRAY: 0,
    }


@dataclass(eq=False)
class Colony:
    """Board and resources for the defending side.

    Attributes:
        food: Food available for deploying ants.
        num_tunnels: Number of tunnels (matrix rows).
        tunnel_length: Places per tunnel (matrix columns).
        moat_frequency: Every n-th place of each tunnel is water;
            0 disables water.
        rng: Random generator shared by growers and the hive.
        events: Optional event sink attached to every place.
        places: Tunnel matrix indexed ``places[tunnel][step]``; step 0
            is next to the queen.
        queen_place: Where the queen lives; bees reaching it win.
        boosts: Boost inventory counts.
    """

    food: int
    num_tunnels: int
    tunnel_length: int
    moat_frequency: int = 0
    rng: Generator = field(default_factory=np.random.default_rng, repr=False)
    events: EventLog | None = field(default=None, repr=False)
    places: list[list[Place]] = field(init=False, repr=False)
    queen_place: Place = field(init=False, repr=False)
    boosts: dict[Boost, int] = field(default_factory=_default_boosts)
    _entrances: list[Place] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Dig each tunnel outward from the queen."""
        self.queen_place = Place("Ant Queen", events=self.events)
        self.places = []
        self._entrances = []
        for tunnel in range(self.num_tunnels):
            row: list[Place] = []
            curr = self.queen_place
            for step in range(self.tunnel_length):
                freq = self.moat_frequency
                water = freq != 0 and (step + 1) % freq == 0
                type_name = "water" if water else "tunnel"
                prev = curr
                curr = Place(
                    f"{type_name}[{tunnel},{step}]",
                    water=water,
                    exit=prev,
                    coord=(tunnel, step),
                    events=self.events,
                )
                # The queen's place is shared; its entrance is the last
                # tunnel dug, which no walk ever follows.
                prev.set_entrance(curr)
                row.append(curr)
            self.places.append(row)
            self._entrances.append(curr)

    # -- Queries --

    def get_food(self) -> int:
        return self.food

    def get_places(self) -> list[list[Place]]:
        return self.places

    def get_entrances(self) -> list[Place]:
        """Return the hive-side end of every tunnel."""
        return self._entrances

    def get_queen_place(self) -> Place:
        return self.queen_place

    def queen_has_bees(self) -> bool:
        return len(self.queen_place.bees) > 0

    def get_boosts(self) -> dict[Boost, int]:
        return self.boosts

    def iter_places(self) -> list[Place]:
        """Return every tunnel place in row-major order."""
        return [place for row in self.places for place in row]

    def get_all_ants(self) -> list[Ant]:
        """Return the top ant of each place (guards shadow the ant below)."""
        ants = []
        for place in self.iter_places():
            ant = place.get_ant()
            if ant is not None:
                ants.append(ant)
        return ants

    def get_all_bees(self) -> list[Bee]:
        """Return every bee in the tunnels, row-major then arrival order."""
        return [bee for place in self.iter_places() for bee in place.bees]

    # -- Resources --

    def increase_food(self, amount: int) -> None:
        self.food += amount
        self._emit(EventKind.FOOD_FOUND, amount=amount, food=self.food)

    def add_boost(self, boost: Boost) -> None:
        self.boosts[boost] = self.boosts.get(boost, 0) + 1
        self._emit(EventKind.BOOST_FOUND, boost=boost.value, count=self.boosts[boost])

    # -- Commands --

    def deploy_ant(self, ant: Ant, place: Place) -> str | None:
        """Place ``ant`` and pay its food cost.

        Returns:
            None on success, else ``"not enough food"`` or
            ``"tunnel already occupied"``; failures change nothing.
        """
        if self.food < ant.food_cost:
            return NOT_ENOUGH_FOOD
        if not place.add_ant(ant):
            return TUNNEL_OCCUPIED
        self.food -= ant.food_cost
        self._emit(EventKind.ANT_DEPLOYED, unit=str(ant), food=self.food)
        return None

    def remove_ant(self, place: Place) -> Ant | None:
        ant = place.remove_ant()
        if ant is not None:
            self._emit(EventKind.ANT_REMOVED, unit=ant.name, place=place.name)
        return ant

    def apply_boost(self, boost: Boost | None, place: Place) -> str | None:
        """Hand a boost leaf to the ant at ``place``.

        The inventory count is only checked, never spent.

        Returns:
            None on success, else ``"no such boost"`` or
            ``"no Ant at location"``.
        """
        if boost is None or self.boosts.get(boost, 0) < 1:
            return NO_SUCH_BOOST
        ant = place.get_ant()
        if ant is None:
            return NO_ANT
        ant.set_boost(boost)
        return None

    # -- Turn phases --

    def ants_act(self) -> None:
        """Let every ant act once, guards first handing off to their ward.

        ``get_all_ants`` reports only the guard of a guarded place, so
        the ward is reached exactly once, through its guard.
        """
        for ant in self.get_all_ants():
            if ant.kind.is_guard:
                guarded = ant.get_guarded()
                if guarded is not None and guarded.is_alive:
                    guarded.act(self)
            if ant.is_alive and ant.place is not None:
                ant.act(self)

    def bees_act(self) -> None:
        """Let every bee in the tunnels act once.

        The roster is fixed before anyone moves, so a bee stepping into
        a later place is not visited twice.
        """
        for bee in self.get_all_bees():
            if bee.is_alive and bee.place is not None:
                bee.act(self)

    def places_act(self) -> None:
        """Resolve terrain for every place in row-major order."""
        for place in self.iter_places():
            place.act()

    def _emit(self, kind: EventKind, **data: object) -> None:
        if self.events is not None:
            self.events.emit(kind, **data)

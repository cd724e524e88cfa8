"""Ant -- the player's stationary defenders.

Five kinds of ant exist, each tagged by an ``AntKind`` that fixes its
armor and food cost:

- **Grower**: digs each turn, turning up food or a boost leaf.
- **Thrower**: throws a leaf at the nearest bee within three places.
- **Scuba**: throws like a Thrower and survives flooded places.
- **Eater**: swallows a bee on its own place and digests it for three
  turns.  Taking damage early in digestion makes it cough the bee up.
- **Guard**: occupies a separate slot on top of another ant and takes
  every sting meant for it.  Does nothing on its own turn.

A boost leaf held by an ant modifies its next throw:

- ``FlyingLeaf`` extends throwing range from 3 to 5.
- ``StickyLeaf`` leaves the hit bee stuck (cannot move) for one act.
- ``IcyLeaf`` leaves the hit bee cold (cannot sting) for one act.
- ``BugSpray`` deals 10 damage to every bee on the ant's place, then
  10 to the ant itself.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from antsvbees.colony.insect import BeeStatus, Insect
from antsvbees.simulation.events import EventKind
from antsvbees.world.place import Place

if TYPE_CHECKING:
    from antsvbees.colony.colony import Colony
    from antsvbees.colony.insect import Bee

# -- Constants ---------------------------------------------------------------

_THROW_DAMAGE = 1
_THROW_RANGE = 3
_FLYING_RANGE = 5
_SPRAY_DAMAGE = 10
_DIGEST_TURNS = 3

# Grower roll thresholds (cumulative, upper-exclusive)
_FOOD_ROLL = 0.6
_FLYING_ROLL = 0.7
_STICKY_ROLL = 0.8
_ICY_ROLL = 0.9
_SPRAY_ROLL = 0.95


class AntKind(Enum):
    """Closed set of ant variants with their fixed stats."""

    GROWER = ("Grower", 1, 1)
    THROWER = ("Thrower", 1, 4)
    EATER = ("Eater", 2, 4)
    SCUBA = ("Scuba", 1, 5)
    GUARD = ("Guard", 2, 4)

    def __init__(self, label: str, armor: int, food_cost: int) -> None:
        self.label = label
        self.armor = armor
        self.food_cost = food_cost

    @property
    def is_guard(self) -> bool:
        """Return True for the kind that occupies the guard slot."""
        return self is AntKind.GUARD

    @property
    def waterproof(self) -> bool:
        """Return True for the kind that survives flooded places."""
        return self is AntKind.SCUBA


class Boost(Enum):
    """Leaf boosts a Grower can dig up and the player can hand out."""

    FLYING_LEAF = "FlyingLeaf"
    STICKY_LEAF = "StickyLeaf"
    ICY_LEAF = "IcyLeaf"
    BUG_SPRAY = "BugSpray"

    @classmethod
    def parse(cls, name: str) -> Boost | None:
        """Resolve a user-supplied boost name, ignoring case.

        Accepts either the display value (``"FlyingLeaf"``) or the member
        name (``"FLYING_LEAF"``).  Returns None for anything else.
        """
        key = name.strip().lower()
        for boost in cls:
            if key in (boost.value.lower(), boost.name.lower()):
                return boost
        return None


class Ant(Insect):
    """Base class for all ants.

    Attributes:
        kind: Variant tag carrying armor and food cost.
        boost: Boost leaf held for the next throw, if any.
    """

    kind: AntKind

    def __init__(self, place: Place | None = None) -> None:
        super().__init__(self.kind.armor, place)
        self.boost: Boost | None = None

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.kind.label

    @property
    def food_cost(self) -> int:
        return self.kind.food_cost

    def get_food_cost(self) -> int:
        return self.kind.food_cost

    def set_boost(self, boost: Boost) -> None:
        self.boost = boost
        self.emit(EventKind.BOOST_APPLIED, unit=str(self), boost=boost.value)

    def leave(self, place: Place) -> None:
        place.remove_ant(self)


class GrowerAnt(Ant):
    """Digs up food or a boost leaf every turn."""

    kind = AntKind.GROWER

    def act(self, colony: Colony | None = None) -> None:
        """Roll once and apply the matching find to the colony.

        The roll is mapped onto fixed, mutually exclusive bands:
        60% food, 10% each for the three leaves, 5% bug spray and 5%
        nothing at all.
        """
        if colony is None:
            return
        roll = float(colony.rng.random())
        if roll < _FOOD_ROLL:
            colony.increase_food(1)
        elif roll < _FLYING_ROLL:
            colony.add_boost(Boost.FLYING_LEAF)
        elif roll < _STICKY_ROLL:
            colony.add_boost(Boost.STICKY_LEAF)
        elif roll < _ICY_ROLL:
            colony.add_boost(Boost.ICY_LEAF)
        elif roll < _SPRAY_ROLL:
            colony.add_boost(Boost.BUG_SPRAY)


class ThrowerAnt(Ant):
    """Throws leaves at the closest bee in range."""

    kind = AntKind.THROWER
    damage = _THROW_DAMAGE

    def act(self, colony: Colony | None = None) -> None:
        if self.place is None:
            return
        if self.boost is Boost.BUG_SPRAY:
            self._spray()
            return

        reach = _FLYING_RANGE if self.boost is Boost.FLYING_LEAF else _THROW_RANGE
        target = self.place.get_closest_bee(reach)
        # An unused leaf stays in hand until a throw lands
        if target is None:
            return
        target.reduce_armor(self.damage)
        if self.boost is Boost.STICKY_LEAF:
            target.set_status(BeeStatus.STUCK)
        if self.boost is Boost.ICY_LEAF:
            target.set_status(BeeStatus.COLD)
        self.boost = None

    def _spray(self) -> None:
        """Hit every bee on this place for spray damage, then self."""
        self.emit(EventKind.BUG_SPRAY, unit=str(self))
        target = self.place.get_closest_bee(0)
        while target is not None:
            target.reduce_armor(_SPRAY_DAMAGE)
            target = self.place.get_closest_bee(0)
        self.reduce_armor(_SPRAY_DAMAGE)


class ScubaAnt(ThrowerAnt):
    """A Thrower that does not drown."""

    kind = AntKind.SCUBA


class EaterAnt(Ant):
    """Swallows a bee whole and digests it over three turns.

    Attributes:
        turns_eating: 0 when empty, otherwise the digestion counter.
        stomach: Off-board holding place for the swallowed bee.
    """

    kind = AntKind.EATER

    def __init__(self, place: Place | None = None) -> None:
        super().__init__(place)
        self.turns_eating = 0
        self.stomach = Place("stomach")

    def is_full(self) -> bool:
        return len(self.stomach.bees) > 0

    def act(self, colony: Colony | None = None) -> None:
        if self.place is None:
            return
        if self.turns_eating == 0:
            target = self.place.get_closest_bee(0)
            if target is not None:
                self.place.remove_bee(target)
                self.stomach.add_bee(target)
                self.turns_eating = 1
                self.emit(EventKind.BEE_EATEN, unit=str(self), bee=repr(target))
        elif self.turns_eating > _DIGEST_TURNS:
            self._release()
            self.turns_eating = 0
        else:
            self.turns_eating += 1

    def reduce_armor(self, amount: int) -> bool:
        """Take damage, coughing up the bee if digestion is early.

        A surviving eater coughs up a bee swallowed last turn and skips
        ahead to the end of digestion.  A dying eater coughs up any bee
        it has held for one or two turns before it is removed.
        """
        if self.armor - amount > 0:
            self.armor -= amount
            self.emit(
                EventKind.UNIT_DAMAGED,
                unit=str(self),
                amount=amount,
                armor=self.armor,
            )
            if self.turns_eating == 1:
                self._release()
                self.turns_eating = _DIGEST_TURNS
            return False
        if 0 < self.turns_eating <= 2:
            self._release()
        return super().reduce_armor(amount)

    def _release(self) -> Bee | None:
        """Move the held bee from the stomach back onto this place."""
        if not self.stomach.bees or self.place is None:
            return None
        bee = self.stomach.bees[0]
        self.stomach.remove_bee(bee)
        self.place.add_bee(bee)
        self.emit(EventKind.BEE_RELEASED, unit=str(self), bee=str(bee))
        return bee


class GuardAnt(Ant):
    """Shields the ant beneath it; never attacks."""

    kind = AntKind.GUARD

    def get_guarded(self) -> Ant | None:
        if self.place is None:
            return None
        return self.place.get_guarded_ant()

    def act(self, colony: Colony | None = None) -> None:
        pass


ANT_TYPES: dict[str, type[Ant]] = {
    cls.kind.label.lower(): cls
    for cls in (GrowerAnt, ThrowerAnt, EaterAnt, ScubaAnt, GuardAnt)
}


def make_ant(type_name: str) -> Ant | None:
    """Build a fresh ant from a case-insensitive type name.

    Args:
        type_name: One of grower, thrower, eater, scuba, guard.

    Returns:
        A new off-board Ant, or None if the name is not recognised.
    """
    cls = ANT_TYPES.get(type_name.strip().lower())
    if cls is None:
        return None
    return cls()

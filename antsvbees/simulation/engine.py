"""Game — the turn loop and the command surface.

Owns the colony, the hive and the turn counter, and advances the board
in the fixed phase order:

1. Ants act (on the board as the previous turn left it)
2. Bees act (sting or advance)
3. Places act (water drowns what stands in it)
4. The hive releases this turn's wave (actionable from next turn)

Commands take the same strings a player types (``"thrower"``,
``"0,3"``) and return a reason string on failure, None on success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from antsvbees.colony.ant import Boost, make_ant
from antsvbees.colony.colony import Colony
from antsvbees.simulation.config import GameConfig
from antsvbees.simulation.events import EventKind, EventLog
from antsvbees.world.hive import Hive
from antsvbees.world.place import Place

logger = logging.getLogger(__name__)

UNKNOWN_ANT_TYPE = "unknown ant type"
ILLEGAL_LOCATION = "illegal location"


@dataclass(eq=False)
class Game:
    """Top-level coordinator for one game.

    Attributes:
        colony: The defending colony and its tunnels.
        hive: The bees' spawn pool.
        events: Sink for everything that happens; shared with the
            colony's places and the hive.
        turn: Number of completed turns.
    """

    colony: Colony
    hive: Hive
    events: EventLog = field(default_factory=EventLog)
    turn: int = 0

    def __post_init__(self) -> None:
        """Attach the event sink to any place built without one."""
        if self.colony.events is None:
            self.colony.events = self.events
        places = [self.hive, self.colony.queen_place, *self.colony.iter_places()]
        for place in places:
            if place.events is None:
                place.events = self.events
        self.events.turn = self.turn

    @classmethod
    def from_config(cls, config: GameConfig, events: EventLog | None = None) -> Game:
        """Build a ready-to-play game from a configuration.

        Args:
            config: Board, bee and wave setup.
            events: Sink to use; a fresh one is created if omitted.

        Returns:
            A new Game at turn 0 with every wave waiting in the hive.
        """
        config.validate()
        events = events if events is not None else EventLog()
        colony = Colony(
            food=config.starting_food,
            num_tunnels=config.num_tunnels,
            tunnel_length=config.tunnel_length,
            moat_frequency=config.moat_frequency,
            rng=np.random.default_rng(config.seed),
            events=events,
        )
        hive = Hive(
            bee_armor=config.bee_armor,
            bee_damage=config.bee_damage,
            events=events,
        )
        for turn, count in sorted(config.waves.items()):
            hive.add_wave(turn, count)
        logger.info(
            "New game: %d tunnel(s) x %d, %d food, %d bee(s) in %d wave(s)",
            config.num_tunnels,
            config.tunnel_length,
            config.starting_food,
            len(hive.bees),
            len(config.waves),
        )
        return cls(colony=colony, hive=hive, events=events)

    # -- Turn cycle --

    def take_turn(self) -> None:
        """Advance the game by one turn."""
        self.events.turn = self.turn
        self.colony.ants_act()
        self.colony.bees_act()
        self.colony.places_act()
        self.hive.invade(self.colony, self.turn)
        self.events.emit(EventKind.TURN_ENDED, turn=self.turn)
        self.turn += 1
        self.events.turn = self.turn

    def game_is_won(self) -> bool | None:
        """Return False if the queen is reached, True if no bees remain.

        Returns:
            False (lost) when any bee is on the queen's place, True (won)
            when no bee is left in the tunnels or the hive, otherwise
            None while the game is undecided.
        """
        if self.colony.queen_has_bees():
            return False
        if len(self.colony.get_all_bees()) + len(self.hive.bees) == 0:
            return True
        return None

    # -- Commands --

    def place_at(self, coordinate: str) -> Place:
        """Resolve a ``"row,col"`` coordinate to a tunnel place.

        Raises:
            ValueError: If the string is malformed or out of range.
        """
        parts = [part.strip() for part in coordinate.split(",")]
        if len(parts) != 2 or not all(
            part.isascii() and part.isdecimal() for part in parts
        ):
            msg = f"expected 'row,col', got {coordinate!r}"
            raise ValueError(msg)
        row, col = (int(part) for part in parts)
        places = self.colony.get_places()
        if not (0 <= row < len(places) and 0 <= col < len(places[row])):
            msg = f"{coordinate!r} is outside the colony"
            raise ValueError(msg)
        return places[row][col]

    def deploy_ant(self, ant_type: str, coordinate: str) -> str | None:
        """Deploy a new ant of ``ant_type`` at ``coordinate``."""
        ant = make_ant(ant_type)
        if ant is None:
            return UNKNOWN_ANT_TYPE
        try:
            place = self.place_at(coordinate)
        except ValueError:
            return ILLEGAL_LOCATION
        return self.colony.deploy_ant(ant, place)

    def remove_ant(self, coordinate: str) -> str | None:
        """Remove the top ant at ``coordinate``; empty places are a no-op."""
        try:
            place = self.place_at(coordinate)
        except ValueError:
            return ILLEGAL_LOCATION
        self.colony.remove_ant(place)
        return None

    def boost_ant(self, boost_type: str, coordinate: str) -> str | None:
        """Give the ant at ``coordinate`` the named boost."""
        try:
            place = self.place_at(coordinate)
        except ValueError:
            return ILLEGAL_LOCATION
        return self.colony.apply_boost(Boost.parse(boost_type), place)

    # -- Queries --

    def get_turn(self) -> int:
        return self.turn

    def get_places(self) -> list[list[Place]]:
        return self.colony.get_places()

    def get_food(self) -> int:
        return self.colony.get_food()

    def get_hive_bees_count(self) -> int:
        return len(self.hive.bees)

    def get_boost_names(self) -> list[str]:
        """Return the names of boosts the colony holds at least one of."""
        boosts = self.colony.get_boosts()
        return [boost.value for boost, count in boosts.items() if count > 0]

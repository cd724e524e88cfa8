"""Console client — text board and an interactive command shell.

The board is drawn with one column per tunnel place, queen side on the
left and the hive on the right.  Colour comes from colorama escape
codes and can be turned off for plain terminals and tests.
"""

from __future__ import annotations

import cmd
from typing import TYPE_CHECKING, TextIO

from colorama import Back, Fore, Style

from antsvbees.colony.ant import ANT_TYPES, AntKind
from antsvbees.simulation.events import EventKind

if TYPE_CHECKING:
    from antsvbees.colony.ant import Ant
    from antsvbees.simulation.engine import Game
    from antsvbees.simulation.events import GameEvent

_ANT_GLYPHS: dict[AntKind, tuple[str, str]] = {
    AntKind.GROWER: ("G", Fore.GREEN),
    AntKind.THROWER: ("T", Fore.RED),
    AntKind.EATER: ("E", Fore.MAGENTA),
    AntKind.SCUBA: ("S", Fore.CYAN),
}

_WIN_MESSAGE = "Yaaaay---\nAll bees are vanquished. You win!\n"
_LOSS_MESSAGE = "Bzzzzz---\nThe ant queen has perished! Please try again.\n"


def _paint(text: str, codes: str, *, color: bool) -> str:
    if not color:
        return text
    return f"{codes}{text}{Style.RESET_ALL}"


def icon_for(ant: Ant | None, *, color: bool = True) -> str:
    """Return the one-character glyph for the top ant of a place.

    A guard shows the glyph of the ant it protects, highlighted, or
    ``x`` when it protects nothing.  A full eater is highlighted too.
    """
    if ant is None:
        return " "
    if ant.kind.is_guard:
        guarded = ant.get_guarded()
        inner = icon_for(guarded, color=False) if guarded is not None else "x"
        return _paint(inner, Back.WHITE + Fore.BLACK, color=color)
    glyph, colour = _ANT_GLYPHS.get(ant.kind, ("?", ""))
    if ant.kind is AntKind.EATER and ant.is_full():
        colour = Fore.YELLOW + Back.MAGENTA
    return _paint(glyph, colour, color=color)


def _bee_cell(count: int, *, color: bool) -> str:
    if count == 0:
        return "  "
    icon = _paint("B", Back.YELLOW + Fore.BLACK, color=color)
    return icon + (str(count) if count > 1 else " ")


def render_board(game: Game, *, color: bool = True) -> str:
    """Draw the whole board as a multi-line string.

    Args:
        game: Game to draw.
        color: Emit ANSI colour codes.

    Returns:
        The rendered board, ending with a newline.
    """
    places = game.get_places()
    tunnel_length = len(places[0])
    ruler = "     " + "    ".join(str(i) for i in range(tunnel_length))

    lines = [
        _paint("The Colony is under attack!", Style.BRIGHT, color=color),
        f"Turn: {game.get_turn()}, Food: {game.get_food()}, "
        f"Boosts available: [{','.join(game.get_boost_names())}]",
        ruler + "      Hive",
    ]
    for i, row in enumerate(places):
        border = "    " + "=====" * tunnel_length
        if i == 0:
            hive_count = game.get_hive_bees_count()
            if hive_count:
                border += "    " + _bee_cell(hive_count, color=color)
        lines.append(border)

        cells = "".join(
            icon_for(place.get_ant(), color=color)
            + " "
            + _bee_cell(len(place.get_bees()), color=color)
            + " "
            for place in row
        )
        lines.append(f"{i})  {cells}")

        floor = "".join(
            (_paint("~~~~", Back.CYAN, color=color) if place.is_water else "====") + " "
            for place in row
        )
        lines.append("    " + floor)
    lines.append(ruler)
    return "\n".join(lines) + "\n"


def describe_event(event: GameEvent) -> str:
    """Turn an event into a line of narration."""
    d = event.data
    match event.kind:
        case EventKind.UNIT_DAMAGED:
            return f"{d['unit']} takes {d['amount']} damage ({d['armor']} armor left)"
        case EventKind.UNIT_DIED:
            return f"{d['unit']} ran out of armor and expired"
        case EventKind.UNIT_DROWNED:
            return f"{d['unit']} drowned"
        case EventKind.UNIT_MOVED:
            return f"{d['unit']} flies in from {d['origin']}"
        case EventKind.BOOST_FOUND:
            return f"Found a {d['boost']}!"
        case EventKind.FOOD_FOUND:
            return f"Found {d['amount']} food"
        case EventKind.BOOST_APPLIED:
            return f"{d['unit']} is given a {d['boost']}"
        case EventKind.BEE_STATUS:
            return f"{d['unit']} is {d['status'].lower()}!"
        case EventKind.BEE_EATEN:
            return f"{d['unit']} eats {d['bee']}!"
        case EventKind.BEE_RELEASED:
            return f"{d['unit']} coughs up {d['bee']}!"
        case EventKind.BUG_SPRAY:
            return f"{d['unit']} sprays bug repellant everywhere!"
        case EventKind.WAVE_SPAWNED:
            return f"{d['count']} bee(s) leave the hive"
        case _:
            return f"{event.kind.name.lower()}: {d}"


class GameShell(cmd.Cmd):
    """Interactive prompt for playing a game in the terminal."""

    intro = None
    prompt = "AvB $ "

    def __init__(
        self,
        game: Game,
        *,
        color: bool = True,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.game = game
        self.color = color
        if color:
            self.prompt = _paint("AvB $", Fore.GREEN, color=True) + " "

    def _say(self, text: str) -> None:
        print(text, file=self.stdout)

    def _narrate(self) -> None:
        for event in self.game.events.drain():
            if event.kind is not EventKind.TURN_ENDED:
                self._say(describe_event(event))

    def preloop(self) -> None:
        self._say(render_board(self.game, color=self.color))

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> None:
        self._say(f"Unknown command: {line}")

    # -- Commands --

    def do_show(self, arg: str) -> None:
        """show: Shows the current game board."""
        self._say(render_board(self.game, color=self.color))

    def do_deploy(self, arg: str) -> None:
        """deploy <antType> <row,col>: Deploys an ant to a tunnel place."""
        args = arg.split()
        if len(args) != 2:
            self._say("Usage: deploy <antType> <row,col>")
            return
        error = self.game.deploy_ant(args[0], args[1])
        self.game.events.clear()
        if error:
            self._say(f"Invalid deployment: {error}.")
        else:
            self._say(render_board(self.game, color=self.color))

    do_add = do_deploy
    do_d = do_deploy

    def complete_deploy(
        self,
        text: str,
        line: str,
        begidx: int,
        endidx: int,
    ) -> list[str]:
        names = [cls.kind.label for cls in ANT_TYPES.values()]
        return [n for n in names if n.lower().startswith(text.lower())]

    complete_add = complete_deploy
    complete_d = complete_deploy

    def do_remove(self, arg: str) -> None:
        """remove <row,col>: Removes the ant from a tunnel place."""
        error = self.game.remove_ant(arg.strip())
        self.game.events.clear()
        if error:
            self._say(f"Invalid removal: {error}.")
        else:
            self._say(render_board(self.game, color=self.color))

    do_rm = do_remove

    def do_boost(self, arg: str) -> None:
        """boost <boost> <row,col>: Applies a boost to the ant at a place."""
        args = arg.split()
        if len(args) != 2:
            self._say("Usage: boost <boost> <row,col>")
            return
        error = self.game.boost_ant(args[0], args[1])
        if error:
            self._say(f"Invalid boost: {error}")
        else:
            self._narrate()

    do_b = do_boost

    def complete_boost(
        self,
        text: str,
        line: str,
        begidx: int,
        endidx: int,
    ) -> list[str]:
        names = self.game.get_boost_names()
        return [n for n in names if n.lower().startswith(text.lower())]

    complete_b = complete_boost

    def do_turn(self, arg: str) -> bool:
        """turn: Ends the current turn. Ants and bees will act."""
        self.game.take_turn()
        self._narrate()
        self._say(render_board(self.game, color=self.color))

        won = self.game.game_is_won()
        if won is True:
            self._say(_paint(_WIN_MESSAGE, Fore.GREEN, color=self.color))
            return True
        if won is False:
            self._say(_paint(_LOSS_MESSAGE, Fore.YELLOW, color=self.color))
            return True
        return False

    do_t = do_turn
    do_end = do_turn

    def do_quit(self, arg: str) -> bool:
        """quit: Leaves the game."""
        return True

    do_EOF = do_quit

"""Pygame 2D view of an Ants vs. Bees game.

Draws the tunnel matrix with the queen on the left and the hive on the
right, and turns mouse and keyboard input into game commands.  Unlike
a real-time simulation the game only advances when the player ends a
turn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from antsvbees.colony.ant import Ant
    from antsvbees.simulation.engine import Game
    from antsvbees.world.place import Place

from antsvbees.colony.ant import AntKind, Boost

# Colour palette
_BG = (30, 20, 10)
_TUNNEL = (90, 65, 40)
_WATER = (40, 90, 160)
_QUEEN = (140, 40, 140)
_HIVE = (200, 160, 40)
_GRID_LINE = (40, 30, 20)
_BEE = (255, 210, 40)
_TEXT = (200, 200, 200)

# Ant colours by kind
_ANT_COLOURS: dict[AntKind, tuple[int, int, int]] = {
    AntKind.GROWER: (100, 200, 100),
    AntKind.THROWER: (255, 80, 80),
    AntKind.EATER: (200, 100, 255),
    AntKind.SCUBA: (80, 220, 255),
    AntKind.GUARD: (230, 230, 230),
}

# Bee armor shading (pale -> saturated)
_ARMOR_LO = np.array([120, 100, 30], dtype=np.float64)
_ARMOR_HI = np.array([255, 210, 40], dtype=np.float64)

_KEY_KINDS: dict[int, AntKind] = {
    pygame.K_1: AntKind.GROWER,
    pygame.K_2: AntKind.THROWER,
    pygame.K_3: AntKind.EATER,
    pygame.K_4: AntKind.SCUBA,
    pygame.K_5: AntKind.GUARD,
}


class PygameRenderer:
    """Renders a Game into a Pygame window and forwards player input.

    Attributes:
        game: The game to display and control.
        cell_size: Pixel size of each tunnel place.
        screen: The Pygame display surface.
        selected_kind: Ant kind placed by a left click.
        selected_boost: Boost applied by a middle click.
        message: Last command outcome shown in the side panel.
    """

    _BOOST_CYCLE: ClassVar[list[Boost]] = list(Boost)

    def __init__(self, game: Game, cell_size: int = 64) -> None:
        """Initialise the renderer.

        Args:
            game: The game to render.
            cell_size: Pixel width/height per tunnel place.
        """
        self.game = game
        self.cell_size = cell_size
        self.selected_kind = AntKind.THROWER
        self.selected_boost = Boost.FLYING_LEAF
        self.message = ""
        self.outcome: bool | None = None

        places = game.get_places()
        self._rows = len(places)
        self._cols = len(places[0])
        # One column for the queen on the left, one for the hive on the right
        self._board_w = (self._cols + 2) * cell_size
        self._board_h = self._rows * cell_size
        self._panel_width = 240
        self._win_w = self._board_w + self._panel_width
        self._win_h = max(self._board_h, 420)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Ants vs. Bees")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.glyph_font = pygame.font.SysFont("monospace", cell_size // 3, bold=True)
        self.running = True

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        pygame.quit()

    def place_at_pixel(self, px: int, py: int) -> str | None:
        """Return the ``"row,col"`` coordinate under a pixel, if any."""
        col = px // self.cell_size - 1
        row = py // self.cell_size
        if 0 <= row < self._rows and 0 <= col < self._cols:
            return f"{row},{col}"
        return None

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE and self.outcome is None:
                    self.game.take_turn()
                    self.game.events.clear()
                    self.outcome = self.game.game_is_won()
                    self.message = f"Turn {self.game.get_turn()}"
                elif event.key == pygame.K_b:
                    idx = self._BOOST_CYCLE.index(self.selected_boost)
                    idx = (idx + 1) % len(self._BOOST_CYCLE)
                    self.selected_boost = self._BOOST_CYCLE[idx]
                elif event.key in _KEY_KINDS:
                    self.selected_kind = _KEY_KINDS[event.key]
            elif event.type == pygame.MOUSEBUTTONDOWN and self.outcome is None:
                coordinate = self.place_at_pixel(*event.pos)
                if coordinate is None:
                    continue
                if event.button == 1:
                    error = self.game.deploy_ant(self.selected_kind.label, coordinate)
                elif event.button == 2:
                    error = self.game.boost_ant(self.selected_boost.value, coordinate)
                elif event.button == 3:
                    error = self.game.remove_ant(coordinate)
                else:
                    continue
                self.message = error or "OK"

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_terrain()
        for row in self.game.get_places():
            for place in row:
                self._draw_place(place)
        self._draw_info_panel()
        pygame.display.flip()

    def _cell_rect(self, row: int, col: int) -> tuple[int, int, int, int]:
        cs = self.cell_size
        return ((col + 1) * cs, row * cs, cs, cs)

    def _draw_terrain(self) -> None:
        """Draw queen, tunnel, water and hive cells."""
        cs = self.cell_size
        pygame.draw.rect(self.screen, _QUEEN, (0, 0, cs, self._board_h))
        pygame.draw.rect(
            self.screen,
            _HIVE,
            ((self._cols + 1) * cs, 0, cs, self._board_h),
        )
        for row in self.game.get_places():
            for place in row:
                r, c = place.coord
                colour = _WATER if place.is_water else _TUNNEL
                rect = self._cell_rect(r, c)
                pygame.draw.rect(self.screen, colour, rect)
                pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)

        queen_bees = len(self.game.colony.get_queen_place().get_bees())
        self._blit_centered(f"Q{queen_bees or ''}", (cs // 2, self._board_h // 2))
        hive_bees = self.game.get_hive_bees_count()
        self._blit_centered(
            f"H{hive_bees}",
            ((self._cols + 1) * cs + cs // 2, self._board_h // 2),
        )

    def _draw_place(self, place: Place) -> None:
        """Draw the ants (left half) and bees (right half) of a place."""
        r, c = place.coord
        x, y, cs, _ = self._cell_rect(r, c)
        ant = place.get_ant()
        if ant is not None:
            self._draw_ant(ant, (x + cs // 4, y + cs // 2))

        bees = place.get_bees()
        if bees:
            # Shade by the front bee's remaining armor
            t = min(bees[0].armor / max(self.game.hive.bee_armor, 1), 1.0)
            colour = _ARMOR_LO + t * (_ARMOR_HI - _ARMOR_LO)
            centre = (x + 3 * cs // 4, y + cs // 2)
            pygame.draw.circle(
                self.screen,
                colour.astype(int).tolist(),
                centre,
                cs // 6,
            )
            if len(bees) > 1:
                self._blit_centered(str(len(bees)), (centre[0], y + cs // 5))

    def _draw_ant(self, ant: Ant, centre: tuple[int, int]) -> None:
        radius = self.cell_size // 6
        guarded = ant.get_guarded() if ant.kind.is_guard else None
        shown = guarded if guarded is not None else ant
        pygame.draw.circle(self.screen, _ANT_COLOURS[shown.kind], centre, radius)
        if ant.kind.is_guard:
            ring = _ANT_COLOURS[AntKind.GUARD]
            pygame.draw.circle(self.screen, ring, centre, radius + 3, 2)
        if shown.kind is AntKind.EATER and shown.is_full():
            pygame.draw.circle(self.screen, _BEE, centre, radius // 2)
        label = self.glyph_font.render(shown.kind.label[0], True, _BG)
        self.screen.blit(label, label.get_rect(center=centre))

    def _blit_centered(self, text: str, centre: tuple[int, int]) -> None:
        surf = self.font.render(text, True, _TEXT)
        self.screen.blit(surf, surf.get_rect(center=centre))

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self._board_w + 10
        y = 10

        lines = [
            f"Turn: {self.game.get_turn()}",
            f"Food: {self.game.get_food()}",
            f"Hive: {self.game.get_hive_bees_count()} bee(s)",
            "",
            "--- Boosts ---",
        ]
        for boost, count in self.game.colony.get_boosts().items():
            lines.append(f"  {boost.value}: {count}")

        lines += [
            "",
            f"Ant:   {self.selected_kind.label} ({self.selected_kind.food_cost})",
            f"Boost: {self.selected_boost.value}",
            f"> {self.message}",
        ]
        if self.outcome is True:
            lines.append("All bees vanquished. You win!")
        elif self.outcome is False:
            lines.append("The queen has perished!")

        lines += [
            "",
            "--- Controls ---",
            "1-5: select ant",
            "L click: deploy",
            "R click: remove",
            "B: cycle boost",
            "M click: boost",
            "SPACE: end turn",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

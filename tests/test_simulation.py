"""Tests for antsvbees.simulation - config loading and the Game loop."""

from pathlib import Path

import numpy as np
import pytest

from antsvbees.colony.ant import Boost, ThrowerAnt
from antsvbees.colony.colony import Colony
from antsvbees.colony.insect import Bee
from antsvbees.simulation.config import GameConfig
from antsvbees.simulation.engine import ILLEGAL_LOCATION, UNKNOWN_ANT_TYPE, Game
from antsvbees.world.hive import Hive


def _small_game(food: int = 10, length: int = 3, hive: Hive | None = None) -> Game:
    colony = Colony(
        food=food,
        num_tunnels=1,
        tunnel_length=length,
        rng=np.random.default_rng(0),
    )
    return Game(colony=colony, hive=hive or Hive(bee_armor=3, bee_damage=1))


class TestGameConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = GameConfig()
        assert cfg.seed is None
        assert cfg.starting_food == 10
        assert cfg.num_tunnels == 3
        assert cfg.tunnel_length == 8
        assert cfg.waves[2] == 1

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "seed: 99\nnum_tunnels: 2\ntunnel_length: 5\nwaves:\n  1: 2\n  4: 3\n",
        )
        cfg = GameConfig.from_yaml(yaml_file)
        assert cfg.seed == 99
        assert cfg.num_tunnels == 2
        assert cfg.tunnel_length == 5
        assert cfg.starting_food == 10
        assert cfg.waves == {1: 2, 4: 3}

    def test_from_yaml_wave_list(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "waves:\n  - {turn: 0, count: 1}\n  - {turn: 3, count: 2}\n",
        )
        cfg = GameConfig.from_yaml(yaml_file)
        assert cfg.waves == {0: 1, 3: 2}

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert GameConfig.from_yaml(yaml_file) == GameConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            GameConfig.from_yaml(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "text",
        [
            "num_tunnels: 0\n",
            "tunnel_length: -1\n",
            "starting_food: -5\n",
            "waves:\n  -1: 2\n",
            "waves:\n  3: 0\n",
            "bee_armor: 0\n",
            "bee_damage: -1\n",
            "waves:\n  - {turn: 2, count: 1}\n  - {turn: 2, count: 3}\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, text: str) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text(text)
        with pytest.raises(ValueError):
            GameConfig.from_yaml(yaml_file)

    def test_shipped_configs_load(self) -> None:
        root = Path(__file__).resolve().parent.parent / "config"
        for path in sorted(root.glob("*.yaml")):
            Game.from_config(GameConfig.from_yaml(path))


class TestGameSetup:
    """Tests for building games."""

    def test_from_config(self, game: Game, default_config: GameConfig) -> None:
        assert game.get_turn() == 0
        assert game.get_food() == default_config.starting_food
        assert len(game.get_places()) == default_config.num_tunnels
        assert game.get_hive_bees_count() == sum(default_config.waves.values())

    def test_boost_names(self, game: Game) -> None:
        assert game.get_boost_names() == ["FlyingLeaf", "StickyLeaf", "IcyLeaf"]

    def test_invalid_config_rejected(self) -> None:
        with pytest.raises(ValueError):
            Game.from_config(GameConfig(num_tunnels=0))

    @pytest.mark.parametrize(
        ("armor", "damage"),
        [(50, -1), (50, 0), (0, 1)],
    )
    def test_bee_stats_must_be_positive(self, armor: int, damage: int) -> None:
        config = GameConfig(bee_armor=armor, bee_damage=damage, waves={0: 1})
        with pytest.raises(ValueError):
            Game.from_config(config)


class TestCommands:
    """Tests for the string command surface."""

    def test_deploy_scenario(self) -> None:
        game = _small_game()
        assert game.deploy_ant("Thrower", "0,0") is None
        assert game.get_food() == 6
        assert game.deploy_ant("thrower", "0,0") == "tunnel already occupied"
        assert game.get_food() == 6
        assert game.deploy_ant("GROWER", "0,1") is None
        assert game.get_food() == 5

    def test_deploy_not_enough_food(self) -> None:
        game = _small_game(food=4)
        assert game.deploy_ant("scuba", "0,0") == "not enough food"
        assert game.get_food() == 4

    def test_unknown_ant_type(self) -> None:
        game = _small_game()
        assert game.deploy_ant("ninja", "0,0") == UNKNOWN_ANT_TYPE
        assert game.deploy_ant("ninja", "junk") == UNKNOWN_ANT_TYPE

    @pytest.mark.parametrize(
        "coordinate",
        [
            "0,3",
            "1,0",
            "-1,0",
            "0,-1",
            "a,b",
            "0",
            "0,0,0",
            "",
            "+0,1",
            "0,\u0661",
        ],
    )
    def test_illegal_location(self, coordinate: str) -> None:
        game = _small_game()
        assert game.deploy_ant("grower", coordinate) == ILLEGAL_LOCATION
        assert game.remove_ant(coordinate) == ILLEGAL_LOCATION
        assert game.boost_ant("FlyingLeaf", coordinate) == ILLEGAL_LOCATION
        assert game.get_food() == 10

    def test_place_at(self) -> None:
        game = _small_game()
        assert game.place_at("0,2") is game.get_places()[0][2]
        with pytest.raises(ValueError):
            game.place_at("0,3")

    def test_place_at_needs_plain_digits(self) -> None:
        game = _small_game(length=12)
        assert game.place_at(" 0, 10 ") is game.get_places()[0][10]
        assert game.deploy_ant("grower", "0,1_0") == ILLEGAL_LOCATION
        assert game.get_places()[0][10].get_ant() is None
        assert game.get_food() == 10

    def test_remove_ant(self) -> None:
        game = _small_game()
        game.deploy_ant("thrower", "0,1")
        assert game.remove_ant("0,1") is None
        assert game.get_places()[0][1].get_ant() is None

    def test_remove_from_empty_place(self) -> None:
        assert _small_game().remove_ant("0,0") is None

    def test_boost_ant(self) -> None:
        game = _small_game()
        game.deploy_ant("thrower", "0,0")
        assert game.boost_ant("IcyLeaf", "0,0") is None
        assert game.get_places()[0][0].get_ant().boost is Boost.ICY_LEAF

    def test_boost_errors(self) -> None:
        game = _small_game()
        assert game.boost_ant("FlyingLeaf", "0,0") == "no Ant at location"
        game.deploy_ant("thrower", "0,0")
        assert game.boost_ant("BugSpray", "0,0") == "no such boost"
        assert game.boost_ant("Banana", "0,0") == "no such boost"


class TestTurns:
    """Tests for the turn cycle and win determination."""

    def test_wave_spawns_at_entrance(self) -> None:
        game = _small_game(hive=Hive(bee_armor=3, bee_damage=1).add_wave(0, 1))
        game.take_turn()
        entrance = game.colony.get_entrances()[0]
        assert len(entrance.get_bees()) == 1
        assert game.get_hive_bees_count() == 0
        assert game.get_turn() == 1

    def test_new_bees_wait_a_turn(self) -> None:
        game = _small_game(hive=Hive(bee_armor=3, bee_damage=1).add_wave(0, 1))
        game.take_turn()
        bee = game.colony.get_all_bees()[0]
        assert bee.place is game.get_places()[0][2]
        game.take_turn()
        assert bee.place is game.get_places()[0][1]

    def test_thrower_defends(self) -> None:
        hive = Hive(bee_armor=2, bee_damage=1).add_wave(0, 1)
        game = _small_game(length=4, hive=hive)
        game.deploy_ant("thrower", "0,0")
        game.take_turn()
        game.take_turn()
        game.take_turn()
        assert game.colony.get_all_bees() == []
        assert game.game_is_won() is True

    def test_bee_kills_ant_then_advances(self) -> None:
        game = _small_game()
        place = game.get_places()[0][1]
        ant = ThrowerAnt()
        game.colony.deploy_ant(ant, place)
        bee = Bee(10, 1)
        game.get_places()[0][2].add_bee(bee)
        game.take_turn()
        assert bee.armor == 9
        assert bee.place is place
        game.take_turn()
        assert not ant.is_alive
        assert bee.place is place
        game.take_turn()
        assert bee.place is game.get_places()[0][0]

    def test_water_checked_same_turn(self, rng: np.random.Generator) -> None:
        colony = Colony(
            food=20,
            num_tunnels=1,
            tunnel_length=2,
            moat_frequency=1,
            rng=rng,
        )
        game = Game(colony=colony, hive=Hive())
        game.deploy_ant("thrower", "0,0")
        game.deploy_ant("scuba", "0,1")
        game.take_turn()
        assert game.get_places()[0][0].get_ant() is None
        assert game.get_places()[0][1].get_ant() is not None

    def test_lost_when_queen_reached(self) -> None:
        game = _small_game(length=1)
        game.get_places()[0][0].add_bee(Bee(3, 1))
        game.hive.add_wave(50, 3)
        assert game.game_is_won() is None
        game.take_turn()
        assert game.colony.queen_has_bees()
        assert game.game_is_won() is False

    def test_won_when_no_bees(self) -> None:
        assert _small_game().game_is_won() is True

    def test_undecided_while_hive_has_bees(self) -> None:
        game = _small_game(hive=Hive(bee_armor=3, bee_damage=1).add_wave(5, 1))
        assert game.game_is_won() is None

    def test_run_full_game(self, game: Game) -> None:
        """Undefended colonies fall once the bees walk the tunnels."""
        for _ in range(40):
            game.take_turn()
            if game.game_is_won() is not None:
                break
        assert game.game_is_won() is False

    def test_determinism(self) -> None:
        """Same seed and commands must produce identical games."""
        cfg = GameConfig(seed=777, num_tunnels=3, tunnel_length=6, starting_food=20)

        def play() -> Game:
            g = Game.from_config(cfg)
            g.deploy_ant("grower", "0,0")
            g.deploy_ant("grower", "1,0")
            g.deploy_ant("thrower", "2,0")
            for _ in range(12):
                g.take_turn()
            return g

        game_a = play()
        game_b = play()
        assert game_a.get_food() == game_b.get_food()
        assert game_a.colony.get_boosts() == game_b.colony.get_boosts()
        positions_a = [b.place.name for b in game_a.colony.get_all_bees()]
        positions_b = [b.place.name for b in game_b.colony.get_all_bees()]
        assert positions_a == positions_b

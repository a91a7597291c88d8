from pathlib import Path

import pytest

import game
from game.config import DEFAULT_MAP_PATH, DEFAULT_STATIONS_PATH, config_from_args
from game.round_state import RoundPhase
from game.state_manager import StateManager


class FakeScreen:
    def __init__(self, name, log):
        self.name = name
        self.log = log
        self.next = None

    def on_enter(self):
        self.log.append(f"enter {self.name}")

    def on_exit(self):
        self.log.append(f"exit {self.name}")

    def handle_input(self, events):
        result, self.next = self.next, None
        return result

    def update(self, dt):
        pass

    def render(self, surface):
        pass


def test_config_defaults():
    cfg = config_from_args([])
    assert cfg.stations_path == DEFAULT_STATIONS_PATH
    assert cfg.guess_feedback_s == 2.0
    assert cfg.win_feedback_s == 30.0
    assert cfg.full_map_path is None


def test_default_dataset_ships_inside_the_game_package():
    package_dir = Path(game.__file__).resolve().parent
    assert DEFAULT_STATIONS_PATH.is_file()
    assert DEFAULT_STATIONS_PATH.parent.parent == package_dir
    assert not DEFAULT_MAP_PATH.is_absolute()


def test_pyproject_declares_dataset_as_package_data():
    tomllib = pytest.importorskip("tomllib")
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    setuptools_cfg = tomllib.loads(pyproject.read_text())["tool"]["setuptools"]
    assert "game" in setuptools_cfg["packages"]
    patterns = setuptools_cfg["package-data"]["game"]
    relative = DEFAULT_STATIONS_PATH.relative_to(Path(game.__file__).resolve().parent)
    assert any(relative.match(p) for p in patterns)


def test_config_flags():
    cfg = config_from_args(["--stations", "x.yaml", "--threshold", "0.9",
                            "--seed", "7", "--font", "label.ttf", "--width", "1024"])
    assert cfg.stations_path == Path("x.yaml")
    assert cfg.match_threshold == 0.9
    assert cfg.seed == 7
    assert cfg.fonts.label_path == Path("label.ttf")
    assert cfg.width == 1024


@pytest.mark.parametrize("bad", ["0", "1.5", "-0.2"])
def test_config_rejects_bad_threshold(bad):
    with pytest.raises(SystemExit):
        config_from_args(["--threshold", bad])


def test_state_manager_builds_round(catalog):
    sm = StateManager(config_from_args(["--seed", "3"]), catalog)
    game = sm.get_round()
    assert game.phase is RoundPhase.AWAITING_TARGET
    game.restart()
    assert game.target in catalog.ids()


def test_navigation_and_back(catalog, capsys):
    log = []
    sm = StateManager(config_from_args([]), catalog)
    title, play = FakeScreen("TITLE", log), FakeScreen("GAME", log)
    sm.register_screen("TITLE", title)
    sm.register_screen("GAME", play)
    assert "Registered screen: GAME" in capsys.readouterr().out

    sm.switch_to("TITLE", push_stack=False)
    title.next = "GAME"
    sm.handle_input([])
    assert sm.current_screen == "GAME"

    play.next = "BACK"
    sm.handle_input([])
    assert sm.current_screen == "TITLE"
    assert log == ["enter TITLE", "exit TITLE", "enter GAME", "exit GAME", "enter TITLE"]


def test_unknown_screen_is_ignored(catalog, capsys):
    sm = StateManager(config_from_args([]), catalog)
    sm.switch_to("NOWHERE")
    assert sm.current_screen is None
    assert "Warning" in capsys.readouterr().out

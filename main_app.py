"""
TubeTag - Main Application

Name the stations of a transit network on a blank map:
- Title screen
- Game screen (pannable, zoomable map with station overlay)
- State management and screen navigation
"""

import pygame
import sys
import traceback
from pathlib import Path
from typing import Optional, Sequence

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.coords import REFERENCE_HEIGHT, REFERENCE_WIDTH
from core.stations import DatasetError, StationCatalog
from game.config import GameConfig, config_from_args
from game.state_manager import StateManager
from ui.theme import Theme, set_theme
from ui.screen_game import GameScreen
from ui.screen_title import TitleScreen

# Aspect ratios further apart than this get a warning at startup
ASPECT_TOLERANCE = 0.02


def load_map_image(path: Path, what: str = "map") -> pygame.Surface:
    """Load a map image; needs an initialised display for convert()"""
    if not Path(path).is_file():
        raise SystemExit(f"{what} image not found: {path}")
    try:
        image = pygame.image.load(str(path)).convert()
    except pygame.error as e:
        raise SystemExit(f"Cannot load {what} image {path}: {e}")

    w, h = image.get_size()
    expected = REFERENCE_WIDTH / REFERENCE_HEIGHT
    if abs(w / h - expected) / expected > ASPECT_TOLERANCE:
        print(f"Warning: {what} image is {w}x{h}, expected the aspect of "
              f"{REFERENCE_WIDTH}x{REFERENCE_HEIGHT}; stations will be misplaced")
    return image


class TubeTagGame:
    """
    Main game application

    Manages the game loop, state, and screen coordination.
    """

    def __init__(self, config: GameConfig):
        self.config = config

        try:
            catalog = StationCatalog.from_file(config.stations_path)
        except DatasetError as e:
            raise SystemExit(f"Invalid station dataset: {e}")
        print(f"Loaded {len(catalog)} stations from {config.stations_path}")

        pygame.init()

        # Window settings (can be changed with F11 or resized)
        self.fullscreen = False
        self.screen = pygame.display.set_mode((config.width, config.height), pygame.RESIZABLE)
        pygame.display.set_caption(config.title)
        self.clock = pygame.time.Clock()

        map_image = load_map_image(config.map_path)
        full_map_image = None
        if config.full_map_path is not None:
            full_map_image = load_map_image(config.full_map_path, "full map")

        # Theme is built from config so label fonts are known before screens exist
        self.theme = Theme(config.fonts)
        set_theme(self.theme)

        self.state_manager = StateManager(config, catalog)
        self.state_manager.register_screen('TITLE', TitleScreen(self.state_manager))
        self.state_manager.register_screen('GAME', GameScreen(self.state_manager, map_image, full_map_image))
        self.state_manager.switch_to('TITLE', push_stack=False)

        self.running = True
        print(f"\n{config.title}")
        print("=" * 60)
        print("Initialized successfully!")
        print("=" * 60)

    def run(self):
        """Main game loop"""
        print("\nStarting main loop...")
        print("Press ESC at the title screen to quit\n")

        while self.running:
            dt = self.clock.tick(self.config.fps) / 1000.0

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_F11:
                        self.toggle_fullscreen()
                elif event.type == pygame.VIDEORESIZE:
                    self.handle_resize(event.w, event.h)

            self.state_manager.handle_input(events)
            self.state_manager.update(dt)

            self.screen.fill(self.theme.colors.BG_DARK)
            self.state_manager.render(self.screen)
            pygame.display.flip()

        self.quit()

    def toggle_fullscreen(self):
        """Toggle between fullscreen and windowed mode"""
        self.fullscreen = not self.fullscreen

        if self.fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
            print(f"Switched to fullscreen: {width}x{height}")
        else:
            self.screen = pygame.display.set_mode((self.config.width, self.config.height), pygame.RESIZABLE)
            print(f"Switched to windowed: {self.config.width}x{self.config.height}")

    def handle_resize(self, width: int, height: int):
        """Handle window resize event"""
        if not self.fullscreen:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            print(f"Window resized to: {width}x{height}")

    def quit(self):
        """Cleanup and quit"""
        print("\nShutting down...")
        pygame.quit()
        sys.exit(0)


def main(argv: Optional[Sequence[str]] = None):
    """Entry point"""
    config = config_from_args(argv)
    try:
        game = TubeTagGame(config)
        game.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n\nFATAL ERROR: {e}")
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()

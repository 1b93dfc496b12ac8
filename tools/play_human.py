"""
Human Play Mode
================

Play Egg Catcher interactively with mouse or keyboard control.

Controls:
    - Mouse: Move the basket
    - Left/Right arrows: Move the basket
    - Space: Start / restart after game over
    - R: Restart game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--scale SCALE] [--fps FPS]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from egg_catcher.catcher_core.config_loader import load_config, GameConfig
from egg_catcher.catcher_core.game import GameSession, GameState
from egg_catcher.catcher_core.render_pygame import PygameCanvas


class HudRenderer:
    """
    Presentation layer around the board: score/lives bar and overlays.
    The board itself is drawn by the session through PygameCanvas.
    """

    def __init__(self, config: GameConfig, window_width: int, hud_height: int):
        self._config = config
        self._window_width = window_width
        self._hud_height = hud_height

        self._hud_color = (30, 38, 60)
        self._text_color = (245, 240, 225)
        self._text_dim = (170, 170, 190)
        self._box_fill = (255, 252, 245)
        self._box_border = (162, 107, 71)
        self._text_dark = (80, 60, 40)

        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 56)
        self._font_large = pygame.font.Font(None, 36)
        self._font_medium = pygame.font.Font(None, 28)

    def draw_hud(self, screen: pygame.Surface, session: GameSession) -> None:
        """Draw the score and lives bar above the board."""
        pygame.draw.rect(screen, self._hud_color, (0, 0, self._window_width, self._hud_height))

        score = self._font_large.render(f"Score: {session.score}", True, self._text_color)
        screen.blit(score, (16, (self._hud_height - score.get_height()) // 2))

        lives = self._font_large.render(f"Lives: {session.lives}", True, self._text_color)
        screen.blit(
            lives,
            (self._window_width - lives.get_width() - 16, (self._hud_height - lives.get_height()) // 2)
        )

    def draw_overlay(self, screen: pygame.Surface, session: GameSession) -> None:
        """Draw the start or game over box while the session is not running."""
        width, height = screen.get_size()

        shade = pygame.Surface((width, height), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 140))
        screen.blit(shade, (0, 0))

        box_w, box_h = 320, 180
        box_x = (width - box_w) // 2
        box_y = (height - box_h) // 2

        pygame.draw.rect(screen, self._box_fill, (box_x, box_y, box_w, box_h), border_radius=16)
        pygame.draw.rect(screen, self._box_border, (box_x, box_y, box_w, box_h), 3, border_radius=16)

        if session.state is GameState.ENDED:
            title_text = "GAME OVER"
            message = f"Score: {session.score:,}"
            hint_text = "Press Space or R to play again"
        else:
            title_text = "EGG CATCHER"
            message = "Catch the eggs!"
            hint_text = "Press Space to start"

        title = self._font_huge.render(title_text, True, self._text_dark)
        screen.blit(title, (box_x + (box_w - title.get_width()) // 2, box_y + 25))

        msg = self._font_large.render(message, True, self._text_dark)
        screen.blit(msg, (box_x + (box_w - msg.get_width()) // 2, box_y + 85))

        hint = self._font_medium.render(hint_text, True, self._box_border)
        screen.blit(hint, (box_x + (box_w - hint.get_width()) // 2, box_y + 130))


class HumanPlayer:
    """
    Frame driver wiring pygame input and display to a GameSession.
    """

    HUD_HEIGHT = 50

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scale: float = 1.0,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._scale = scale
        self._target_fps = target_fps

        board = config.board
        self._window_width = int(board.width * scale)
        self._window_height = int(board.height * scale) + self.HUD_HEIGHT

        pygame.init()
        self._screen = pygame.display.set_mode((self._window_width, self._window_height))
        pygame.display.set_caption("Egg Catcher")
        self._clock = pygame.time.Clock()

        canvas = PygameCanvas(
            self._screen,
            config,
            scale=scale,
            offset=(0, self.HUD_HEIGHT)
        )
        self._session = GameSession(
            config=config,
            seed=seed,
            canvas=canvas,
            time_source=pygame.time.get_ticks
        )
        self._hud = HudRenderer(config, self._window_width, self.HUD_HEIGHT)

        self._quit = False
        self._was_running = False

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Egg Catcher ===")
        print("Mouse or arrow keys to move, Space to start, R to restart, ESC to quit")
        print()

        while not self._quit:
            self._handle_events()

            if self._session.running:
                self._session.frame(pygame.time.get_ticks())
            else:
                # Redraw the frozen board under the overlay
                self._session.draw()
                if self._was_running:
                    self._was_running = False
                    print(f"\nGAME OVER - Score: {self._session.score}")

            self._hud.draw_hud(self._screen, self._session)
            if not self._session.running:
                self._hud.draw_overlay(self._screen, self._session)

            pygame.display.flip()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._session.score

    def _handle_events(self) -> None:
        """Process pygame events into session input."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True

            elif event.type == pygame.MOUSEMOTION:
                self._session.set_continuous_target(self._screen_to_world_x(event.pos[0]))

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._quit = True
                elif event.key == pygame.K_LEFT:
                    # Keys take over from the pointer until it moves again
                    self._session.set_continuous_target(None)
                    self._session.set_direction_held("left", True)
                elif event.key == pygame.K_RIGHT:
                    self._session.set_continuous_target(None)
                    self._session.set_direction_held("right", True)
                elif event.key == pygame.K_SPACE and not self._session.running:
                    self._restart()
                elif event.key == pygame.K_r:
                    self._restart()

            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_LEFT:
                    self._session.set_direction_held("left", False)
                elif event.key == pygame.K_RIGHT:
                    self._session.set_direction_held("right", False)

    def _screen_to_world_x(self, screen_x: int) -> float:
        return screen_x / self._scale

    def _restart(self) -> None:
        """Start a fresh playthrough."""
        self._session.start()
        self._was_running = True
        print("\n=== Game Started ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play Egg Catcher interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale (default: 1.0)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--config", type=str, default=None, help="Path to game config YAML")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            scale=args.scale,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
main.py

Entry point.  Builds the level registry from the level files, launches the
menu, and runs a generic loop that swaps into any scene returned by
registry.launch_level.
"""

import logging
import sys
import pygame

from config               import WIDTH, HEIGHT, FPS, LEVELS_DIR, LOG_LEVEL, LOG_FORMAT
from core.errors          import LevelFormatError
from core.level_registry  import LevelRegistry
from scenes.loader        import register_all
from ui.menu              import MenuUI

logger = logging.getLogger(__name__)


def build_registry() -> LevelRegistry:
    reg = LevelRegistry()
    register_all(reg, LEVELS_DIR)
    return reg


def open_level(registry: LevelRegistry, name: str, screen, params: dict):
    """Launch a level scene, or log why it could not be loaded and return None."""
    try:
        return registry.launch_level(name, screen, **params)
    except (LevelFormatError, OSError) as exc:
        logger.error("Could not load level %r: %s", name, exc, exc_info=True)
        return None


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)

    pygame.init()
    pygame.display.set_caption("Pipeworks")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock  = pygame.time.Clock()

    registry = build_registry()
    menu     = MenuUI(screen, registry)
    current  = menu

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0

        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
                break

            # dispatch to current scene/menu
            result = current.handle_event(ev)

            # Menu → level
            if isinstance(current, MenuUI) and isinstance(result, tuple):
                cmd, payload = result
                if cmd == "play":
                    name, params = payload
                    scene = open_level(registry, name, screen, params)
                    if scene:
                        current = scene
                continue

            # Level → back to menu
            if not isinstance(current, MenuUI) and result == "menu":
                current = menu
                continue

        current.update(dt)
        current.draw()
        pygame.display.flip()

    pygame.quit()
    sys.exit()

if __name__ == "__main__":
    main()

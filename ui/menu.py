"""
ui/menu.py

Level-selection menu:
 - Title banner
 - One button per registered level, laid out in columns
 - Mouse wheel / arrow keys scroll when the levels do not fit
"""

from __future__ import annotations
import pygame
from typing import Any, List

from config               import WIDTH, HEIGHT, FONT_NAME
from constants            import (
    MENU_BG_COLOR, MENU_BUTTON_SIZE, MENU_COLUMNS, BUTTON_GAP,
)
from ui.widgets           import Button
from core.level_registry  import LevelRegistry

TITLE_TOP    = 24
LIST_TOP     = 110
SCROLL_SPEED = 40

# ────────────────────────────────────────────────────────────────────────
class MenuUI:
    def __init__(self, screen: pygame.Surface, registry: LevelRegistry):
        self.screen   = screen
        self.registry = registry
        self.title_font = pygame.font.Font(FONT_NAME, 56)
        self.hint_font  = pygame.font.Font(FONT_NAME, 24)

        self.scroll_offset = 0
        self.buttons: List[Button] = []
        self._build_buttons()

    # ───────────────────────────────────────────────────────── layout ─────
    def _build_buttons(self) -> None:
        bw, bh = MENU_BUTTON_SIZE
        total_w = MENU_COLUMNS * bw + (MENU_COLUMNS - 1) * BUTTON_GAP
        left    = (WIDTH - total_w) // 2
        self.buttons = []
        for idx, name in enumerate(self.registry.all_levels()):
            row, col = divmod(idx, MENU_COLUMNS)
            rect = pygame.Rect(
                left + col * (bw + BUTTON_GAP),
                LIST_TOP + row * (bh + BUTTON_GAP),
                bw, bh,
            )
            self.buttons.append(Button(rect, name.title()))

    def _content_height(self) -> int:
        rows = -(-len(self.buttons) // MENU_COLUMNS)
        return rows * (MENU_BUTTON_SIZE[1] + BUTTON_GAP)

    def _max_offset(self) -> int:
        return max(0, self._content_height() - (HEIGHT - LIST_TOP - 20))

    def _scroll(self, dy: int) -> None:
        self.scroll_offset = min(max(self.scroll_offset + dy, 0), self._max_offset())

    def _shifted(self, pos) -> tuple[int, int]:
        return pos[0], pos[1] + self.scroll_offset

    # ─────────────────────────────────────────────────────── event ─────
    def handle_event(self, ev: pygame.event.Event) -> tuple[str, Any] | None:
        if ev.type == pygame.MOUSEWHEEL:
            self._scroll(-ev.y * SCROLL_SPEED)
            return None

        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if ev.pos[1] < LIST_TOP:
                return None
            pos = self._shifted(ev.pos)
            for btn, name in zip(self.buttons, self.registry.all_levels()):
                if btn.hovered(pos):
                    return ("play", (name, {}))

        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_DOWN:
                self._scroll(SCROLL_SPEED)
            elif ev.key == pygame.K_UP:
                self._scroll(-SCROLL_SPEED)

        return None

    # ───────────────────────────────────────────────────────── update ─────
    def update(self, dt: float) -> None:
        pass

    # ───────────────────────────────────────────────────────── draw ─────
    def draw(self) -> None:
        self.screen.fill(MENU_BG_COLOR)

        title = self.title_font.render("Pipeworks", True, (255, 255, 255))
        self.screen.blit(title, title.get_rect(midtop=(WIDTH // 2, TITLE_TOP)))

        if not self.buttons:
            hint = self.hint_font.render("No levels found", True, (255, 255, 255))
            self.screen.blit(hint, hint.get_rect(center=(WIDTH // 2, HEIGHT // 2)))
            return

        clip = self.screen.get_clip()
        self.screen.set_clip(pygame.Rect(0, LIST_TOP, WIDTH, HEIGHT - LIST_TOP))
        for btn in self.buttons:
            self.screen.blit(btn.surface, btn.rect.move(0, -self.scroll_offset).topleft)
        self.screen.set_clip(clip)

"""
Reusable UI widgets.
"""
from __future__ import annotations
import pygame
from config    import FONT_NAME
from constants import BUTTON_BG_COLOR, BUTTON_FG_COLOR

# --------------------------------------------------------------------
class Button:
    def __init__(self, rect: pygame.Rect, text: str,
                 bg=BUTTON_BG_COLOR, fg=BUTTON_FG_COLOR):
        self.rect = rect
        self.text = text
        self.fg   = fg
        self.set_background(bg)

    def set_background(self, bg) -> None:
        """Re-render the face, e.g. to grey a button out."""
        self.bg = bg
        font = pygame.font.Font(FONT_NAME, 24)
        self.surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        self.surface.fill(bg)
        lbl = font.render(self.text, True, self.fg)
        self.surface.blit(lbl, lbl.get_rect(center=self.surface.get_rect().center))

    def draw(self, screen):  screen.blit(self.surface, self.rect.topleft)
    def hovered(self, pos):  return self.rect.collidepoint(pos)

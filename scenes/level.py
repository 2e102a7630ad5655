# pyright: reportMissingImports=false
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import pygame

from boards.grid_board import GridBoard
from config            import WIDTH, HEIGHT, FONT_NAME
from constants         import (
    MENU_BG_COLOR, BOARD_BG_COLOR, BORDER_COLOR, BORDER_EDGE_COLOR,
    GRID_LINE_COLOR, ATTACHED_MARK_COLOR, STOCK_BG_COLOR, STOCK_TEXT_COLOR,
    DRAG_HIGHLIGHT_COLOR, BUTTON_ALT_BG_COLOR, BUTTON_OFF_BG_COLOR,
    PATH_COLORS, BOARD_MARGIN, STOCK_COLUMNS, STOCK_ROWS, STOCK_SLOT,
    PIPE_WIDTH_RATIO, SOURCE_HUB_RATIO, BUTTON_SIZE, BUTTON_GAP,
)
from core.elements     import Border, BorderShape, Cell
from core.levels       import LevelDefinition, load_level
from core.pipes        import Direction, PathColor, Pipe
from core.stock        import STOCK_PALETTE, StockKey
from ui.widgets        import Button

logger = logging.getLogger(__name__)


# ──────────────────────────── helpers ────────────────────────────
class Drag:
    __slots__ = ("origin", "key", "cell", "pos")

    def __init__(self, origin: str, key: StockKey | None = None,
                 cell: Tuple[int, int] | None = None,
                 pos: Tuple[int, int] = (0, 0)):
        self.origin = origin      # "stock" | "board"
        self.key    = key         # stock slot being dragged
        self.cell   = cell        # board position being dragged
        self.pos    = pos         # current mouse position


# ──────────────────────────── scene ────────────────────────────
class LevelScene:
    # ───────── init ─────────
    def __init__(self, screen: pygame.Surface, definition: LevelDefinition) -> None:
        self.screen = screen
        self.board  = GridBoard(definition)
        self.title  = (f"Level {definition.number}" if definition.number is not None
                       else definition.name.title())

        stock_w = STOCK_COLUMNS * STOCK_SLOT
        stock_h = STOCK_ROWS * STOCK_SLOT
        avail_w = WIDTH - stock_w - 3 * BOARD_MARGIN
        avail_h = HEIGHT - 2 * BOARD_MARGIN - BUTTON_SIZE[1] - 40
        self.cell_px = max(8, min(avail_w // self.board.cols, avail_h // self.board.rows))

        board_w = self.board.cols * self.cell_px
        board_h = self.board.rows * self.cell_px
        self.origin = (BOARD_MARGIN, BOARD_MARGIN + 20)
        self.board_rect = pygame.Rect(self.origin, (board_w, board_h))
        self.stock_rect = pygame.Rect(
            self.board_rect.right + BOARD_MARGIN, self.origin[1], stock_w, stock_h
        )

        self.drag: Optional[Drag] = None
        self.title_font = pygame.font.Font(FONT_NAME, 40)
        self.count_font = pygame.font.Font(FONT_NAME, 22)
        self._build_buttons()

    def _build_buttons(self) -> None:
        bw, bh = BUTTON_SIZE
        y = HEIGHT - bh - 20
        x = (WIDTH - 4 * bw - 3 * BUTTON_GAP) // 2
        labels = ["Undo", "Redo", "Reset", "Levels"]
        self.buttons = {
            lbl: Button(pygame.Rect(x + i * (bw + BUTTON_GAP), y, bw, bh), lbl)
            for i, lbl in enumerate(labels)
        }
        self._refresh_buttons()

    def _refresh_buttons(self) -> None:
        undo_bg = BUTTON_ALT_BG_COLOR if self.board.can_undo else BUTTON_OFF_BG_COLOR
        redo_bg = BUTTON_ALT_BG_COLOR if self.board.can_redo else BUTTON_OFF_BG_COLOR
        if self.buttons["Undo"].bg != undo_bg:
            self.buttons["Undo"].set_background(undo_bg)
        if self.buttons["Redo"].bg != redo_bg:
            self.buttons["Redo"].set_background(redo_bg)

    # ───────── geometry ─────────
    def cell_to_pixel(self, row: int, col: int) -> Tuple[int, int]:
        ox, oy = self.origin
        return ox + col * self.cell_px, oy + row * self.cell_px

    def pixel_to_cell(self, x: int, y: int) -> Tuple[int, int] | None:
        ox, oy = self.origin
        col = (x - ox) // self.cell_px
        row = (y - oy) // self.cell_px
        if self.board.in_bounds(row, col):
            return row, col
        return None

    def slot_rect(self, index: int) -> pygame.Rect:
        row, col = divmod(index, STOCK_COLUMNS)
        return pygame.Rect(
            self.stock_rect.x + col * STOCK_SLOT,
            self.stock_rect.y + row * STOCK_SLOT,
            STOCK_SLOT, STOCK_SLOT,
        )

    def slot_at(self, pos: Tuple[int, int]) -> StockKey | None:
        for index, key in enumerate(STOCK_PALETTE):
            if self.slot_rect(index).collidepoint(pos):
                return key
        return None

    # ───────── gesture rules ─────────
    def drop_target(self, row: int, col: int) -> Cell | None:
        """The cell at (row, col) if a pipe may be dropped or swapped there."""
        element = self.board.get(row, col)
        if not isinstance(element, Cell) or element.attached or element.is_source:
            return None
        return element

    def drop_from_stock(self, key: StockKey, row: int, col: int) -> bool:
        kind, rotation = key
        stock = self.board.get_stock()
        target = self.drop_target(row, col)
        if target is None or not target.is_empty or stock.quantity(kind, rotation) == 0:
            logger.debug("rejected stock drop of %s/%d on (%d, %d)", kind.name, rotation, row, col)
            return False
        self.board.place(row, col, Cell.of(kind, rotation))
        self.board.get_stock().remove_pipe(kind, rotation)
        return True

    def return_to_stock(self, row: int, col: int) -> bool:
        cell = self.board.get(row, col)
        if not isinstance(cell, Cell) or not cell.movable:
            return False
        kind, rotation = cell.pipe.key
        self.board.place(row, col, Cell.empty())
        self.board.get_stock().add_pipe(kind, rotation)
        return True

    def move(self, row1: int, col1: int, row2: int, col2: int) -> bool:
        if self.drop_target(row2, col2) is None:
            logger.debug("rejected move (%d, %d) -> (%d, %d)", row1, col1, row2, col2)
            return False
        self.board.swap(row1, col1, row2, col2)
        return True

    # ───────── input ─────────
    def handle_event(self, ev: pygame.event.Event):
        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE:
                return "menu"
            if ev.mod & pygame.KMOD_CTRL and ev.key == pygame.K_z:
                self.board.undo()
            elif ev.mod & pygame.KMOD_CTRL and ev.key == pygame.K_y:
                self.board.redo()
            self._refresh_buttons()
            return None

        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            return self._press(ev.pos)

        if ev.type == pygame.MOUSEMOTION and self.drag:
            self.drag.pos = ev.pos
            return None

        if ev.type == pygame.MOUSEBUTTONUP and ev.button == 1 and self.drag:
            self._release(ev.pos)
            self.drag = None
            self._refresh_buttons()
        return None

    def _press(self, pos: Tuple[int, int]):
        if self.buttons["Undo"].hovered(pos):
            self.board.undo()
        elif self.buttons["Redo"].hovered(pos):
            self.board.redo()
        elif self.buttons["Reset"].hovered(pos):
            self.board.reset()
        elif self.buttons["Levels"].hovered(pos):
            return "menu"
        else:
            self._start_drag(pos)
        self._refresh_buttons()
        return None

    def _start_drag(self, pos: Tuple[int, int]) -> None:
        key = self.slot_at(pos)
        if key is not None:
            if self.board.get_stock().quantity(*key) > 0:
                self.drag = Drag("stock", key=key, pos=pos)
            return
        cell = self.pixel_to_cell(*pos)
        if cell is None:
            return
        element = self.board.get(*cell)
        if isinstance(element, Cell) and element.movable:
            self.drag = Drag("board", cell=cell, pos=pos)

    def _release(self, pos: Tuple[int, int]) -> None:
        drag = self.drag
        target = self.pixel_to_cell(*pos)
        if drag.origin == "stock":
            if target is not None:
                self.drop_from_stock(drag.key, *target)
        elif self.stock_rect.collidepoint(pos):
            self.return_to_stock(*drag.cell)
        elif target is not None:
            self.move(*drag.cell, *target)

    def update(self, dt: float) -> None:
        pass  # static puzzle

    # ───────── drawing ─────────
    def _draw_pipe(self, pipe: Pipe, rect: pygame.Rect) -> None:
        cx, cy = rect.center
        half  = rect.width // 2
        thick = max(2, int(rect.width * PIPE_WIDTH_RATIO))
        for index, pc in enumerate(pipe.components):
            rgb = PATH_COLORS[pc.color.value]
            if index > 0:
                # the upper pipe of an OVER gets an outline so the crossing reads
                self._draw_arms(pc.directions, (cx, cy), half, thick + 4, BOARD_BG_COLOR)
            self._draw_arms(pc.directions, (cx, cy), half, thick, rgb)
        if pipe.is_source:
            rgb = PATH_COLORS[pipe.components[0].color.value]
            pygame.draw.circle(self.screen, rgb, (cx, cy), int(rect.width * SOURCE_HUB_RATIO))
            pygame.draw.circle(self.screen, BORDER_COLOR, (cx, cy),
                               int(rect.width * SOURCE_HUB_RATIO), width=2)

    def _draw_arms(self, directions, centre, half: int, thick: int, rgb) -> None:
        cx, cy = centre
        for d in directions:
            dr, dc = d.offset
            end = (cx + dc * half, cy + dr * half)
            pygame.draw.line(self.screen, rgb, centre, end, thick)
        pygame.draw.circle(self.screen, rgb, centre, thick // 2)

    def _draw_border(self, border: Border, rect: pygame.Rect) -> None:
        pygame.draw.rect(self.screen, BORDER_COLOR, rect)
        # inner edge faces the play area; orientation counts quarter turns from TOP
        facing = [Direction.BOTTOM.rotated(border.orientation)]
        if border.shape is BorderShape.CORNER:
            facing.append(facing[0].rotated(3))
        for d in facing:
            dr, dc = d.offset
            if dr:
                y = rect.bottom - 2 if dr > 0 else rect.top
                pygame.draw.line(self.screen, BORDER_EDGE_COLOR, (rect.left, y), (rect.right, y), 3)
            else:
                x = rect.right - 2 if dc > 0 else rect.left
                pygame.draw.line(self.screen, BORDER_EDGE_COLOR, (x, rect.top), (x, rect.bottom), 3)

    def _draw_board(self) -> None:
        pygame.draw.rect(self.screen, BOARD_BG_COLOR, self.board_rect)
        dragged = self.drag.cell if self.drag and self.drag.origin == "board" else None
        for r in range(self.board.rows):
            for c in range(self.board.cols):
                rect = pygame.Rect(self.cell_to_pixel(r, c), (self.cell_px, self.cell_px))
                element = self.board.get(r, c)
                if isinstance(element, Border):
                    self._draw_border(element, rect)
                    continue
                pygame.draw.rect(self.screen, GRID_LINE_COLOR, rect, width=1)
                if (r, c) != dragged:
                    self._draw_pipe(element.pipe, rect)
                if element.attached and not element.is_empty:
                    pygame.draw.rect(self.screen, ATTACHED_MARK_COLOR, rect.inflate(-4, -4), width=2)

    def _draw_stock(self) -> None:
        pygame.draw.rect(self.screen, STOCK_BG_COLOR, self.stock_rect)
        stock = self.board.get_stock()
        for index, (kind, rotation) in enumerate(STOCK_PALETTE):
            rect = self.slot_rect(index)
            qty  = stock.quantity(kind, rotation)
            colour = PathColor.GRAY if qty > 0 else PathColor.DARK_GRAY
            self._draw_pipe(Pipe(kind, rotation, colour), rect.inflate(-14, -14))
            lbl = self.count_font.render(str(qty), True, STOCK_TEXT_COLOR)
            self.screen.blit(lbl, (rect.x + 4, rect.bottom - lbl.get_height() - 2))

    def _draw_drag(self) -> None:
        if not self.drag:
            return
        if self.drag.origin == "stock":
            pipe = Pipe(*self.drag.key)
        else:
            pipe = self.board.get(*self.drag.cell).pipe
        rect = pygame.Rect(0, 0, self.cell_px, self.cell_px)
        rect.center = self.drag.pos
        self._draw_pipe(pipe, rect)
        pygame.draw.rect(self.screen, DRAG_HIGHLIGHT_COLOR, rect, width=1)

    def draw(self) -> None:
        self.screen.fill(MENU_BG_COLOR)

        lbl = self.title_font.render(self.title, True, (255, 255, 255))
        self.screen.blit(lbl, lbl.get_rect(midtop=(WIDTH // 2, 10)))

        self._draw_board()
        self._draw_stock()
        for btn in self.buttons.values():
            btn.draw(self.screen)
        self._draw_drag()


# ───────────────────────── registry ─────────────────────────
def launch(screen: pygame.Surface, path: Path, **kwargs) -> LevelScene:
    return LevelScene(screen, load_level(path))

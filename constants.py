"""
Values you can freely tinker with without touching the logic.
"""

# ── Colours ───────────────────────────────────────────────────────────
MENU_BG_COLOR          = (120, 120, 120)     # overall background
BOARD_BG_COLOR         = (45, 45, 50)
BORDER_COLOR           = (20, 20, 24)
BORDER_EDGE_COLOR      = (90, 90, 100)
GRID_LINE_COLOR        = (80, 80, 80)
ATTACHED_MARK_COLOR    = (200, 170, 60)       # frame around fixed pieces
STOCK_BG_COLOR         = (0, 0, 0)
STOCK_TEXT_COLOR       = (240, 240, 240)
DRAG_HIGHLIGHT_COLOR   = (240, 240, 240)

BUTTON_FG_COLOR        = (240, 240, 240)
BUTTON_BG_COLOR        = (70, 120, 70)
BUTTON_ALT_BG_COLOR    = (70, 70, 120)       # undo / redo
BUTTON_OFF_BG_COLOR    = (90, 90, 90)        # nothing to undo / redo

# one RGB per PathColor value
PATH_COLORS = {
    "gray":      (170, 170, 170),
    "red":       (220, 60, 60),
    "green":     (60, 200, 90),
    "blue":      (70, 110, 230),
    "yellow":    (235, 210, 60),
    "dark_gray": (70, 70, 70),
}

# ── Layout / sizes ────────────────────────────────────────────────────
BOARD_MARGIN           = 40
STOCK_COLUMNS          = 2
STOCK_ROWS             = 6
STOCK_SLOT             = 70
PIPE_WIDTH_RATIO       = 0.28               # pipe thickness / cell size
SOURCE_HUB_RATIO       = 0.30               # source hub radius / cell size
BUTTON_SIZE            = (120, 40)
BUTTON_GAP             = 16
MENU_BUTTON_SIZE       = (220, 44)
MENU_COLUMNS           = 3

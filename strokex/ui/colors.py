"""Neon theme colors and color utilities for the UI."""

from typing import Tuple


class NeonColors:
    """Light background with magenta / violet / cyan neon accents."""

    BG = "#f5f5f5"
    BG_START = "#ffffff"

    MAGENTA = "#ff00ff"
    VIOLET = "#8a2be2"
    CYAN = "#00ffff"
    SPRING = "#00ff7f"
    PINK = "#ff64ff"

    EDGE_UNTOUCHED = "#c8c8c8"
    EDGE_CORRECT = "#64c864"
    EDGE_ERROR = "#ff3232"
    PATH = "#8a2be2"

    NODE_FILL = "#ffffff"
    NODE_BORDER = "#8a2be2"
    NODE_ON_PATH = "#ff00ff"
    NODE_HIGHLIGHT = "#00ffff"

    BUTTON_RESET = "#ff6464"
    BUTTON_HINT = "#ffc800"
    BUTTON_PREV = "#6496ff"
    BUTTON_NEXT = "#64c864"
    BUTTON_DISABLED = "#969696"

    TEXT_PRIMARY = "#505050"
    TEXT_MUTED = "#646464"
    SCORE_GOLD = "#ffd700"
    SUCCESS = "#64ff64"


PARTICLE_COLORS = (NeonColors.MAGENTA, NeonColors.VIOLET, NeonColors.CYAN, NeonColors.PINK)
DOT_COLORS = (NeonColors.MAGENTA, NeonColors.CYAN, NeonColors.VIOLET, NeonColors.SPRING)


def edge_style(visit_count: int) -> Tuple[str, float]:
    """Return (color, line width) for an edge traced ``visit_count`` times."""
    if visit_count <= 0:
        return NeonColors.EDGE_UNTOUCHED, 6.5
    if visit_count == 1:
        return NeonColors.EDGE_CORRECT, 9.8
    return NeonColors.EDGE_ERROR, 13.1


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a

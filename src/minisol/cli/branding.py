"""MiniSol CLI branding helpers and Solana-inspired styling."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

MINISOL_THEME = Theme(
    {
        "minisol.banner.notice": "bold #14F195",
        "minisol.success": "#14F195",
        "minisol.error": "bold #FB7185",
    }
)

BANNER_TEXT = "MINISOLCLI"

# Figlet "standard" glyphs, one row per line.
GLYPHS: dict[str, tuple[str, ...]] = {
    "M": (r" __  __ ", r"|  \/  |", r"| |\/| |", r"| |  | |", r"|_|  |_|"),
    "I": (r" ___ ", r"|_ _|", r" | | ", r" | | ", r"|___|"),
    "N": (r" _   _ ", r"| \ | |", r"|  \| |", r"| |\  |", r"|_| \_|"),
    "S": (r" ____  ", r"/ ___| ", r"\___ \ ", r" ___) |", r"|____/ "),
    "O": (r"  ___  ", r" / _ \ ", r"| | | |", r"| |_| |", r" \___/ "),
    "L": (r" _     ", r"| |    ", r"| |    ", r"| |___ ", r"|_____|"),
    "C": (r"  ____ ", r" / ___|", r"| |    ", r"| |___ ", r" \____|"),
}

ROW_COLORS: tuple[str, ...] = ("#9945FF", "#6E8CFF", "#3CDCE1", "#19F5A5", "#14F195")


def themed_console(**kwargs: object) -> Console:
    """Return a Console configured with the MiniSol theme."""
    return Console(theme=MINISOL_THEME, **kwargs)


def ascii_art(text: str) -> list[str]:
    """Render `text` with the banner glyphs; unknown characters are skipped."""
    rows = [""] * len(ROW_COLORS)
    for char in text.upper():
        glyph = GLYPHS.get(char)
        if glyph is None:
            continue
        for index, part in enumerate(glyph):
            rows[index] += part
    return [row.rstrip() for row in rows]


def banner_lines() -> Iterable[Text]:
    """Yield Rich Text segments representing the MiniSol banner."""
    for row, color in zip(ascii_art(BANNER_TEXT), ROW_COLORS):
        yield Text(row, style=f"bold {color}")


def render_banner(console: Console, *, cluster: str, url: str) -> None:
    """Render the banner and the active-cluster notice."""
    for line in banner_lines():
        console.print(line, overflow="ignore", crop=False)
    console.print(
        Text(f"Your Mini Solana CLI for blockchain interactions | cluster: {cluster} ({url})"),
        style="minisol.banner.notice",
        soft_wrap=True,
    )
    console.print()


__all__ = ["MINISOL_THEME", "themed_console", "ascii_art", "banner_lines", "render_banner"]

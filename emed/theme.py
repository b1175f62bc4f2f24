"""Color themes, expressed as blessed color names."""

from dataclasses import dataclass

from .lexer import TokenKind


@dataclass(frozen=True)
class Theme:
    name: str
    fg: str
    bg: str
    status_fg: str
    status_bg: str
    tilde_fg: str
    number_fg: str

    @classmethod
    def from_name(cls, name: str) -> "Theme":
        """Look up a built-in theme by name. Falls back to "pink" if unknown."""
        return BUILTIN_THEMES.get(name, BUILTIN_THEMES["pink"])

    def color_for(self, kind: TokenKind) -> str:
        if kind == TokenKind.NUMBER:
            return self.number_fg
        return self.fg

    def style(self, fg: str, bg: str = "") -> str:
        """Blessed formatting name, e.g. ``'magenta_on_black'``."""
        bg = bg or self.bg
        return f"{fg}_on_{bg}"


BUILTIN_THEMES = {
    # Magenta on black
    "pink": Theme(
        name="pink",
        fg="magenta",
        bg="black",
        status_fg="black",
        status_bg="magenta",
        tilde_fg="magenta",
        number_fg="bright_white",
    ),
    # Green/cyan on a dark background
    "ocean": Theme(
        name="ocean",
        fg="bright_cyan",
        bg="black",
        status_fg="black",
        status_bg="cyan",
        tilde_fg="green",
        number_fg="bright_yellow",
    ),
}

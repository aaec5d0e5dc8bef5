"""Color palettes for the dashboard and their Textual theme registrations.

Each palette field names a role on screen rather than a hue, and becomes a
``$th-<field>`` CSS variable (underscores turned into dashes).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from textual.theme import Theme as TextualTheme


@dataclass(frozen=True, slots=True)
class Palette:
    background: str
    surface: str  # item rows, summary cells, popup inputs
    surface_alt: str  # header strip, footer rule
    text: str
    muted: str  # meta lines, status bar, footer hints
    accent: str  # focus borders
    title: str  # item titles, popup title
    row_border: str
    busy: str  # popup border while a rewrite is in flight
    confirm: str  # publish confirmation border
    error: str  # fetch error label
    current_page: str
    current_page_text: str
    scrollbar_track: str
    scrollbar_thumb: str
    scrollbar_active: str
    scrollbar_hover: str

    def css_variables(self) -> dict[str, str]:
        return {f"th-{name.replace('_', '-')}": color for name, color in asdict(self).items()}


MONOKAI = Palette(
    background="#272822",
    surface="#1e1e1e",
    surface_alt="#3e3d32",
    text="#f8f8f2",
    muted="#75715e",
    accent="#66d9ef",
    title="#e6db74",
    row_border="#49483e",
    busy="#fd971f",
    confirm="#fd971f",
    error="#f92672",
    current_page="#66d9ef",
    current_page_text="#272822",
    scrollbar_track="#3e3d32",
    scrollbar_thumb="#75715e",
    scrollbar_active="#66d9ef",
    scrollbar_hover="#a8a8a2",
)

CATPPUCCIN_MOCHA = Palette(
    background="#1e1e2e",
    surface="#181825",
    surface_alt="#313244",
    text="#cdd6f4",
    muted="#6c7086",
    accent="#89b4fa",
    title="#f9e2af",
    row_border="#313244",
    busy="#fab387",
    confirm="#fab387",
    error="#f38ba8",
    current_page="#89b4fa",
    current_page_text="#1e1e2e",
    scrollbar_track="#313244",
    scrollbar_thumb="#6c7086",
    scrollbar_active="#89b4fa",
    scrollbar_hover="#9399b2",
)

SOLARIZED_DARK = Palette(
    background="#002b36",
    surface="#073642",
    surface_alt="#586e75",
    text="#839496",
    muted="#586e75",
    accent="#268bd2",
    title="#b58900",
    row_border="#073642",
    busy="#cb4b16",
    confirm="#cb4b16",
    error="#dc322f",
    current_page="#268bd2",
    current_page_text="#002b36",
    scrollbar_track="#073642",
    scrollbar_thumb="#657b83",
    scrollbar_active="#268bd2",
    scrollbar_hover="#93a1a1",
)

PALETTES: dict[str, Palette] = {
    "monokai": MONOKAI,
    "catppuccin-mocha": CATPPUCCIN_MOCHA,
    "solarized-dark": SOLARIZED_DARK,
}
THEME_NAMES: list[str] = list(PALETTES)


def to_textual_theme(name: str, palette: Palette) -> TextualTheme:
    """Register *palette* under *name*; built-in widgets pick up the role colors too."""
    return TextualTheme(
        name=name,
        primary=palette.accent,
        secondary=palette.title,
        foreground=palette.text,
        background=palette.background,
        surface=palette.surface,
        panel=palette.surface_alt,
        warning=palette.busy,
        error=palette.error,
        dark=True,
        variables=palette.css_variables(),
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: to_textual_theme(name, palette) for name, palette in PALETTES.items()
}


def resolve_theme_name(name: str) -> str:
    return name if name in PALETTES else THEME_NAMES[0]


def next_theme_name(current: str) -> str:
    """Return the theme after *current*; unknown names restart the cycle."""
    if current not in PALETTES:
        return THEME_NAMES[0]
    return THEME_NAMES[(THEME_NAMES.index(current) + 1) % len(THEME_NAMES)]


__all__ = [
    "PALETTES",
    "TEXTUAL_THEMES",
    "THEME_NAMES",
    "Palette",
    "next_theme_name",
    "resolve_theme_name",
    "to_textual_theme",
]

"""
Color themes for the scripture reader.
Light is the default; dark mode swaps the background and text colors.
"""

from dataclasses import dataclass

THEMES = {
    'light': {
        'name': 'Claro',
        'BG': '#FAFAFA',
        'TEXT': '#333333',
        # Cards and raised surfaces
        'CARD': '#FFFFFF',
        'BORDER': '#E0E0E0',
        # Highlight for the active tab and buttons
        'PRIMARY': '#34D399',
    },
    'dark': {
        'name': 'Escuro',
        'BG': '#0D0D0D',
        'TEXT': '#F5F5F5',
        'CARD': '#1A1A1A',
        'BORDER': '#2C2C2C',
        'PRIMARY': '#34D399',
    },
}


@dataclass(frozen=True)
class Palette:
    """Resolved colors for one theme. Immutable so it can be shared freely."""
    name: str
    bg: str
    text: str
    card: str
    border: str
    primary: str


def palette_for(dark_mode: bool) -> Palette:
    t = THEMES['dark' if dark_mode else 'light']
    return Palette(
        name=t['name'],
        bg=t['BG'],
        text=t['TEXT'],
        card=t['CARD'],
        border=t['BORDER'],
        primary=t['PRIMARY'],
    )

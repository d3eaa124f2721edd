"""Theme system and shared console for hdrlang CLI."""

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from .models import Language

# Semantic color theme for consistent UI
HDRLANG_THEME = Theme(
    {
        # Outcomes
        "success": "green",
        "error": "bold red",
        "warning": "#d4a017",
        "info": "cyan",
        # Languages
        "lang.c": "bright_blue",
        "lang.cpp": "magenta",
        "lang.objc": "orange1",
        "lang.objcpp": "bold orange1",
        # UI elements
        "header": "bold #a0a0a0",
        "muted": "#808080",
        "path": "cyan",
        "matched": "green",
        "unmatched": "#808080",
        "inert": "bold red",
    }
)

_LANGUAGE_STYLES = {
    Language.C: "lang.c",
    Language.CPP: "lang.cpp",
    Language.OBJC: "lang.objc",
    Language.OBJCPP: "lang.objcpp",
}

# Shared console instance with theme applied
console = Console(theme=HDRLANG_THEME)


def language_text(language: Language | None, unchanged: str = "unchanged") -> Text:
    """Render a language name in its theme colour, or a muted placeholder."""
    if language is None:
        return Text(unchanged, style="muted")
    return Text(language.display_name, style=_LANGUAGE_STYLES[language])


def percent_bar(fraction: float | None, width: int = 20) -> Text:
    """Render a simple horizontal bar for a 0.0 - 1.0 score."""
    if fraction is None:
        return Text("n/a", style="muted")
    filled = round(max(0.0, min(1.0, fraction)) * width)
    bar = Text("█" * filled, style="success")
    bar.append("░" * (width - filled), style="muted")
    bar.append(f" {fraction * 100:5.1f}%")
    return bar

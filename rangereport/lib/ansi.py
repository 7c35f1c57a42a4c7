from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    red: str = "\033[38;5;203m"
    green: str = "\033[38;5;114m"
    yellow: str = "\033[38;5;221m"
    cyan: str = "\033[38;5;117m"
    gray: str = "\033[38;5;245m"
    white: str = "\033[38;5;252m"
    coral: str = "\033[38;5;209m"
    gold: str = "\033[38;5;220m"
    muted: str = "\033[90m"  # dim gray for secondary text
    bold: str = "\033[1m"
    dim: str = "\033[2m"
    reset: str = "\033[0m"


DEFAULT = Theme()
PLAIN = Theme(**{name: "" for name in Theme.__dataclass_fields__})
_active: Theme = DEFAULT


def use(theme: Theme) -> None:
    global _active
    _active = theme


_COLORS = {
    "red",
    "green",
    "yellow",
    "cyan",
    "gray",
    "white",
    "coral",
    "gold",
    "muted",
}

# Slice palette, keyed by the names the chart view-model hands out.
POOL: dict[str, str] = {
    "coral": "\033[38;5;209m",
    "apricot": "\033[38;5;215m",
    "butter": "\033[38;5;185m",
    "lime": "\033[38;5;149m",
    "spring": "\033[38;5;113m",
    "pale-mint": "\033[38;5;158m",
    "seafoam": "\033[38;5;116m",
    "sky": "\033[38;5;81m",
    "cornflower": "\033[38;5;69m",
    "orchid": "\033[38;5;134m",
    "rose": "\033[38;5;204m",
    "peach": "\033[38;5;217m",
}


def __getattr__(name: str) -> Callable[[str], str]:
    if name in _COLORS:

        def _wrap(text: str) -> str:
            return f"{getattr(_active, name)}{text}{_active.reset}"

        _wrap.__name__ = name
        return _wrap
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def pool(color: str, text: str) -> str:
    if _active is PLAIN:
        return text
    return f"{POOL.get(color, _active.muted)}{text}{_active.reset}"


def bold(text: str) -> str:
    return f"{_active.bold}{text}{_active.reset}"

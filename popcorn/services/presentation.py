"""Helpers for rendering result and watchlist panels."""

from typing import Dict, Sequence

PANELS = ("results", "watched")


def count_label(results: Sequence) -> str:
    return f"Found {len(results)} results"


class PanelToggles:
    """Independent collapse/expand flag per panel, all open initially."""

    def __init__(self, names: Sequence[str] = PANELS):
        self._open: Dict[str, bool] = {name: True for name in names}

    def is_open(self, name: str) -> bool:
        return self._open[name]

    def toggle(self, name: str) -> bool:
        if name not in self._open:
            raise KeyError(f"Unknown panel '{name}'")
        self._open[name] = not self._open[name]
        return self._open[name]

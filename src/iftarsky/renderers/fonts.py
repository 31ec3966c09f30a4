"""Font lookup cache for the matplotlib renderer.

The cache is an explicit handle: callers create one and pass it to every
render that should share it. Two threads asking for the same weight at the
same time may both resolve it; the first stored entry wins and neither
sees a half-written cache.
"""

import threading

from matplotlib import font_manager
from matplotlib.font_manager import FontProperties

DEFAULT_FAMILIES = ("Inter", "Helvetica", "Arial", "DejaVu Sans")


class FontCache:
    def __init__(self, families: tuple[str, ...] = DEFAULT_FAMILIES) -> None:
        self.families = families
        self._fonts: dict[int, FontProperties] = {}
        self._lock = threading.Lock()

    def get(self, weight: int) -> FontProperties:
        """Return a private copy of the resolved font for ``weight``."""
        cached = self._fonts.get(weight)
        if cached is None:
            query = FontProperties(family=list(self.families), weight=weight)
            path = font_manager.findfont(query)
            resolved = FontProperties(fname=path, weight=weight)
            with self._lock:
                cached = self._fonts.setdefault(weight, resolved)
        return cached.copy()

    def __len__(self) -> int:
        return len(self._fonts)

import threading
from typing import Dict
from .enums import MovieSource


class CreationCounter:
    """Counts created movies per source"""

    def __init__(self):
        self._lock = threading.Lock()
        self._counts: Dict[MovieSource, int] = {source: 0 for source in MovieSource}

    def increment(self, source: MovieSource) -> int:
        with self._lock:
            self._counts[source] += 1
            return self._counts[source]

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {source.value: count for source, count in self._counts.items()}

    def reset(self) -> None:
        with self._lock:
            for source in self._counts:
                self._counts[source] = 0


movies_created = CreationCounter()

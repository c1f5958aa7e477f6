from typing import Iterator


class FrequencyTable:
    """Cumulative duration per joined call path, in microseconds."""

    def __init__(self):
        self._totals: dict[str, float] = {}
        self._finalized = False

    def record(self, path: str, duration: float):
        if self._finalized:
            raise RuntimeError("frequency table is already finalized")

        # Negative durations come from out of order timestamps and are kept as they are.
        self._totals[path] = self._totals.get(path, 0.0) + duration

    def finalize(self) -> Iterator[tuple[str, float]]:
        """Hands out the aggregates. The table can't be used afterwards."""
        if self._finalized:
            raise RuntimeError("frequency table is already finalized")

        self._finalized = True
        totals, self._totals = self._totals, {}
        return iter(totals.items())

    def get(self, path: str, default=None):
        return self._totals.get(path, default)

    def __getitem__(self, path: str) -> float:
        return self._totals[path]

    def __contains__(self, path: str):
        return path in self._totals

    def __len__(self):
        return len(self._totals)

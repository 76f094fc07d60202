import os
from typing import Any, Callable

import pytest

from robo.robo_robot import TraceRobot

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


class SpyRobot(TraceRobot):
    """TraceRobot that also records every sensor query it answers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.queries: list[str] = []

    def fuel(self) -> int:
        self.queries.append("fuel")
        return super().fuel()

    def num_barrels(self) -> int:
        self.queries.append("num_barrels")
        return super().num_barrels()

    def opponent_lr(self) -> int:
        self.queries.append("opponent_lr")
        return super().opponent_lr()

    def opponent_fb(self) -> int:
        self.queries.append("opponent_fb")
        return super().opponent_fb()

    def closest_barrel_lr(self) -> int:
        self.queries.append("closest_barrel_lr")
        return super().closest_barrel_lr()

    def closest_barrel_fb(self) -> int:
        self.queries.append("closest_barrel_fb")
        return super().closest_barrel_fb()

    def barrel_lr(self, n: int) -> int:
        self.queries.append(f"barrel_lr({n})")
        return super().barrel_lr(n)

    def barrel_fb(self, n: int) -> int:
        self.queries.append(f"barrel_fb({n})")
        return super().barrel_fb(n)

    def wall_distance(self) -> int:
        self.queries.append("wall_distance")
        return super().wall_distance()


@pytest.fixture  # type: ignore[misc]
def spy_robot() -> Callable[..., SpyRobot]:
    """Factory for SpyRobot instances: `spy_robot(fuel=3, barrels=[(1, 2)])`."""
    return SpyRobot

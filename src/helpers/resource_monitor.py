from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Tuple

import psutil


LoadAverage = Tuple[float, float, float]


@dataclass(frozen=True)
class ResourceSample:
    """Captures the absolute process/system metrics at a point in time."""

    taken_at: float
    rss_mb: float
    cpu_user: float
    cpu_system: float
    thread_count: int
    load_avg: LoadAverage | None

    @property
    def cpu_total(self) -> float:
        return self.cpu_user + self.cpu_system


@dataclass(frozen=True)
class ResourceDelta:
    """Summarizes how the metrics changed between two samples."""

    duration_sec: float
    cpu_percent: float | None
    rss_after_mb: float
    rss_delta_mb: float
    thread_count: int
    load_avg: LoadAverage | None


class ResourceMonitor:
    """Process telemetry used to profile training and sampling runs."""

    _MB = 1024 * 1024

    def __init__(self) -> None:
        self._cpu_count = psutil.cpu_count(logical=True) or 1
        self._process = psutil.Process(os.getpid())

    @property
    def cpu_count(self) -> int:
        return self._cpu_count

    def snapshot(self) -> ResourceSample:
        now = time.perf_counter()
        with self._process.oneshot():
            mem_info = self._process.memory_info()
            cpu_times = self._process.cpu_times()
            thread_count = self._process.num_threads()
        return ResourceSample(
            taken_at=now,
            rss_mb=float(mem_info.rss / self._MB),
            cpu_user=float(cpu_times.user),
            cpu_system=float(cpu_times.system),
            thread_count=int(thread_count),
            load_avg=self._load_average(),
        )

    def delta(self, before: ResourceSample, after: ResourceSample) -> ResourceDelta:
        duration = max(0.0, after.taken_at - before.taken_at)
        cpu_percent: float | None = None
        if duration > 0:
            total_delta = after.cpu_total - before.cpu_total
            cpu_percent = max(0.0, (total_delta / duration) * 100.0 / float(self._cpu_count))
        return ResourceDelta(
            duration_sec=duration,
            cpu_percent=cpu_percent,
            rss_after_mb=after.rss_mb,
            rss_delta_mb=after.rss_mb - before.rss_mb,
            thread_count=after.thread_count,
            load_avg=after.load_avg,
        )

    def describe(self, delta: ResourceDelta) -> str:
        """Return a short, human-friendly summary string."""
        parts: list[str] = [f"time={delta.duration_sec:.3f}s"]
        if delta.cpu_percent is not None:
            parts.append(f"cpu={delta.cpu_percent:.1f}%/{self._cpu_count}c")
        parts.append(f"rss={delta.rss_after_mb:.1f}MB(Δ{delta.rss_delta_mb:+.1f})")
        parts.append(f"threads={delta.thread_count}")
        if delta.load_avg is not None:
            parts.append("load=" + ",".join(f"{value:.2f}" for value in delta.load_avg))
        return " ".join(parts)

    @staticmethod
    def to_event(delta: ResourceDelta) -> dict[str, float | int | tuple]:
        """Serialize the delta into a JSON-friendly payload."""
        payload: dict[str, float | int | tuple] = {
            "duration_sec": round(delta.duration_sec, 3),
            "rss_after_mb": round(delta.rss_after_mb, 3),
            "rss_delta_mb": round(delta.rss_delta_mb, 3),
            "thread_count": int(delta.thread_count),
        }
        if delta.cpu_percent is not None:
            payload["cpu_percent"] = round(delta.cpu_percent, 3)
        if delta.load_avg is not None:
            payload["load_avg"] = tuple(round(value, 3) for value in delta.load_avg)
        return payload

    @staticmethod
    def _load_average() -> LoadAverage | None:
        try:
            load = os.getloadavg()
        except (AttributeError, OSError):
            return None
        return float(load[0]), float(load[1]), float(load[2])

"""PlaybackScheduler — tick cursor state machine over a SampleSeries.

States: STOPPED, PLAYING, PAUSED. Both STOPPED and PAUSED hold still;
entering STOPPED also rewinds to tick 0.

Advance (PLAYING only):
    interval = base_interval / speed
    accumulated += now - last
    while accumulated >= interval:
        accumulated -= interval
        tick += stride
The remainder carries into the next step so jitter in the driving timer
does not change the long-run rate. Passing the end clamps to total_ticks - 1
and pauses.

Time is always passed in; the scheduler never reads a clock.
"""

import math
from dataclasses import dataclass
from enum import Enum

from src.dr_common.errors import InvalidSpeedError


class PlaybackStatus(str, Enum):
    STOPPED = "STOPPED"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"


@dataclass(frozen=True)
class PlaybackState:
    tick: int
    playing: bool
    speed_multiplier: float
    status: PlaybackStatus


def _validate_speed(multiplier: float) -> float:
    value = float(multiplier)
    if not math.isfinite(value) or value <= 0:
        raise InvalidSpeedError(multiplier)
    return value


class PlaybackScheduler:
    def __init__(
        self,
        total_ticks: int,
        stride: int,
        base_interval_s: float = 0.5,
        speed_multiplier: float = 1.0,
    ) -> None:
        if total_ticks < 1:
            raise ValueError("cannot schedule playback over an empty series")
        if stride < 1:
            raise ValueError(f"stride must be >= 1, got {stride}")
        if base_interval_s <= 0:
            raise ValueError(f"base_interval_s must be > 0, got {base_interval_s}")
        self._total_ticks = total_ticks
        self._stride = stride
        self._base_interval_s = base_interval_s
        self._speed = _validate_speed(speed_multiplier)
        self._tick = 0
        self._status = PlaybackStatus.STOPPED
        self._accumulated_s = 0.0
        self._last_time: float | None = None

    # -- read side --------------------------------------------------------

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def playing(self) -> bool:
        return self._status is PlaybackStatus.PLAYING

    @property
    def total_ticks(self) -> int:
        return self._total_ticks

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def effective_interval_s(self) -> float:
        return self._base_interval_s / self._speed

    def state(self) -> PlaybackState:
        return PlaybackState(
            tick=self._tick,
            playing=self.playing,
            speed_multiplier=self._speed,
            status=self._status,
        )

    # -- commands ---------------------------------------------------------

    def play(self) -> None:
        if self._status is PlaybackStatus.PLAYING:
            return
        self._status = PlaybackStatus.PLAYING
        self._accumulated_s = 0.0
        self._last_time = None  # first step seeds the clock

    def pause(self) -> None:
        if self._status is PlaybackStatus.PLAYING:
            self._status = PlaybackStatus.PAUSED
            self._last_time = None

    def stop(self) -> None:
        self._status = PlaybackStatus.STOPPED
        self._tick = 0
        self._accumulated_s = 0.0
        self._last_time = None

    def seek(self, tick: int) -> None:
        self._tick = self._clamp(tick)

    def jump(self, delta: int) -> None:
        self._tick = self._clamp(self._tick + delta)

    def set_speed(self, multiplier: float) -> None:
        self._speed = _validate_speed(multiplier)

    # -- advance ----------------------------------------------------------

    def step(self, now: float) -> int:
        """Advance for wall-clock time `now` (seconds). Returns strides advanced."""
        if self._status is not PlaybackStatus.PLAYING:
            return 0
        if self._last_time is None:
            self._last_time = now
            return 0

        elapsed = now - self._last_time
        self._last_time = now
        if elapsed > 0:
            self._accumulated_s += elapsed

        interval = self.effective_interval_s
        advanced = 0
        while self._accumulated_s >= interval:
            self._accumulated_s -= interval
            self._tick += self._stride
            advanced += 1
            if self._tick >= self._total_ticks:
                self._tick = self._total_ticks - 1
                self._status = PlaybackStatus.PAUSED
                self._accumulated_s = 0.0
                self._last_time = None
                break
        return advanced

    def _clamp(self, tick: int) -> int:
        return max(0, min(int(tick), self._total_ticks - 1))

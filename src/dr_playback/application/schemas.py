"""Pydantic schemas for playback commands and state."""

from pydantic import BaseModel, Field

from src.dr_playback.domain.scheduler import PlaybackState
from src.dr_store.application.schemas import PriceLevelOut, SnapshotOut
from src.dr_store.domain.models import DepthSnapshot

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SeekRequest(BaseModel):
    tick: int  # clamped to [0, total_ticks - 1], never rejected


class JumpRequest(BaseModel):
    delta: int | None = Field(
        None, description="Relative tick offset; defaults to +PLAYBACK_JUMP_STEP"
    )


class SpeedRequest(BaseModel):
    multiplier: float = Field(..., gt=0)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class PlaybackStateOut(BaseModel):
    tick: int
    playing: bool
    speed_multiplier: float
    status: str

    @classmethod
    def from_domain(cls, state: PlaybackState) -> "PlaybackStateOut":
        return cls(
            tick=state.tick,
            playing=state.playing,
            speed_multiplier=state.speed_multiplier,
            status=state.status.value,
        )


class FrameOut(BaseModel):
    """Current frame: the mapped snapshot plus top-of-book figures."""

    snapshot: SnapshotOut
    best_bid: PriceLevelOut | None
    best_ask: PriceLevelOut | None
    spread: float | None

    @classmethod
    def from_domain(cls, s: DepthSnapshot) -> "FrameOut":
        return cls(
            snapshot=SnapshotOut.from_domain(s),
            best_bid=PriceLevelOut.from_domain(s.best_bid) if s.best_bid else None,
            best_ask=PriceLevelOut.from_domain(s.best_ask) if s.best_ask else None,
            spread=float(s.spread) if s.spread is not None else None,
        )


class PlaybackView(BaseModel):
    state: PlaybackStateOut
    frame: FrameOut
    total_ticks: int
    stride: int


class SpeedPresetsOut(BaseModel):
    presets: list[float]

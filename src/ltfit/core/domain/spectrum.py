"""Lifetime spectrum: a channel-binned histogram of annihilation events."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ltfit.core.shared.typing import FloatArray, IntArray


class SpectrumPoint(BaseModel):
    """Counts recorded in a single channel."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    channel: int
    counts: int


class LifetimeSpectrum(BaseModel):
    """Immutable channel -> counts histogram."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    points: tuple[SpectrumPoint, ...] = Field(default_factory=tuple)

    @classmethod
    def from_counts(cls, counts: Sequence[int] | IntArray, first_channel: int = 0) -> LifetimeSpectrum:
        """Build a spectrum from consecutive channel counts."""
        return cls(
            points=tuple(
                SpectrumPoint(channel=first_channel + index, counts=int(value))
                for index, value in enumerate(counts)
            )
        )

    @classmethod
    def from_arrays(
        cls, channels: Sequence[int] | IntArray, counts: Sequence[int] | IntArray
    ) -> LifetimeSpectrum:
        """Build a spectrum from matching channel and counts arrays."""
        if len(channels) != len(counts):
            msg = f"Channel and counts arrays differ in length ({len(channels)} != {len(counts)})"
            raise ValueError(msg)
        return cls(
            points=tuple(
                SpectrumPoint(channel=int(channel), counts=int(value))
                for channel, value in zip(channels, counts, strict=True)
            )
        )

    @property
    def channels(self) -> IntArray:
        return np.array([point.channel for point in self.points], dtype=int)

    @property
    def counts(self) -> FloatArray:
        return np.array([point.counts for point in self.points], dtype=float)

    @property
    def is_empty(self) -> bool:
        return not self.points

    def region(self, start_channel: int, stop_channel: int) -> tuple[IntArray, FloatArray]:
        """Return channels and counts inside ``[start_channel, stop_channel]``."""
        channels = self.channels
        mask = (channels >= start_channel) & (channels <= stop_channel)
        return channels[mask], self.counts[mask]

    def __len__(self) -> int:
        return len(self.points)

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Random sources consumed by the randomised initializers."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Anything able to draw single samples from the two initializer distributions."""

    def gaussian(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        ...

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        ...


class NumpyRandomSource:
    """:class:`RandomSource` backed by a private :class:`numpy.random.Generator`.

    Each instance owns its generator, so two sources built from the same seed
    produce the same stream regardless of what other code does with NumPy's
    global state.
    """

    __slots__ = ("_generator", "seed")

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def gaussian(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        return float(self._generator.normal(mean, stddev))

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return float(self._generator.uniform(low, high))

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed!r})"


def default_source(seed: Optional[int] = None) -> RandomSource:
    """Create a fresh source for a single construction call."""
    return NumpyRandomSource(seed)

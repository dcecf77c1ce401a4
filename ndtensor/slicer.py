# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Validated rectangular sub-ranges of a tensor."""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

import numpy as np

from .exceptions import BadSlice
from .shape import Shape, ShapeLike, strided_indices


class _Bound:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


BEGIN = _Bound("BEGIN")
"""Start of an axis, resolves to ``0``."""

END = _Bound("END")
"""End of an axis, resolves to the axis extent."""


class Slicer:
    """Per-axis ``[start, stop)`` window with a common ``step``.

    A slicer is bound to the shape it will be validated against; ``BEGIN``
    and ``END`` entries are resolved against that shape when the slicer is
    built.

    Examples:
        >>> s = Slicer((4, 6), (1, BEGIN), (3, END), step=2)
        >>> s.start, s.stop
        ((1, 0), (3, 6))
        >>> s.output_shape()
        Shape(1, 3)
    """

    __slots__ = ("shape", "start", "stop", "step")

    def __init__(
        self,
        shape: ShapeLike,
        start: Sequence[Any],
        stop: Sequence[Any],
        step: int = 1,
    ):
        self.shape = Shape.of(shape)
        self.start: Tuple[int, ...] = tuple(
            self._resolve(value, axis) for axis, value in enumerate(start)
        )
        self.stop: Tuple[int, ...] = tuple(
            self._resolve(value, axis) for axis, value in enumerate(stop)
        )
        self.step = int(step)

    @classmethod
    def starting_at(cls, shape: ShapeLike, start: Sequence[Any], step: int = 1) -> "Slicer":
        """Slice from ``start`` to the end of every axis."""
        shape = Shape.of(shape)
        return cls(shape, start, [END] * len(start), step)

    @classmethod
    def up_to(cls, shape: ShapeLike, stop: Sequence[Any], step: int = 1) -> "Slicer":
        """Slice from the beginning of every axis up to ``stop``."""
        shape = Shape.of(shape)
        return cls(shape, [BEGIN] * len(stop), stop, step)

    def _resolve(self, value: Any, axis: int) -> int:
        if value is BEGIN:
            return 0
        if value is END:
            if axis >= self.shape.dimension():
                raise BadSlice("END used past the last axis of the shape", axis=axis)
            return self.shape[axis]
        return int(value)

    def validate(self) -> "Slicer":
        """Check the window against the bound shape, raising :class:`BadSlice`."""

        ndim = self.shape.dimension()
        if len(self.start) != len(self.stop):
            raise BadSlice(
                f"start has {len(self.start)} entries but stop has {len(self.stop)}"
            )
        if len(self.start) != ndim:
            raise BadSlice(
                f"slicer covers {len(self.start)} axes but the shape {self.shape} has {ndim}"
            )
        if self.step == 0:
            raise BadSlice("step size must not be zero")
        if self.step < 0:
            raise BadSlice("negative steps are not supported")

        for axis, (lo, hi) in enumerate(zip(self.start, self.stop)):
            if lo < 0 or hi < 0:
                raise BadSlice("negative indices are not allowed", axis=axis)
            if lo > hi:
                raise BadSlice(f"start {lo} is past stop {hi}", axis=axis)
            if hi > self.shape[axis]:
                raise BadSlice(
                    f"stop {hi} exceeds the axis extent {self.shape[axis]}", axis=axis
                )
        return self

    def output_shape(self) -> Shape:
        self.validate()
        return Shape(
            -(-(hi - lo) // self.step) for lo, hi in zip(self.start, self.stop)
        )

    def source_indices(self) -> np.ndarray:
        """Flat indices of the selected elements in row-major output order."""

        out = self.output_shape()
        for axis, size in enumerate(out):
            if size == 0:
                raise BadSlice("the selected window is empty", axis=axis)

        strides = self.shape.strides()
        offset = sum(lo * stride for lo, stride in zip(self.start, strides))
        step_strides: List[int] = [stride * self.step for stride in strides]
        return strided_indices(out.dims, step_strides, offset)

    def __repr__(self) -> str:
        return (
            f"Slicer(shape={self.shape}, start={self.start}, "
            f"stop={self.stop}, step={self.step})"
        )


__all__ = ["BEGIN", "END", "Slicer"]

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Axis grouping for reductions.

``axis_group_indices(shape, axis)`` partitions a row-major buffer into groups
whose members differ only along ``axis``. Reductions fold every group to a
single value; the groups come out in row-major order of the remaining axes,
so the folded values already form the buffer of the reduced tensor.

For shape ``(d0, ..., dn)`` and axis ``k``::

    block  = reverse_cumulative[k]          # prod(d[k:])
    inner  = block // d[k]                  # stride of axis k
    outer  = cumulative[k] // d[k]          # prod(d[:k])

    group (o, i), member c  ->  o * block + c * inner + i
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .exceptions import AxisError
from .shape import Shape, ShapeLike, strided_indices

ALL_AXES = -1
"""Axis sentinel selecting a whole-tensor reduction."""


def check_axis(axis: int, ndim: int) -> int:
    if isinstance(axis, bool) or not isinstance(axis, (int, np.integer)):
        raise TypeError(f"axis must be an integer, got {type(axis).__name__}")
    axis = int(axis)
    if axis < 0 or axis >= ndim:
        raise AxisError(axis, ndim)
    return axis


def axis_group_indices(shape: ShapeLike, axis: int) -> np.ndarray:
    """Index matrix ``(groups, shape[axis])`` selecting every axis group."""

    shape = Shape.of(shape)
    axis = check_axis(axis, shape.dimension())
    size = shape[axis]
    block = shape.reverse_cumulative_shape()[axis]
    inner = block // size
    outer = shape.cumulative_shape()[axis] // size

    # Walk (outer, inner, member) so rows enumerate the remaining axes in
    # row-major order and columns step along ``axis``.
    index = strided_indices((outer, inner, size), (block, 1, inner))
    return index.reshape(outer * inner, size)


def group(buffer: np.ndarray, shape: ShapeLike, axis: int) -> np.ndarray:
    """Gather ``buffer`` into its axis groups, one row per group."""
    return buffer[axis_group_indices(shape, axis)]


def ungroup(groups: np.ndarray, shape: ShapeLike, axis: int) -> np.ndarray:
    """Scatter axis groups back into a flat row-major buffer.

    ``ungroup(group(buf, shape, axis), shape, axis)`` reproduces ``buf``.
    """

    shape = Shape.of(shape)
    index = axis_group_indices(shape, axis)
    groups = np.asarray(groups)
    if groups.shape != index.shape:
        raise ValueError(
            f"Expected groups of shape {index.shape} for {shape} along axis {axis}, "
            f"got {groups.shape}"
        )
    out = np.empty(shape.element_size(), dtype=groups.dtype)
    out[index] = groups
    return out


def permutation_indices(shape: ShapeLike, order: Sequence[int]) -> np.ndarray:
    """Source positions that lay out ``shape`` with its axes in ``order``.

    ``buffer[permutation_indices(shape, order)]`` is the row-major buffer of
    the tensor whose axis ``k`` is the original axis ``order[k]``.
    """

    shape = Shape.of(shape)
    if sorted(order) != list(range(shape.dimension())):
        raise ValueError(f"{tuple(order)} is not a permutation of the axes of {shape}")
    strides = shape.strides()
    dims = [shape[axis] for axis in order]
    return strided_indices(dims, [strides[axis] for axis in order])


__all__ = [
    "ALL_AXES",
    "axis_group_indices",
    "check_axis",
    "group",
    "permutation_indices",
    "ungroup",
]

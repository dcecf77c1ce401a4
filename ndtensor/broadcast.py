# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Broadcasting rules for combining tensors of different shapes.

Two shapes are aligned on their trailing axes; the shorter one is treated as
if it were left-padded with size-1 axes. Each aligned pair must either match
or contain a 1, and the unified size is the larger of the two.
"""

from __future__ import annotations

import numpy as np

from .exceptions import BroadcastError
from .shape import Shape, ShapeLike, strided_indices


def broadcast_shapes(left: ShapeLike, right: ShapeLike) -> Shape:
    """Return the unified shape of ``left`` and ``right``.

    Raises:
        BroadcastError: if an aligned axis pair is neither equal nor contains
            a size-1 axis. ``axis`` is reported in the unified shape's
            numbering.
    """

    left = Shape.of(left)
    right = Shape.of(right)
    ndim = max(left.dimension(), right.dimension())
    padded_left = (1,) * (ndim - left.dimension()) + left.dims
    padded_right = (1,) * (ndim - right.dimension()) + right.dims

    unified = []
    for axis, (a, b) in enumerate(zip(padded_left, padded_right)):
        if a == b or b == 1:
            unified.append(a)
        elif a == 1:
            unified.append(b)
        else:
            raise BroadcastError(
                "Cannot broadcast tensors, dimensions mismatch",
                axis=axis,
                left=left.dims,
                right=right.dims,
            )
    return Shape(unified)


def is_broadcastable(left: ShapeLike, right: ShapeLike) -> bool:
    try:
        broadcast_shapes(left, right)
    except BroadcastError:
        return False
    return True


def expand_indices(source: ShapeLike, target: ShapeLike) -> np.ndarray:
    """Flat indices into a ``source`` buffer for every position of ``target``.

    Reading ``buffer[expand_indices(source, target)]`` materialises the
    logical repetition of ``source`` up to ``target``.
    """

    source = Shape.of(source)
    target = Shape.of(target)
    if target.dimension() < source.dimension():
        raise BroadcastError(
            "Cannot expand to a shape with fewer axes",
            left=source.dims,
            right=target.dims,
        )

    pad = target.dimension() - source.dimension()
    source_strides = source.strides()
    strides = []
    for axis, size in enumerate(target.dims):
        src_axis = axis - pad
        if src_axis < 0:
            strides.append(0)
            continue
        src_size = source.dims[src_axis]
        if src_size == size:
            strides.append(source_strides[src_axis])
        elif src_size == 1:
            strides.append(0)
        else:
            raise BroadcastError(
                "Cannot expand tensor",
                axis=axis,
                left=source.dims,
                right=target.dims,
            )
    return strided_indices(target.dims, strides)


__all__ = ["broadcast_shapes", "expand_indices", "is_broadcastable"]

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Shape model shared by every tensor: axis sizes plus derived cumulative
products and row-major strides.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, Iterator, Sequence, Tuple, Union

import numpy as np

from .exceptions import InvalidShape

# Largest number of elements a single flat buffer can address.
_MAX_ELEMENTS = int(np.iinfo(np.intp).max)

ShapeLike = Union["Shape", int, Sequence[int]]


class Shape:
    """Immutable, ordered sequence of axis sizes.

    A ``Shape`` never changes after construction; tensors that change shape
    build a new instance. The empty shape ``()`` describes a scalar and holds
    exactly one element.

    Examples:
        >>> s = Shape((3, 2, 4))
        >>> s.element_size()
        24
        >>> s.cumulative_shape()
        (3, 6, 24)
        >>> s.strides()
        (8, 4, 1)
    """

    __slots__ = ("_dims",)

    def __init__(self, dims: Sequence[int] = ()):
        values = []
        for value in dims:
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise InvalidShape(
                    f"Shape entries must be integers, got {value!r}"
                )
            values.append(int(value))
        self._dims: Tuple[int, ...] = tuple(values)

    @classmethod
    def of(cls, value: Any) -> "Shape":
        """Coerce ``value`` (Shape, int or sequence of ints) into a Shape."""
        if isinstance(value, Shape):
            return value
        if isinstance(value, Integral) and not isinstance(value, bool):
            return cls((int(value),))
        if isinstance(value, (list, tuple)):
            return cls(value)
        raise InvalidShape(f"Cannot interpret {value!r} as a shape")

    @property
    def dims(self) -> Tuple[int, ...]:
        return self._dims

    def dimension(self) -> int:
        """Number of axes."""
        return len(self._dims)

    def element_size(self) -> int:
        """Product of all axis sizes (1 for the scalar shape)."""
        total = 1
        for value in self._dims:
            total *= value
            if total > _MAX_ELEMENTS:
                raise InvalidShape(
                    f"Shape {self} holds more elements than a buffer can address",
                    shape=self._dims,
                )
        return total

    def cumulative_shape(self) -> Tuple[int, ...]:
        """Running product of the axis sizes, axis 0 first."""
        result = []
        running = 1
        for value in self._dims:
            running *= value
            result.append(running)
        return tuple(result)

    def reverse_cumulative_shape(self) -> Tuple[int, ...]:
        """Running product taken from the last axis backwards.

        Entry ``i`` is the product of ``dims[i:]``, i.e. the length of one
        contiguous block that varies axes ``i`` and everything after it.
        """
        result = [0] * len(self._dims)
        running = 1
        for axis in range(len(self._dims) - 1, -1, -1):
            running *= self._dims[axis]
            result[axis] = running
        return tuple(result)

    def strides(self) -> Tuple[int, ...]:
        """Row-major stride of every axis, ``element_size() // cumulative[i]``."""
        count = self.element_size()
        return tuple(count // cum for cum in self.cumulative_shape())

    @staticmethod
    def is_initial_valid(shape: ShapeLike) -> bool:
        """Return ``True`` when every axis size is strictly positive."""
        dims = shape.dims if isinstance(shape, Shape) else Shape.of(shape).dims
        return all(value > 0 for value in dims)

    def without_axis(self, axis: int) -> "Shape":
        return Shape(self._dims[:axis] + self._dims[axis + 1 :])

    # Sequence protocol
    def __len__(self) -> int:
        return len(self._dims)

    def __iter__(self) -> Iterator[int]:
        return iter(self._dims)

    def __getitem__(self, item):
        return self._dims[item]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shape):
            return self._dims == other._dims
        if isinstance(other, (tuple, list)):
            return self._dims == tuple(other)
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self._dims)

    def __str__(self) -> str:
        return "(" + ", ".join(str(value) for value in self._dims) + ")"

    def __repr__(self) -> str:
        return f"Shape{self}"


def strided_indices(
    dims: Sequence[int], strides: Sequence[int], offset: int = 0
) -> np.ndarray:
    """Flat buffer offsets visited when walking ``dims`` in row-major order.

    Position ``(i0, i1, ...)`` maps to ``offset + sum(i_k * strides[k])``. A
    stride of 0 repeats the same element along that axis, which is how
    broadcast expansion is expressed.
    """
    index = np.asarray(offset, dtype=np.intp)
    for size, stride in zip(dims, strides):
        index = np.add.outer(index, np.arange(size, dtype=np.intp) * stride)
    return index.reshape(-1)

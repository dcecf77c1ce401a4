# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Free-function forms of tensor operations.

Shape-changing helpers here never mutate their input: they operate on a clone
and return it, leaving the caller's tensor (and its frozen state) untouched.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from .broadcast import broadcast_shapes, expand_indices
from .exceptions import ShapeMismatch
from .reduction import ALL_AXES
from .shape import Shape, ShapeLike
from .slicer import Slicer
from .tensor import Tensor

Axis = Optional[int]


def reshape(tensor: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.clone().reshape(*shape)


def resize(tensor: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.clone().resize(*shape)


def ravel(tensor: Tensor) -> Tensor:
    return tensor.flatten()


def flatten(tensor: Tensor) -> Tensor:
    return tensor.flatten()


def squeeze(tensor: Tensor) -> Tensor:
    return tensor.clone().squeeze()


def swap_axis(tensor: Tensor, axis0: int, axis1: int) -> Tensor:
    return tensor.clone().swap_axis(axis0, axis1)


swapaxes = swap_axis


def gather(tensor: Tensor, index: Union[Tensor, Sequence[int]]) -> Tensor:
    return tensor.gather(index)


def slice(tensor: Tensor, slicer: Union[Slicer, Sequence[Any]], stop=None, step: int = 1) -> Tensor:
    return tensor.slice(slicer, stop, step)


def clip(tensor: Tensor, min_value=None, max_value=None) -> Tensor:
    return tensor.clone().clip(min_value, max_value)


def apply(tensor: Tensor, fn: Callable[[Any], Any]) -> Tensor:
    return tensor.clone().apply(fn)


def broadcast_to(tensor: Tensor, shape: ShapeLike) -> Tensor:
    """Materialise ``tensor`` repeated up to ``shape``."""

    target = Shape.of(shape)
    if target == tensor.shape:
        return tensor.clone()
    if not tensor.config.is_broadcastable:
        raise ShapeMismatch(
            "Tensor configuration does not allow broadcasting",
            left=tensor.shape.dims,
            right=target.dims,
        )
    values = tensor.buffer[expand_indices(tensor.shape, target)]
    return Tensor.from_buffer(values, target, tensor.config, tensor.dtype)


def broadcast_tensors(left: Tensor, right: Tensor):
    """Expand both tensors to their unified shape."""
    shape = broadcast_shapes(left.shape, right.shape)
    return broadcast_to(left, shape), broadcast_to(right, shape)


def add(left: Tensor, right: Any) -> Tensor:
    return left + right


def subtract(left: Tensor, right: Any) -> Tensor:
    return left - right


def multiply(left: Tensor, right: Any) -> Tensor:
    return left * right


def divide(left: Tensor, right: Any) -> Tensor:
    return left / right


def axis_group(tensor: Tensor, axis: int) -> np.ndarray:
    return tensor.axis_group(axis)


def sum(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.sum(axis)


def prod(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.prod(axis)


def mean(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.mean(axis)


def max(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.max(axis)


def min(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.min(axis)


def argmax(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.argmax(axis)


def argmin(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.argmin(axis)


def variance(tensor: Tensor, axis: Axis = ALL_AXES, unbiased: bool = False):
    return tensor.variance(axis, unbiased)


def peak_to_peak(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.peak_to_peak(axis)


def cumulative_sum(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.cumulative_sum(axis)


def cumulative_product(tensor: Tensor, axis: Axis = ALL_AXES):
    return tensor.cumulative_product(axis)


def cumsum(tensor: Tensor, axis: Axis = ALL_AXES) -> Tensor:
    return tensor.cumsum(axis)


def cumprod(tensor: Tensor, axis: Axis = ALL_AXES) -> Tensor:
    return tensor.cumprod(axis)


def all(tensor: Tensor, predicate=None, axis: Axis = ALL_AXES):
    return tensor.all(predicate, axis)


def any(tensor: Tensor, predicate=None, axis: Axis = ALL_AXES):
    return tensor.any(predicate, axis)


__all__ = [
    "add",
    "all",
    "any",
    "apply",
    "argmax",
    "argmin",
    "axis_group",
    "broadcast_shapes",
    "broadcast_tensors",
    "broadcast_to",
    "clip",
    "cumprod",
    "cumsum",
    "cumulative_product",
    "cumulative_sum",
    "divide",
    "flatten",
    "gather",
    "max",
    "mean",
    "min",
    "multiply",
    "peak_to_peak",
    "prod",
    "ravel",
    "reshape",
    "resize",
    "slice",
    "squeeze",
    "subtract",
    "sum",
    "swap_axis",
    "swapaxes",
    "variance",
]

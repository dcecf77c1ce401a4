# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exception types raised by ndtensor.

Every error derives from :class:`TensorError` and from the builtin exception
that best describes it, so callers may catch either ``ValueError`` style
families or the precise ndtensor type.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple


class TensorError(Exception):
    """Base class for ndtensor-specific exceptions."""


class InvalidShape(TensorError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        shape: Optional[Sequence[int]] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        detail = ""
        if expected is not None and actual is not None:
            detail = f" (expected {expected} elements, got {actual})"
        super().__init__(f"{message}{detail}")
        self.shape = None if shape is None else tuple(shape)
        self.expected = expected
        self.actual = actual


class InitializerError(TensorError, TypeError):
    def __init__(self, message: str, *, initializer: Any = None, dtype: Optional[str] = None):
        super().__init__(message)
        self.initializer = initializer
        self.dtype = dtype


class InvalidReshape(TensorError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        requested: Optional[Sequence[int]] = None,
        element_count: Optional[int] = None,
    ):
        detail = ""
        if requested is not None and element_count is not None:
            detail = (
                f". Requested to reshape {element_count} elements to "
                f"{_format_dims(requested)}"
            )
        super().__init__(f"{message}{detail}")
        self.requested = None if requested is None else tuple(requested)
        self.element_count = element_count


class BadIndexer(TensorError, IndexError):
    def __init__(
        self,
        message: str,
        *,
        index: Any = None,
        shape: Optional[Sequence[int]] = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = None if shape is None else tuple(shape)


class BadSlice(TensorError, ValueError):
    def __init__(self, message: str, *, axis: Optional[int] = None):
        location = "" if axis is None else f" (axis {axis})"
        super().__init__(f"Unable to slice: {message}{location}")
        self.axis = axis


class BroadcastError(TensorError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        axis: Optional[int] = None,
        left: Optional[Sequence[int]] = None,
        right: Optional[Sequence[int]] = None,
    ):
        detail = ""
        if left is not None and right is not None:
            detail = f" between {_format_dims(left)} and {_format_dims(right)}"
        if axis is not None:
            detail += f" at axis {axis}"
        super().__init__(f"{message}{detail}")
        self.axis = axis
        self.left = None if left is None else tuple(left)
        self.right = None if right is None else tuple(right)


class ShapeMismatch(TensorError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        left: Optional[Sequence[int]] = None,
        right: Optional[Sequence[int]] = None,
    ):
        detail = ""
        if left is not None and right is not None:
            detail = f": {_format_dims(left)} and {_format_dims(right)}"
        super().__init__(f"{message}{detail}")
        self.left = None if left is None else tuple(left)
        self.right = None if right is None else tuple(right)


class AxisError(TensorError, IndexError):
    def __init__(self, axis: int, ndim: int):
        if ndim == 0:
            message = f"Axis {axis} is out of range for a scalar tensor"
        else:
            message = f"Axis {axis} is out of range, expected 0 <= axis <= {ndim - 1}"
        super().__init__(message)
        self.axis = axis
        self.ndim = ndim


class NotFreezable(TensorError, RuntimeError):
    pass


class FrozenTensorError(TensorError, RuntimeError):
    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation} a frozen tensor; call unfreeze() first")
        self.operation = operation


class TensorArithmeticError(TensorError, ArithmeticError):
    pass


class SizeMismatch(TensorError, ValueError):
    def __init__(self, message: str, *, expected: int, actual: int):
        super().__init__(f"{message} (target has {actual} elements, source has {expected})")
        self.expected = expected
        self.actual = actual


class OperationUndefined(TensorError, RuntimeError):
    pass


def _format_dims(dims: Sequence[int]) -> str:
    values: Tuple[int, ...] = tuple(dims)
    return "(" + ", ".join(str(v) for v in values) + ")"

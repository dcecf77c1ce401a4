# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Dense N-dimensional tensor backed by a flat, row-major NumPy buffer.
"""

from __future__ import annotations

import logging
from numbers import Integral, Number
from typing import Any, Callable, Optional, Sequence, Tuple, Union

import numpy as np

from . import reduction as _reduction
from .broadcast import broadcast_shapes, expand_indices
from .config import (
    DEFAULT_CONFIG,
    DEFAULT_DTYPE,
    Config,
    Initializer,
    dtype_name,
    is_integral,
    numpy_dtype,
    resolve_dtype,
)
from .exceptions import (
    BadIndexer,
    BadSlice,
    FrozenTensorError,
    InitializerError,
    InvalidReshape,
    InvalidShape,
    NotFreezable,
    OperationUndefined,
    ShapeMismatch,
    SizeMismatch,
    TensorArithmeticError,
)
from .reduction import ALL_AXES, check_axis
from .rng import RandomSource, default_source
from .shape import Shape, ShapeLike
from .slicer import Slicer

logger = logging.getLogger(__name__)

INFER = -1
"""Reshape entry whose size is inferred from the element count."""

Scalar = Union[int, float, bool]
Axis = Optional[int]


def _shape_args(shape: Tuple[Any, ...]) -> Any:
    """Accept both ``f(2, 3)`` and ``f((2, 3))`` call styles."""
    if len(shape) == 1 and isinstance(shape[0], (list, tuple, Shape)):
        return shape[0]
    return shape


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (Number, np.generic))


def _whole(axis: Axis) -> bool:
    return axis is None or (not isinstance(axis, bool) and axis == ALL_AXES)


def _check_divisor(dividend: Any, divisor: Any) -> None:
    """Reject a zero divisor when both operands are integers."""
    if np.asarray(dividend).dtype.kind not in "iub":
        return
    values = np.asarray(divisor)
    if values.dtype.kind in "iub" and np.any(values == 0):
        raise TensorArithmeticError("Integer division by zero")


def _initial_buffer(
    initializer: Initializer,
    count: int,
    dtype: str,
    random_source: Optional[RandomSource],
) -> np.ndarray:
    target = numpy_dtype(dtype)
    if initializer is Initializer.ZERO:
        return np.zeros(count, dtype=target)
    if initializer is Initializer.ONE:
        return np.ones(count, dtype=target)
    if initializer is Initializer.UNINITIALIZED:
        return np.empty(count, dtype=target)
    if initializer is Initializer.INDEX_SEQUENCE:
        return np.arange(count, dtype=np.int64).astype(target)

    source = default_source() if random_source is None else random_source
    if not isinstance(source, RandomSource):
        raise InitializerError(
            f"{type(source).__name__} does not provide gaussian() and uniform() draws",
            initializer=initializer,
            dtype=dtype,
        )
    if initializer is Initializer.UNIFORM_GAUSSIAN:
        samples = [source.gaussian(0.0, 1.0) for _ in range(count)]
    else:
        samples = [source.uniform(0.0, 1.0) for _ in range(count)]
    try:
        return np.asarray(samples, dtype=np.float64).astype(target)
    except (TypeError, ValueError) as exc:
        raise InitializerError(
            f"Cannot convert {initializer.name} samples to {dtype}",
            initializer=initializer,
            dtype=dtype,
        ) from exc


def _as_buffer(data: Any, dtype: Optional[str]) -> Tuple[np.ndarray, str]:
    """Copy ``data`` into a fresh array, choosing a dtype when none is given."""

    if dtype is None:
        if isinstance(data, np.ndarray):
            dtype = dtype_name(data.dtype)
        else:
            probe = np.asarray(data)
            dtype = "bool" if probe.dtype == np.bool_ else DEFAULT_DTYPE
    dtype = resolve_dtype(dtype)
    return np.array(data, dtype=numpy_dtype(dtype)), dtype


class Tensor:
    """
    A dense N-dimensional array.

    A tensor owns exactly one :class:`Shape`, one contiguous buffer holding
    ``shape.element_size()`` elements in row-major order, and its own
    :class:`Config`. Shape-changing methods (``reshape``, ``resize``,
    ``squeeze``, ``swap_axis``, ``ravel``) mutate the tensor in place and
    return it; arithmetic always produces new tensors.

    Freezing a tensor blocks every shape-changing method. Element values stay
    writable while frozen: ``apply``, the compound operators, ``clip`` and
    item assignment keep working.

    Examples:
        >>> t = Tensor((2, 3), Initializer.INDEX_SEQUENCE)
        >>> t.to_flat_index((1, 2))
        5
        >>> t.sum()
        15.0
    """

    __slots__ = ("_shape", "_data", "_config", "_dtype", "_frozen")

    # Let reflected operators run when a NumPy scalar is the left operand.
    __array_ufunc__ = None
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        shape: ShapeLike,
        initializer: Initializer = Initializer.UNIFORM_GAUSSIAN,
        config: Config = DEFAULT_CONFIG,
        dtype: Optional[str] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Allocate a tensor and fill it according to ``initializer``.

        Args:
            shape: Axis sizes; every size must be positive.
            initializer: Fill policy for the new buffer.
            config: Behaviour switches owned by this tensor.
            dtype: 'float32' (default), 'float64', 'int32', 'int64' or 'bool'.
            random_source: Source for the randomised initializers. A fresh
                unseeded source is used when omitted.

        Examples:
            >>> Tensor((3,), Initializer.ZERO).tolist()
            [0.0, 0.0, 0.0]
        """
        shape = Shape.of(shape)
        if not Shape.is_initial_valid(shape):
            raise InvalidShape(
                f"Invalid shape {shape}. All dimensions must be natural numbers (> 0)",
                shape=shape.dims,
            )
        if not isinstance(initializer, Initializer):
            raise InitializerError(f"Unknown initializer {initializer!r}", initializer=initializer)
        dtype = resolve_dtype(dtype)
        data = _initial_buffer(initializer, shape.element_size(), dtype, random_source)
        self._assign(shape, data, config, dtype)

    def _assign(self, shape: Shape, data: np.ndarray, config: Config, dtype: str) -> None:
        if not isinstance(config, Config):
            raise TypeError(f"config must be a Config, got {type(config).__name__}")
        self._shape = shape
        self._data = data
        self._config = config
        self._dtype = dtype
        self._frozen = False

    @classmethod
    def _wrap(
        cls, data: np.ndarray, shape: Shape, config: Config, dtype: Optional[str] = None
    ) -> "Tensor":
        """Build a tensor around an already computed flat buffer."""

        name = dtype_name(data.dtype) if dtype is None else dtype
        target = numpy_dtype(name)
        if data.dtype != target:
            data = data.astype(target)
        data = np.ascontiguousarray(data)
        if data.ndim != 1:
            data = data.reshape(-1)
        instance = cls.__new__(cls)
        instance._assign(shape, data, config, name)
        return instance

    @classmethod
    def from_buffer(
        cls,
        buffer: Any,
        shape: ShapeLike,
        config: Config = DEFAULT_CONFIG,
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Create a tensor over a copy of the flat ``buffer``."""

        shape = Shape.of(shape)
        if not Shape.is_initial_valid(shape):
            raise InvalidShape(
                f"Invalid shape {shape}. All dimensions must be natural numbers (> 0)",
                shape=shape.dims,
            )
        data, dtype = _as_buffer(buffer, dtype)
        if data.ndim != 1:
            raise InvalidShape(
                f"Buffer must be one-dimensional, got {data.ndim} dimensions",
                shape=shape.dims,
            )
        expected = shape.element_size()
        if data.shape[0] != expected:
            raise InvalidShape(
                f"The buffer does not fit shape {shape}",
                shape=shape.dims,
                expected=expected,
                actual=data.shape[0],
            )
        return cls._wrap(data, shape, config, dtype)

    # Core properties
    @property
    def shape(self) -> Shape:
        """Current shape."""
        return self._shape

    @property
    def dtype(self) -> str:
        return self._dtype

    @property
    def config(self) -> Config:
        return self._config

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._data.shape[0]

    @property
    def ndim(self) -> int:
        return self._shape.dimension()

    @property
    def strides(self) -> Tuple[int, ...]:
        """Row-major strides in elements."""
        return self._shape.strides()

    @property
    def buffer(self) -> np.ndarray:
        """Read-only view of the flat buffer in storage order."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def numel(self) -> int:
        return self.size

    def dim(self) -> int:
        return self.ndim

    # Data conversion methods
    def numpy(self) -> np.ndarray:
        """Copy the contents into an array shaped like the tensor."""
        return self._data.reshape(self._shape.dims).copy()

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        array = self.numpy()
        if dtype is not None:
            return array.astype(dtype, copy=False)
        return array

    def tolist(self) -> Any:
        return self.numpy().tolist()

    def item(self) -> Scalar:
        """Return the Python scalar value for a single-element tensor."""
        if self.size != 1:
            raise OperationUndefined(
                f"item() needs a single-element tensor, this one holds {self.size}"
            )
        return self._data[0].item()

    def clone(self) -> "Tensor":
        """Create an unfrozen copy sharing nothing with this tensor."""
        return self._wrap(self._data.copy(), self._shape, self._config, self._dtype)

    def copy(self) -> "Tensor":
        return self.clone()

    def astype(self, dtype: str) -> "Tensor":
        dtype = resolve_dtype(dtype)
        return self._wrap(self._data.astype(numpy_dtype(dtype)), self._shape, self._config, dtype)

    # Addressing
    def to_flat_index(self, index: Union[int, Sequence[int]]) -> int:
        """Translate a multi-index into a position of the flat buffer.

        Axis ``i`` advances ``element_count // cumulative_shape[i]`` positions
        per step, so ``(i0, i1, i2)`` on shape ``(a, b, c)`` lands on
        ``i0*b*c + i1*c + i2``.
        """

        if isinstance(index, Integral):
            index = (index,)
        index = tuple(index)
        if len(index) != self.ndim:
            raise BadIndexer(
                f"Indexer has {len(index)} entries but the tensor has "
                f"{self.ndim} dimensions",
                index=index,
                shape=self._shape.dims,
            )
        count = self.size
        cumulative = self._shape.cumulative_shape()
        flat = 0
        for axis, (position, extent) in enumerate(zip(index, self._shape)):
            if isinstance(position, bool) or not isinstance(position, Integral):
                raise BadIndexer(
                    f"Index entries must be integers, got {position!r}",
                    index=index,
                    shape=self._shape.dims,
                )
            if position < 0 or position >= extent:
                raise BadIndexer(
                    f"Index {position} is out of range for dimension {axis} "
                    f"with size {extent}",
                    index=index,
                    shape=self._shape.dims,
                )
            flat += int(position) * (count // cumulative[axis])
        return flat

    def __getitem__(self, key):
        """Element access by multi-index, slicing by Slicer, gathering by tensor."""
        if isinstance(key, Slicer):
            return self.slice(key)
        if isinstance(key, Tensor):
            return self.gather(key)
        return self._data[self.to_flat_index(key)].item()

    def __setitem__(self, key, value) -> None:
        self._data[self.to_flat_index(key)] = value

    # Shape manipulation
    def _ensure_shape_mutable(self, operation: str) -> None:
        if self._frozen:
            raise FrozenTensorError(operation)

    def _resolve_reshape(self, requested: Sequence[Any]) -> Shape:
        count = self.size
        infer_axis = None
        known = 1
        for axis, value in enumerate(requested):
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise InvalidReshape(
                    f"Reshape entries must be integers, got {value!r}",
                    requested=requested,
                    element_count=count,
                )
            if value == 0:
                raise InvalidReshape(
                    "New shape has a dimension of size zero",
                    requested=requested,
                    element_count=count,
                )
            if value == INFER:
                if infer_axis is not None:
                    raise InvalidReshape(
                        "More than one inferred (-1) dimension found in reshape",
                        requested=requested,
                        element_count=count,
                    )
                infer_axis = axis
                continue
            if value < 0:
                raise InvalidReshape(
                    f"Negative dimension {value} is not allowed",
                    requested=requested,
                    element_count=count,
                )
            known *= int(value)

        resolved = [int(value) for value in requested]
        if infer_axis is None:
            if known != count:
                raise InvalidReshape(
                    "Element counts differ", requested=requested, element_count=count
                )
        else:
            if count % known != 0:
                raise InvalidReshape(
                    "Cannot infer the dynamic dimension, sizes do not divide evenly",
                    requested=requested,
                    element_count=count,
                )
            resolved[infer_axis] = count // known
        return Shape(resolved)

    def reshape(self, *shape: Union[int, Sequence[int]]) -> "Tensor":
        """Relabel the buffer with a new shape of the same element count.

        At most one entry may be ``-1``; it is inferred from the others. The
        buffer itself is left untouched.
        """
        self._ensure_shape_mutable("reshape")
        requested = list(_shape_args(shape))
        self._shape = self._resolve_reshape(requested)
        return self

    def view(self, *shape: Union[int, Sequence[int]]) -> "Tensor":
        """Reshaped copy; ``self`` keeps its shape."""
        return self.clone().reshape(*shape)

    def ravel(self) -> "Tensor":
        """Reshape in place to a single axis."""
        return self.reshape(self.size)

    def flatten(self) -> "Tensor":
        """One-dimensional copy of the tensor."""
        return self._wrap(self._data.copy(), Shape((self.size,)), self._config, self._dtype)

    def resize(self, *shape: Union[int, Sequence[int]]) -> "Tensor":
        """Change the shape and element count in place.

        Existing elements keep their flat positions; growth is zero-filled and
        shrinking drops trailing elements.
        """
        self._ensure_shape_mutable("resize")
        new_shape = Shape.of(_shape_args(shape))
        if not Shape.is_initial_valid(new_shape):
            raise InvalidShape(
                f"Invalid shape {new_shape}. All dimensions must be natural numbers (> 0)",
                shape=new_shape.dims,
            )
        old_count = self.size
        new_count = new_shape.element_size()
        if new_count > old_count:
            padding = np.zeros(new_count - old_count, dtype=self._data.dtype)
            self._data = np.concatenate((self._data, padding))
            logger.debug("Grew tensor buffer from %d to %d elements", old_count, new_count)
        elif new_count < old_count:
            self._data = self._data[:new_count]
            logger.debug("Truncated tensor buffer from %d to %d elements", old_count, new_count)
        self._shape = new_shape
        return self

    def squeeze(self) -> "Tensor":
        """Drop every axis of size 1 in place."""
        self._ensure_shape_mutable("squeeze")
        self._shape = Shape(size for size in self._shape if size != 1)
        return self

    def swap_axis(self, axis0: int, axis1: int) -> "Tensor":
        """Exchange two axes in place, physically reordering the buffer.

        Afterwards ``self[..., j, ..., i, ...]`` equals the old
        ``self[..., i, ..., j, ...]`` and the row-major addressing of every
        other method stays valid.
        """
        self._ensure_shape_mutable("swap axes of")
        axis0 = check_axis(axis0, self.ndim)
        axis1 = check_axis(axis1, self.ndim)
        if axis0 == axis1:
            return self
        order = list(range(self.ndim))
        order[axis0], order[axis1] = order[axis1], order[axis0]
        self._data = self._data[_reduction.permutation_indices(self._shape, order)]
        self._shape = Shape(self._shape[axis] for axis in order)
        return self

    swapaxes = swap_axis

    def freeze(self) -> "Tensor":
        """Forbid shape changes until :meth:`unfreeze` is called."""
        if not self._config.is_freezeable:
            raise NotFreezable(
                "Cannot freeze a tensor that is declared unfreezable by its configuration"
            )
        self._frozen = True
        if self._data.base is not None:
            # Release the oversized allocation left behind by a shrinking resize.
            self._data = self._data.copy()
            logger.debug("Compacted frozen tensor buffer to %d elements", self.size)
        return self

    def unfreeze(self) -> "Tensor":
        self._frozen = False
        return self

    # Element access helpers
    def apply(self, fn: Callable[[Scalar], Scalar]) -> "Tensor":
        """Replace every element by ``fn(element)``, visiting the buffer in order."""
        data = self._data
        for position in range(data.shape[0]):
            data[position] = fn(data[position].item())
        return self

    def clip(self, min_value: Optional[Scalar] = None, max_value: Optional[Scalar] = None) -> "Tensor":
        """Clamp the elements in place to ``[min_value, max_value]``."""
        if min_value is None and max_value is None:
            return self
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ValueError(f"clip() got min_value {min_value} above max_value {max_value}")
        np.clip(self._data, min_value, max_value, out=self._data, casting="unsafe")
        return self

    def gather(self, index: Union["Tensor", Sequence[int]]) -> "Tensor":
        """Select flat positions listed by a one-dimensional integer tensor."""
        if not isinstance(index, Tensor):
            index = Tensor.from_buffer(np.asarray(index, dtype=np.int64), (len(index),))
        if index.ndim != 1:
            raise OperationUndefined(
                f"Indexing tensor must be 1 dimensional, got shape {index.shape}"
            )
        if index.dtype == "bool" or not is_integral(index.dtype):
            raise OperationUndefined(
                f"Indexing tensor must hold integers, got dtype {index.dtype}"
            )
        positions = index._data.astype(np.intp)
        invalid = np.flatnonzero((positions < 0) | (positions >= self.size))
        if invalid.size:
            bad = int(positions[invalid[0]])
            raise BadIndexer(
                f"Indexing tensor has value {bad} that is out of range; "
                f"max indexable is {self.size - 1}",
                index=bad,
                shape=self._shape.dims,
            )
        return self._wrap(self._data[positions], Shape((positions.shape[0],)), self._config, self._dtype)

    def slice(self, slicer: Union[Slicer, Sequence[Any]], stop: Optional[Sequence[Any]] = None, step: int = 1) -> "Tensor":
        """Extract a validated window into a new tensor.

        Accepts a :class:`Slicer` bound to this tensor's shape, or ``start``,
        ``stop`` and ``step`` from which one is built.
        """
        if not isinstance(slicer, Slicer):
            if stop is None:
                raise BadSlice("stop indices are required when no Slicer is given")
            slicer = Slicer(self._shape, slicer, stop, step)
        elif slicer.shape != self._shape:
            raise BadSlice(
                f"slicer is bound to shape {slicer.shape} but the tensor has shape {self._shape}"
            )
        positions = slicer.source_indices()
        return self._wrap(self._data[positions], slicer.output_shape(), self._config, self._dtype)

    def copy_to(self, target: "Tensor", allow_resize: bool = False) -> "Tensor":
        """Copy every element into ``target``, reshaping it to match first."""
        if not isinstance(target, Tensor):
            raise TypeError(f"copy_to() expects a Tensor, got {type(target).__name__}")
        if target.size != self.size and not allow_resize:
            raise SizeMismatch(
                "Cannot copy into target tensor, sizes differ and resize is not allowed",
                expected=self.size,
                actual=target.size,
            )
        if target._shape != self._shape:
            target.resize(self._shape)
        target._data[:] = self._data
        return target

    # Arithmetic
    def _aligned_operands(self, other: "Tensor", name: str) -> Tuple[np.ndarray, np.ndarray, Shape]:
        if self._shape == other._shape:
            return self._data, other._data, self._shape
        if not (self._config.is_broadcastable and other._config.is_broadcastable):
            raise ShapeMismatch(
                f"Element wise {name} is not defined for mismatched shapes "
                "unless both tensors allow broadcasting",
                left=self._shape.dims,
                right=other._shape.dims,
            )
        shape = broadcast_shapes(self._shape, other._shape)
        logger.debug("Broadcasting %s %s with %s to %s", name, self._shape, other._shape, shape)
        left = self._data[expand_indices(self._shape, shape)]
        right = other._data[expand_indices(other._shape, shape)]
        return left, right, shape

    def _compute(self, ufunc: np.ufunc, left: Any, right: Any, name: str) -> np.ndarray:
        if ufunc in (np.true_divide, np.floor_divide):
            _check_divisor(left, right)
        try:
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                return np.asarray(ufunc(left, right))
        except TypeError as exc:
            raise OperationUndefined(f"{name} is not defined for dtype {self._dtype}") from exc

    def _binary(self, other: Any, ufunc: np.ufunc, name: str, reflected: bool = False):
        if isinstance(other, Tensor):
            left, right, shape = self._aligned_operands(other, name)
        elif _is_scalar(other):
            left, right, shape = self._data, other, self._shape
        else:
            return NotImplemented
        if reflected:
            left, right = right, left
        result = self._compute(ufunc, left, right, name)
        if result.ndim == 0:
            result = result.reshape(1)
        return self._wrap(result, shape, self._config)

    def _inplace(self, other: Any, ufunc: np.ufunc, name: str):
        if isinstance(other, Tensor):
            if other._shape != self._shape:
                raise ShapeMismatch(
                    f"In-place {name} needs tensors of identical shape",
                    left=self._shape.dims,
                    right=other._shape.dims,
                )
            operand = other._data
        elif _is_scalar(other):
            operand = other
        else:
            return NotImplemented
        if ufunc is np.true_divide and is_integral(self._dtype):
            ufunc = np.floor_divide
        if ufunc is np.floor_divide and is_integral(self._dtype):
            # The quotient is stored back as integers.
            if np.any(np.asarray(operand) == 0):
                raise TensorArithmeticError("Integer division by zero")
        try:
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                ufunc(self._data, operand, out=self._data, casting="unsafe")
        except TypeError as exc:
            raise OperationUndefined(f"{name} is not defined for dtype {self._dtype}") from exc
        return self

    def __neg__(self) -> "Tensor":
        if self._dtype == "bool":
            raise OperationUndefined("negation is not defined for dtype bool")
        return self._wrap(np.negative(self._data), self._shape, self._config, self._dtype)

    def __add__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, np.add, "addition")

    def __radd__(self, other: Scalar) -> "Tensor":
        return self._binary(other, np.add, "addition", reflected=True)

    def __sub__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, np.subtract, "subtraction")

    def __rsub__(self, other: Scalar) -> "Tensor":
        return self._binary(other, np.subtract, "subtraction", reflected=True)

    def __mul__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, np.multiply, "multiplication")

    def __rmul__(self, other: Scalar) -> "Tensor":
        return self._binary(other, np.multiply, "multiplication", reflected=True)

    def __truediv__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, np.true_divide, "division")

    def __rtruediv__(self, other: Scalar) -> "Tensor":
        return self._binary(other, np.true_divide, "division", reflected=True)

    def __floordiv__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, np.floor_divide, "floor division")

    def __rfloordiv__(self, other: Scalar) -> "Tensor":
        return self._binary(other, np.floor_divide, "floor division", reflected=True)

    def __iadd__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, np.add, "addition")

    def __isub__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, np.subtract, "subtraction")

    def __imul__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, np.multiply, "multiplication")

    def __itruediv__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, np.true_divide, "division")

    # Comparison
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        if self._shape != other._shape:
            return False
        return bool(np.array_equal(self._data, other._data))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def allclose(self, other: "Tensor", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """Check if tensors share a shape and are approximately equal."""
        if self._shape != other._shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    # Reductions
    def axis_group(self, axis: int) -> np.ndarray:
        """Rows of elements that differ only along ``axis``.

        Row ``r`` holds the values met while stepping ``axis`` from 0 to
        ``shape[axis] - 1`` with the remaining axes fixed at the ``r``-th
        combination in row-major order.
        """
        return _reduction.group(self._data, self._shape, axis)

    def _groups(self, axis: Axis) -> np.ndarray:
        if _whole(axis):
            return self._data.reshape(1, -1)
        return self.axis_group(axis)

    def _reduce(self, axis: Axis, fold: Callable[[np.ndarray], np.ndarray], name: str):
        groups = self._groups(axis)
        try:
            with np.errstate(invalid="ignore", over="ignore"):
                folded = np.asarray(fold(groups))
        except TypeError as exc:
            raise OperationUndefined(f"{name} is not defined for dtype {self._dtype}") from exc
        if _whole(axis):
            return folded[0].item()
        return self._wrap(folded, self._shape.without_axis(int(axis)), self._config)

    def sum(self, axis: Axis = ALL_AXES):
        """Sum of all elements, or a tensor of sums along ``axis``."""
        return self._reduce(axis, lambda g: np.sum(g, axis=1), "sum")

    def prod(self, axis: Axis = ALL_AXES):
        return self._reduce(axis, lambda g: np.prod(g, axis=1), "prod")

    def mean(self, axis: Axis = ALL_AXES):
        return self._reduce(axis, lambda g: np.mean(g, axis=1), "mean")

    def max(self, axis: Axis = ALL_AXES):
        return self._reduce(axis, lambda g: np.max(g, axis=1), "max")

    def min(self, axis: Axis = ALL_AXES):
        return self._reduce(axis, lambda g: np.min(g, axis=1), "min")

    def argmax(self, axis: Axis = ALL_AXES):
        """Flat position of the maximum, or its position along ``axis``."""
        return self._reduce(axis, lambda g: np.argmax(g, axis=1).astype(np.int64), "argmax")

    def argmin(self, axis: Axis = ALL_AXES):
        return self._reduce(axis, lambda g: np.argmin(g, axis=1).astype(np.int64), "argmin")

    def variance(self, axis: Axis = ALL_AXES, unbiased: bool = False):
        """Population variance, or the sample estimator when ``unbiased``."""
        length = self.size if _whole(axis) else self._shape[check_axis(axis, self.ndim)]
        if unbiased and length < 2:
            raise OperationUndefined("unbiased variance needs at least two elements per group")
        ddof = 1 if unbiased else 0
        return self._reduce(axis, lambda g: np.var(g, axis=1, ddof=ddof), "variance")

    var = variance

    def peak_to_peak(self, axis: Axis = ALL_AXES):
        """Range of the values, ``max - min``."""
        if self._dtype == "bool":
            raise OperationUndefined("peak_to_peak is not defined for dtype bool")
        return self._reduce(axis, lambda g: np.max(g, axis=1) - np.min(g, axis=1), "peak_to_peak")

    ptp = peak_to_peak

    def cumulative_sum(self, axis: Axis = ALL_AXES):
        """Final value of the running sum over the buffer or along ``axis``."""
        return self._reduce(axis, lambda g: np.cumsum(g, axis=1)[:, -1], "cumulative_sum")

    def cumulative_product(self, axis: Axis = ALL_AXES):
        """Final value of the running product over the buffer or along ``axis``."""
        return self._reduce(axis, lambda g: np.cumprod(g, axis=1)[:, -1], "cumulative_product")

    def _scan(self, axis: Axis, scan: Callable[..., np.ndarray], name: str) -> "Tensor":
        try:
            if _whole(axis):
                return self._wrap(scan(self._data), Shape((self.size,)), self._config)
            groups = self.axis_group(axis)
            flat = _reduction.ungroup(scan(groups, axis=1), self._shape, axis)
        except TypeError as exc:
            raise OperationUndefined(f"{name} is not defined for dtype {self._dtype}") from exc
        return self._wrap(flat, self._shape, self._config)

    def cumsum(self, axis: Axis = ALL_AXES) -> "Tensor":
        """Running sums, shape preserved (flattened for whole-tensor scans)."""
        return self._scan(axis, np.cumsum, "cumsum")

    def cumprod(self, axis: Axis = ALL_AXES) -> "Tensor":
        """Running products, shape preserved (flattened for whole-tensor scans)."""
        return self._scan(axis, np.cumprod, "cumprod")

    def _truth(self, predicate: Optional[Callable[[Scalar], Any]]) -> np.ndarray:
        if predicate is None:
            return self._data.astype(np.bool_)
        return np.fromiter(
            (bool(predicate(value)) for value in self._data.tolist()),
            dtype=np.bool_,
            count=self.size,
        )

    def _logical(self, predicate, axis: Axis, fold: Callable[[np.ndarray], np.ndarray]):
        mask = self._truth(predicate)
        if _whole(axis):
            return bool(fold(mask.reshape(1, -1))[0])
        groups = _reduction.group(mask, self._shape, axis)
        return self._wrap(fold(groups), self._shape.without_axis(int(axis)), self._config, "bool")

    def all(self, predicate: Optional[Callable[[Scalar], Any]] = None, axis: Axis = ALL_AXES):
        """Test whether ``predicate`` (truthiness by default) holds everywhere."""
        if not _whole(axis):
            check_axis(axis, self.ndim)
        return self._logical(predicate, axis, lambda g: np.all(g, axis=1))

    def any(self, predicate: Optional[Callable[[Scalar], Any]] = None, axis: Axis = ALL_AXES):
        """Test whether ``predicate`` (truthiness by default) holds anywhere."""
        if not _whole(axis):
            check_axis(axis, self.ndim)
        return self._logical(predicate, axis, lambda g: np.any(g, axis=1))

    # String representations
    def __repr__(self) -> str:
        body = np.array2string(self.numpy(), separator=", ")
        return f"Tensor({body}, shape={self._shape}, dtype={self._dtype})"

    def __str__(self) -> str:
        return np.array2string(self.numpy(), separator=", ")

    def __len__(self) -> int:
        """Number of elements, matching flat iteration."""
        return self.size

    def __iter__(self):
        """Iterate over the elements in flat storage order."""
        return iter(self._data.tolist())

    def __bool__(self) -> bool:
        if self.size != 1:
            raise OperationUndefined(
                "The truth value of a tensor with more than one element is ambiguous; "
                "use any() or all()"
            )
        return bool(self._data[0])

    # Static tensor creation methods
    @staticmethod
    def zeros(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
    ) -> "Tensor":
        """Create a tensor filled with zeros."""
        return Tensor(_shape_args(shape), Initializer.ZERO, config, dtype)

    @staticmethod
    def ones(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
    ) -> "Tensor":
        """Create a tensor filled with ones."""
        return Tensor(_shape_args(shape), Initializer.ONE, config, dtype)

    @staticmethod
    def empty(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
    ) -> "Tensor":
        """Create a tensor without initializing its elements."""
        return Tensor(_shape_args(shape), Initializer.UNINITIALIZED, config, dtype)

    @staticmethod
    def index_sequence(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
    ) -> "Tensor":
        """Create a tensor whose element at flat position ``i`` is ``i``."""
        return Tensor(_shape_args(shape), Initializer.INDEX_SEQUENCE, config, dtype)

    @staticmethod
    def rand(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
        random_source: Optional[RandomSource] = None,
    ) -> "Tensor":
        """Create a tensor with random values from uniform distribution [0, 1)."""
        return Tensor(_shape_args(shape), Initializer.UNIFORM_REAL, config, dtype, random_source)

    @staticmethod
    def randn(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
        random_source: Optional[RandomSource] = None,
    ) -> "Tensor":
        """Create a tensor with random values from standard normal distribution."""
        return Tensor(_shape_args(shape), Initializer.UNIFORM_GAUSSIAN, config, dtype, random_source)

    @staticmethod
    def full(
        shape: ShapeLike,
        fill_value: Scalar,
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
    ) -> "Tensor":
        """Create a tensor filled with a specific value."""
        result = Tensor(shape, Initializer.UNINITIALIZED, config, dtype)
        result._data.fill(fill_value)
        return result

    @staticmethod
    def arange(
        start: float,
        end: Optional[float] = None,
        step: float = 1.0,
        dtype: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
    ) -> "Tensor":
        """Create a one-dimensional tensor with evenly spaced values."""
        if end is None:
            end = start
            start = 0
        values = np.arange(start, end, step)
        if values.shape[0] == 0:
            raise InvalidShape(f"arange({start}, {end}, {step}) produces no elements")
        return Tensor.from_buffer(values, (values.shape[0],), config, resolve_dtype(dtype))

    @staticmethod
    def from_numpy(
        array: np.ndarray,
        config: Config = DEFAULT_CONFIG,
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Create a tensor from a copy of a NumPy array, keeping its shape."""
        array = np.asarray(array)
        return Tensor.from_buffer(array.reshape(-1), array.shape, config, dtype)


# Convenience functions for tensor creation (NumPy-style)
def tensor(data: Any, dtype: Optional[str] = None, config: Config = DEFAULT_CONFIG) -> Tensor:
    """Create a tensor from (nested) Python data or an array."""
    array, dtype = _as_buffer(data, dtype)
    return Tensor.from_buffer(array.reshape(-1), array.shape, config, dtype)


def zeros(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None, config: Config = DEFAULT_CONFIG) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor.zeros(*shape, dtype=dtype, config=config)


def ones(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None, config: Config = DEFAULT_CONFIG) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor.ones(*shape, dtype=dtype, config=config)


def full(
    shape: ShapeLike, fill_value: Scalar, dtype: Optional[str] = None, config: Config = DEFAULT_CONFIG
) -> Tensor:
    """Create a tensor filled with a specific value."""
    return Tensor.full(shape, fill_value, dtype=dtype, config=config)


def rand(
    *shape: Union[int, Sequence[int]],
    dtype: Optional[str] = None,
    config: Config = DEFAULT_CONFIG,
    random_source: Optional[RandomSource] = None,
) -> Tensor:
    """Create a tensor with random values from uniform distribution."""
    return Tensor.rand(*shape, dtype=dtype, config=config, random_source=random_source)


def randn(
    *shape: Union[int, Sequence[int]],
    dtype: Optional[str] = None,
    config: Config = DEFAULT_CONFIG,
    random_source: Optional[RandomSource] = None,
) -> Tensor:
    """Create a tensor with random values from normal distribution."""
    return Tensor.randn(*shape, dtype=dtype, config=config, random_source=random_source)


def arange(
    start: float,
    end: Optional[float] = None,
    step: float = 1.0,
    dtype: Optional[str] = None,
    config: Config = DEFAULT_CONFIG,
) -> Tensor:
    """Create a tensor with evenly spaced values."""
    return Tensor.arange(start, end, step, dtype=dtype, config=config)


def from_numpy(array: np.ndarray, config: Config = DEFAULT_CONFIG, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from a NumPy array."""
    return Tensor.from_numpy(array, config=config, dtype=dtype)


# Export all public symbols
__all__ = [
    "INFER",
    "Tensor",
    "tensor",
    "zeros",
    "ones",
    "full",
    "rand",
    "randn",
    "arange",
    "from_numpy",
]

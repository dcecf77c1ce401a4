# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from typing import Iterable, Optional

from . import functional
from .broadcast import broadcast_shapes, expand_indices, is_broadcastable
from .config import DEFAULT_CONFIG, DEFAULT_DTYPE, SUPPORTED_DTYPES, Config, Initializer
from .exceptions import (
    AxisError,
    BadIndexer,
    BadSlice,
    BroadcastError,
    FrozenTensorError,
    InitializerError,
    InvalidReshape,
    InvalidShape,
    NotFreezable,
    OperationUndefined,
    ShapeMismatch,
    SizeMismatch,
    TensorArithmeticError,
    TensorError,
)
from .reduction import ALL_AXES
from .rng import NumpyRandomSource, RandomSource
from .shape import Shape
from .slicer import BEGIN, END, Slicer
from .tensor import INFER, Tensor, tensor

__version__ = "0.1.0"
__version_tuple__ = (0, 1, 0)

# Tensor factories map directly to the Tensor static constructors.
# ``tensor`` (imported above) builds from nested Python data.
zeros = Tensor.zeros
ones = Tensor.ones
empty = Tensor.empty
full = Tensor.full
rand = Tensor.rand
randn = Tensor.randn
arange = Tensor.arange
index_sequence = Tensor.index_sequence
from_buffer = Tensor.from_buffer
from_numpy = Tensor.from_numpy

_FUNCTIONAL_FORWARDERS: Iterable[str] = (
    "reshape",
    "resize",
    "ravel",
    "flatten",
    "squeeze",
    "swap_axis",
    "swapaxes",
    "gather",
    "clip",
    "broadcast_to",
    "broadcast_tensors",
    "axis_group",
    "cumsum",
    "cumprod",
)

for _name in _FUNCTIONAL_FORWARDERS:
    globals()[_name] = getattr(functional, _name)


def random_source(seed: Optional[int] = None) -> RandomSource:
    """Create a random source; the same seed always yields the same draws."""
    return NumpyRandomSource(seed)


__all__ = [
    "ALL_AXES",
    "AxisError",
    "BEGIN",
    "BadIndexer",
    "BadSlice",
    "BroadcastError",
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULT_DTYPE",
    "END",
    "FrozenTensorError",
    "INFER",
    "Initializer",
    "InitializerError",
    "InvalidReshape",
    "InvalidShape",
    "NotFreezable",
    "NumpyRandomSource",
    "OperationUndefined",
    "RandomSource",
    "SUPPORTED_DTYPES",
    "Shape",
    "ShapeMismatch",
    "SizeMismatch",
    "Slicer",
    "Tensor",
    "TensorArithmeticError",
    "TensorError",
    "arange",
    "broadcast_shapes",
    "empty",
    "expand_indices",
    "from_buffer",
    "from_numpy",
    "full",
    "functional",
    "index_sequence",
    "is_broadcastable",
    "random_source",
    "ones",
    "rand",
    "randn",
    "tensor",
    "zeros",
]
__all__.extend(_FUNCTIONAL_FORWARDERS)

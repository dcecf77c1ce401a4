# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tensor configuration, initializer policies and the supported dtype table."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import numpy as np

DEFAULT_DTYPE = "float32"

_TENSOR_TO_NP_DTYPE: Dict[str, Any] = {
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
    "int32": np.dtype(np.int32),
    "int64": np.dtype(np.int64),
    "bool": np.dtype(np.bool_),
}
_NP_TO_TENSOR_DTYPE: Dict[Any, str] = {v: k for k, v in _TENSOR_TO_NP_DTYPE.items()}

SUPPORTED_DTYPES = frozenset(_TENSOR_TO_NP_DTYPE)


def resolve_dtype(dtype: Optional[str]) -> str:
    """Validate a dtype name, falling back to :data:`DEFAULT_DTYPE`."""

    if dtype is None:
        return DEFAULT_DTYPE
    if dtype not in _TENSOR_TO_NP_DTYPE:
        raise ValueError(f"Unsupported dtype '{dtype}'")
    return dtype


def numpy_dtype(dtype: str) -> np.dtype:
    return _TENSOR_TO_NP_DTYPE[resolve_dtype(dtype)]


def dtype_name(np_dtype: Any) -> str:
    """Map a NumPy dtype onto the closest supported dtype name."""

    np_dtype = np.dtype(np_dtype)
    name = _NP_TO_TENSOR_DTYPE.get(np_dtype)
    if name is not None:
        return name
    if np_dtype.kind == "f":
        return "float64"
    if np_dtype.kind in "iu":
        return "int64"
    if np_dtype.kind == "b":
        return "bool"
    raise ValueError(f"Unsupported NumPy dtype '{np_dtype}'")


def is_integral(dtype: str) -> bool:
    """``True`` for dtypes whose division follows integer rules."""
    return _TENSOR_TO_NP_DTYPE[dtype].kind in "iub"


@dataclass(frozen=True)
class Config:
    """Per-tensor behaviour switches.

    Every tensor holds its own ``Config`` value; configs are immutable so a
    tensor can never observe another tensor changing its settings.
    """

    is_broadcastable: bool = True
    is_freezeable: bool = True

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Config":
        """Build a config from externally stored settings."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**{key: bool(value) for key, value in mapping.items()})


DEFAULT_CONFIG = Config()


class Initializer(enum.Enum):
    """Fill policy used when a tensor allocates its buffer."""

    ZERO = "zero"
    ONE = "one"
    UNIFORM_GAUSSIAN = "uniform_gaussian"
    UNIFORM_REAL = "uniform_real"
    INDEX_SEQUENCE = "index_sequence"
    UNINITIALIZED = "uninitialized"

    @property
    def is_random(self) -> bool:
        return self in (Initializer.UNIFORM_GAUSSIAN, Initializer.UNIFORM_REAL)


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULT_DTYPE",
    "Initializer",
    "SUPPORTED_DTYPES",
    "dtype_name",
    "is_integral",
    "numpy_dtype",
    "resolve_dtype",
]

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import ndtensor as nt


def test_apply_in_flat_order():
    t = nt.index_sequence(2, 2)
    seen = []

    def record(value):
        seen.append(value)
        return value * value

    assert t.apply(record) is t
    assert seen == [0.0, 1.0, 2.0, 3.0]
    assert t.tolist() == [[0.0, 1.0], [4.0, 9.0]]


def test_clip_in_place():
    t = nt.tensor([-2.0, 0.5, 3.0])
    assert t.clip(-1.0, 1.0) is t
    assert t.tolist() == [-1.0, 0.5, 1.0]
    t.clip(max_value=0.0)
    assert t.tolist() == [-1.0, 0.0, 0.0]
    t.clip()
    assert t.tolist() == [-1.0, 0.0, 0.0]


def test_clip_integer_tensor():
    t = nt.tensor([1, 5, 9], dtype="int64")
    t.clip(2, 6)
    assert t.tolist() == [2, 5, 6]


def test_clip_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        nt.zeros(2).clip(1.0, 0.0)


def test_functional_clip_and_apply_copy():
    t = nt.tensor([-2.0, 2.0])
    assert nt.clip(t, -1.0, 1.0).tolist() == [-1.0, 1.0]
    assert nt.functional.apply(t, abs).tolist() == [2.0, 2.0]
    assert t.tolist() == [-2.0, 2.0]


def test_astype_and_clone():
    t = nt.tensor([1.5, 2.5])
    i = t.astype("int32")
    assert i.dtype == "int32"
    assert i.tolist() == [1, 2]
    c = t.copy()
    c[0] = 9.0
    assert t[0] == 1.5


def test_numpy_interop():
    t = nt.index_sequence(2, 3)
    array = np.asarray(t)
    assert array.shape == (2, 3)
    assert array.dtype == np.float32
    assert np.asarray(t, dtype=np.float64).dtype == np.float64
    array[0, 0] = 42.0
    assert t[0, 0] == 0.0


def test_repr_and_str():
    t = nt.index_sequence(2, 3)
    text = repr(t)
    assert text.startswith("Tensor(")
    assert "shape=(2, 3)" in text
    assert "dtype=float32" in text
    assert str(t) == np.array2string(t.numpy(), separator=", ")


@pytest.mark.parametrize("shape", [(2, 3), (4,), (1, 2, 2), ()])
def test_len_counts_iterated_elements(shape):
    t = nt.index_sequence(*shape) if shape else nt.tensor(3.0)
    assert len(t) == len(list(t)) == t.size
    assert [i for i, _ in enumerate(t)] == list(range(len(t)))
    assert [b for _, b in zip(t, t.buffer.tolist())] == list(t)

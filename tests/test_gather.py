# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

import ndtensor as nt
from ndtensor import BadIndexer, OperationUndefined


def test_gather_by_index_tensor():
    t = nt.index_sequence(2, 3) * 10
    index = nt.tensor([0, 5, 2], dtype="int64")
    picked = t.gather(index)
    assert picked.shape == (3,)
    assert picked.tolist() == [0.0, 50.0, 20.0]
    assert t[index].tolist() == picked.tolist()


def test_gather_from_sequence():
    t = nt.index_sequence(4)
    assert t.gather([3, 3, 0]).tolist() == [3.0, 3.0, 0.0]
    assert nt.gather(t, nt.tensor([1], dtype="int32")).tolist() == [1.0]


@pytest.mark.parametrize("value", [6, -1])
def test_gather_out_of_range(value):
    t = nt.zeros(2, 3)
    with pytest.raises(BadIndexer):
        t.gather([0, value])


def test_gather_requires_flat_integer_index():
    t = nt.zeros(4)
    with pytest.raises(OperationUndefined):
        t.gather(nt.tensor([[0, 1]], dtype="int64"))
    with pytest.raises(OperationUndefined):
        t.gather(nt.tensor([0.0, 1.0]))
    with pytest.raises(OperationUndefined):
        t.gather(nt.tensor([True, False]))

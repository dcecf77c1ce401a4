# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import ndtensor as nt
from ndtensor import ALL_AXES, AxisError, OperationUndefined
from ndtensor import functional as F


def test_whole_tensor_reductions_return_scalars():
    t = nt.index_sequence(2, 3)
    assert t.sum() == 15.0
    assert t.sum(ALL_AXES) == 15.0
    assert t.sum(None) == 15.0
    assert isinstance(t.sum(), float)
    assert t.mean() == 2.5
    assert t.max() == 5.0
    assert t.min() == 0.0
    assert t.argmax() == 5
    assert t.argmin() == 0
    assert nt.tensor([[1.0, 2.0], [3.0, 4.0]]).prod() == 24.0


def test_axis_reductions():
    t = nt.index_sequence(2, 3)
    assert t.sum(axis=0).tolist() == [3.0, 5.0, 7.0]
    assert t.sum(axis=1).tolist() == [3.0, 12.0]
    assert t.max(axis=0).tolist() == [3.0, 4.0, 5.0]
    assert t.min(axis=1).tolist() == [0.0, 3.0]
    assert t.mean(axis=1).tolist() == [1.0, 4.0]
    assert nt.tensor([[1.0, 2.0], [3.0, 4.0]]).prod(axis=0).tolist() == [3.0, 8.0]


def test_arg_reductions_along_axis():
    t = nt.tensor([[3.0, 9.0, 1.0], [7.0, 2.0, 8.0]])
    best = t.argmax(axis=1)
    assert best.dtype == "int64"
    assert best.tolist() == [1, 2]
    assert t.argmin(axis=0).tolist() == [0, 1, 0]


@pytest.mark.parametrize("axis", [0, 1, 2])
def test_axis_reductions_match_numpy(axis):
    data = np.arange(24, dtype=np.float64).reshape(2, 3, 4) - 7.0
    t = nt.from_numpy(data)
    reduced = t.sum(axis)
    assert reduced.shape == data.sum(axis).shape
    np.testing.assert_allclose(reduced.numpy(), data.sum(axis))
    np.testing.assert_allclose(t.max(axis).numpy(), data.max(axis))
    np.testing.assert_allclose(t.mean(axis).numpy(), data.mean(axis))
    np.testing.assert_allclose(t.variance(axis).numpy(), data.var(axis))


def test_reducing_only_axis_gives_scalar_shape():
    result = nt.tensor([1.0, 2.0, 3.0]).sum(axis=0)
    assert result.shape == ()
    assert result.item() == 6.0


def test_integer_mean_is_float():
    result = nt.tensor([[1, 2], [3, 5]], dtype="int64").mean(axis=1)
    assert result.dtype == "float64"
    assert result.tolist() == [1.5, 4.0]


@pytest.mark.parametrize("axis", [2, -2, 5])
def test_bad_axis(axis):
    with pytest.raises(AxisError):
        nt.zeros(2, 3).sum(axis)


def test_variance():
    t = nt.tensor([1.0, 2.0, 3.0, 4.0])
    assert t.variance() == 1.25
    assert t.var(unbiased=True) == pytest.approx(5.0 / 3.0)
    with pytest.raises(OperationUndefined):
        nt.ones(3, 1).variance(axis=1, unbiased=True)
    assert nt.ones(3, 1).variance(axis=1).tolist() == [0.0, 0.0, 0.0]


def test_peak_to_peak():
    t = nt.tensor([[1.0, 5.0], [2.0, 9.0]])
    assert t.peak_to_peak() == 8.0
    assert t.ptp(axis=0).tolist() == [1.0, 4.0]
    with pytest.raises(OperationUndefined):
        nt.tensor([True, False]).peak_to_peak()


def test_reductions_on_frozen_tensor():
    t = nt.index_sequence(2, 2).freeze()
    assert t.sum() == 6.0
    assert t.sum(axis=0).tolist() == [2.0, 4.0]


def test_functional_reductions():
    t = nt.index_sequence(2, 3)
    assert F.sum(t) == 15.0
    assert F.max(t, 1).tolist() == [2.0, 5.0]
    assert F.argmin(t, 0).tolist() == [0, 0, 0]
    assert F.variance(t, 1).tolist() == pytest.approx([2.0 / 3.0, 2.0 / 3.0])
    assert F.peak_to_peak(t) == 5.0
    assert F.prod(nt.ones(2, 2), 0).tolist() == [1.0, 1.0]
    assert F.mean(t) == 2.5
    assert F.min(t) == 0.0
    assert F.argmax(t) == 5

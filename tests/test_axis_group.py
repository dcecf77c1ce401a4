# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import ndtensor as nt
from ndtensor import AxisError
from ndtensor.reduction import axis_group_indices, group, permutation_indices, ungroup


def test_two_dimensional_groups():
    t = nt.index_sequence(2, 3)
    np.testing.assert_array_equal(t.axis_group(0), [[0, 3], [1, 4], [2, 5]])
    np.testing.assert_array_equal(t.axis_group(1), [[0, 1, 2], [3, 4, 5]])


@pytest.mark.parametrize("axis", [0, 1, 2])
def test_groups_match_numpy_layout(axis):
    shape = (2, 3, 4)
    data = np.arange(24).reshape(shape)
    groups = nt.index_sequence(*shape).axis_group(axis)
    assert groups.shape == (24 // shape[axis], shape[axis])
    np.testing.assert_array_equal(groups, np.moveaxis(data, axis, -1).reshape(-1, shape[axis]))


_ROUND_TRIP_CASES = [
    (shape, axis)
    for shape in [(1,), (4,), (3, 2, 4), (1, 3, 1, 5), (2, 3, 4, 5)]
    for axis in range(len(shape))
]


@pytest.mark.parametrize("shape, axis", _ROUND_TRIP_CASES)
def test_ungroup_inverts_group(shape, axis):
    count = int(np.prod(shape))
    buffer = np.arange(count) * 10 - 7
    groups = group(buffer, shape, axis)
    assert groups.shape == (count // shape[axis], shape[axis])
    np.testing.assert_array_equal(ungroup(groups, shape, axis), buffer)


def test_ungroup_rejects_wrong_layout():
    with pytest.raises(ValueError):
        ungroup(np.zeros((2, 2)), (2, 3), 0)


def test_single_axis_group():
    np.testing.assert_array_equal(axis_group_indices((4,), 0), [[0, 1, 2, 3]])


@pytest.mark.parametrize("axis", [2, -1, -2])
def test_axis_out_of_range(axis):
    t = nt.zeros(2, 3)
    with pytest.raises(AxisError):
        t.axis_group(axis)


def test_axis_error_is_index_error():
    with pytest.raises(IndexError) as info:
        nt.zeros(2).axis_group(3)
    assert info.value.axis == 3
    assert info.value.ndim == 1


def test_axis_must_be_integer():
    with pytest.raises(TypeError):
        nt.zeros(2, 3).axis_group("0")


def test_permutation_indices():
    np.testing.assert_array_equal(permutation_indices((2, 3), (1, 0)), [0, 3, 1, 4, 2, 5])
    data = np.arange(24).reshape(2, 3, 4)
    np.testing.assert_array_equal(
        permutation_indices((2, 3, 4), (2, 0, 1)),
        np.transpose(data, (2, 0, 1)).reshape(-1),
    )
    with pytest.raises(ValueError):
        permutation_indices((2, 3), (0, 0))


def test_functional_axis_group():
    t = nt.index_sequence(2, 2)
    np.testing.assert_array_equal(nt.axis_group(t, 0), [[0, 2], [1, 3]])

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import ndtensor as nt
from ndtensor import OperationUndefined, ShapeMismatch, TensorArithmeticError


def test_elementwise_ops():
    a = nt.tensor([[1.0, 2.0], [3.0, 4.0]])
    b = nt.tensor([[5.0, 6.0], [7.0, 8.0]])
    np.testing.assert_allclose((a + b).numpy(), [[6, 8], [10, 12]])
    np.testing.assert_allclose((a - b).numpy(), [[-4, -4], [-4, -4]])
    np.testing.assert_allclose((a * b).numpy(), [[5, 12], [21, 32]])
    np.testing.assert_allclose((b / a).numpy(), [[5, 3], [7 / 3, 2]], rtol=1e-6)
    np.testing.assert_allclose((b // a).numpy(), [[5, 3], [2, 2]])


def test_results_are_new_tensors():
    a = nt.ones(3)
    b = nt.ones(3)
    c = a + b
    assert c is not a
    assert a.tolist() == [1.0, 1.0, 1.0]


def test_scalar_and_reflected_ops():
    t = nt.tensor([1.0, 2.0, 4.0])
    assert (t + 1).tolist() == [2.0, 3.0, 5.0]
    assert (2 * t).tolist() == [2.0, 4.0, 8.0]
    assert (10 - t).tolist() == [9.0, 8.0, 6.0]
    assert (1 / t).tolist() == [1.0, 0.5, 0.25]
    assert (t / 2).tolist() == [0.5, 1.0, 2.0]
    assert (-t).tolist() == [-1.0, -2.0, -4.0]


def test_numpy_scalar_on_left():
    t = nt.tensor([1.0, 2.0])
    result = np.float64(3.0) * t
    assert isinstance(result, nt.Tensor)
    np.testing.assert_allclose(result.numpy(), [3.0, 6.0])


def test_integer_division_dtypes():
    a = nt.tensor([1, 7], dtype="int64")
    b = nt.tensor([2, 2], dtype="int64")
    q = a / b
    assert q.dtype == "float64"
    assert q.tolist() == [0.5, 3.5]
    f = a // b
    assert f.dtype == "int64"
    assert f.tolist() == [0, 3]


def test_integer_division_by_zero():
    a = nt.tensor([1, 2], dtype="int64")
    with pytest.raises(TensorArithmeticError):
        a / 0
    with pytest.raises(TensorArithmeticError):
        a // nt.tensor([1, 0], dtype="int64")
    with pytest.raises(ArithmeticError):
        a /= 0
    assert a.tolist() == [1, 2]


def test_float_division_by_zero_is_ieee():
    a = nt.tensor([1.0, -1.0])
    result = a / nt.tensor([0.0, 0.0])
    assert result.tolist() == [np.inf, -np.inf]


def test_float_tensor_by_integer_zero_is_ieee():
    a = nt.tensor([1.0, -1.0])
    assert (a / 0).tolist() == [np.inf, -np.inf]
    assert (a / nt.tensor([0, 0], dtype="int64")).tolist() == [np.inf, -np.inf]
    assert (1 / nt.tensor([0.0])).tolist() == [np.inf]


def test_integer_tensor_by_float_zero_is_ieee():
    result = nt.tensor([2, 0], dtype="int64") / 0.0
    assert result.dtype == "float64"
    assert result.numpy()[0] == np.inf
    assert np.isnan(result.numpy()[1])


def test_float_compound_division_by_zero_is_ieee():
    a = nt.tensor([1.0, -1.0])
    a /= 0
    assert a.tolist() == [np.inf, -np.inf]
    b = nt.tensor([3.0, 4.0])
    b /= nt.tensor([0.0, 2.0])
    assert b.tolist() == [np.inf, 2.0]


def test_integer_compound_division_rejects_float_zero():
    t = nt.tensor([4, 6], dtype="int64")
    with pytest.raises(TensorArithmeticError):
        t /= 0.0
    assert t.tolist() == [4, 6]


def test_compound_ops_mutate_in_place():
    t = nt.index_sequence(2, 2)
    alias = t
    t += 1
    t *= 2
    t -= nt.ones(2, 2)
    t /= 2
    assert t is alias
    assert t.tolist() == [[0.5, 1.5], [2.5, 3.5]]
    assert t.dtype == "float32"


def test_integer_compound_division_floors():
    t = nt.tensor([5, 7], dtype="int64")
    t /= 2
    assert t.dtype == "int64"
    assert t.tolist() == [2, 3]


def test_compound_ops_need_same_shape():
    t = nt.zeros(2, 2)
    with pytest.raises(ShapeMismatch):
        t += nt.ones(2)


def test_unsupported_operand():
    t = nt.zeros(2)
    with pytest.raises(TypeError):
        t + "x"
    with pytest.raises(TypeError):
        t += [1, 2]


def test_bool_restrictions():
    flags = nt.tensor([True, False])
    with pytest.raises(OperationUndefined):
        -flags
    with pytest.raises(OperationUndefined):
        flags - flags


def test_equality():
    a = nt.index_sequence(2, 3)
    assert a == nt.index_sequence(2, 3)
    assert a != nt.zeros(2, 3)
    assert a != nt.index_sequence(3, 2)
    assert not (a == 1)
    with pytest.raises(TypeError):
        hash(a)


def test_allclose():
    a = nt.tensor([1.0, 2.0])
    assert a.allclose(nt.tensor([1.0, 2.0000001]))
    assert not a.allclose(nt.tensor([1.0, 2.1]))
    assert not a.allclose(nt.tensor([[1.0, 2.0]]))


def test_functional_arithmetic():
    a = nt.tensor([4.0, 6.0])
    b = nt.tensor([2.0, 3.0])
    assert nt.functional.add(a, b).tolist() == [6.0, 9.0]
    assert nt.functional.subtract(a, b).tolist() == [2.0, 3.0]
    assert nt.functional.multiply(a, b).tolist() == [8.0, 18.0]
    assert nt.functional.divide(a, b).tolist() == [2.0, 2.0]

# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np

import examples.standardize_columns as sc


def test_standardized_columns():
    scaled, means, variances = sc.standardize(rows=32, cols=3, seed=1, verbose=False)
    assert scaled.shape == (32, 3)
    np.testing.assert_allclose(means.numpy(), np.zeros(3), atol=1e-9)
    np.testing.assert_allclose(variances.numpy(), np.ones(3), rtol=1e-9)


def test_seed_is_reproducible():
    first, _, _ = sc.standardize(rows=8, cols=2, seed=3, verbose=False)
    second, _, _ = sc.standardize(rows=8, cols=2, seed=3, verbose=False)
    assert first == second

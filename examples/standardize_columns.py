# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Column standardisation with ndtensor.

Builds a seeded feature matrix, then centres and scales every column using
axis reductions and broadcasting. The result has zero mean and unit
variance per column.
"""

from __future__ import annotations

import ndtensor as nt


def standardize(rows: int = 64, cols: int = 4, seed: int = 0, verbose: bool = True):
    """Standardise a random ``(rows, cols)`` matrix column by column.

    Parameters
    ----------
    rows, cols:
        Size of the generated feature matrix.
    seed:
        Seed for the random source, so repeated runs agree.
    verbose:
        If ``True``, prints per-column statistics before and after.

    Returns
    -------
    tuple[Tensor, Tensor, Tensor]
        The standardised matrix, its column means and its column variances.
    """

    source = nt.random_source(seed)
    features = nt.rand(rows, cols, dtype="float64", random_source=source) * 10.0 + 3.0

    mean = features.mean(axis=0).reshape(1, cols)
    std = features.variance(axis=0).reshape(1, cols)
    std.apply(lambda value: value**0.5)

    scaled = (features - mean) / std
    if verbose:
        print("raw means:   ", features.mean(axis=0).tolist())
        print("scaled means:", scaled.mean(axis=0).tolist())
        print("scaled vars: ", scaled.variance(axis=0).tolist())
    return scaled, scaled.mean(axis=0), scaled.variance(axis=0)


def main():  # pragma: no cover - example script
    standardize()


if __name__ == "__main__":  # pragma: no cover - example script
    main()

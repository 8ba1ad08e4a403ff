# test_synthetic_data.py

import numpy as np
import pytest

from kmeans_vs_gmm.config import DEFAULT_BLOBS, BlobSpec
from kmeans_vs_gmm.errors import ConfigurationError
from kmeans_vs_gmm.synthetic_data import blob_membership, generate_blob_dataset


def test_default_dataset_size_and_shape():
    X = generate_blob_dataset(random_state=0)
    assert X.shape == (230, 2)
    assert X.shape[0] == sum(b.count for b in DEFAULT_BLOBS)
    assert np.isfinite(X).all()


def test_groups_keep_table_order():
    # tight blobs far apart: each slice of X must sit around its own mean
    blobs = [
        BlobSpec(30, -50.0, 0.0, 0.1),
        BlobSpec(10, 50.0, 50.0, 0.1),
        BlobSpec(5, 0.0, -50.0, 0.1),
    ]
    X = generate_blob_dataset(blobs, random_state=1)
    assert X.shape == (45, 2)
    np.testing.assert_allclose(X[:30].mean(axis=0), [-50, 0], atol=0.3)
    np.testing.assert_allclose(X[30:40].mean(axis=0), [50, 50], atol=0.3)
    np.testing.assert_allclose(X[40:].mean(axis=0), [0, -50], atol=0.3)

    membership = blob_membership(blobs)
    assert list(np.bincount(membership)) == [30, 10, 5]


def test_same_seed_same_points():
    X1 = generate_blob_dataset(random_state=123)
    X2 = generate_blob_dataset(random_state=123)
    X3 = generate_blob_dataset(random_state=124)
    np.testing.assert_array_equal(X1, X2)
    assert not np.array_equal(X1, X3)


@pytest.mark.parametrize("blob", [
    (0, 0.0, 0.0, 1.0),
    (-5, 0.0, 0.0, 1.0),
    (2.5, 0.0, 0.0, 1.0),
    (10, float("nan"), 0.0, 1.0),
    (10, 0.0, float("inf"), 1.0),
    (10, 0.0, 0.0, 0.0),
    (10, 0.0, 0.0, -1.0),
])
def test_invalid_blob_fails_fast(blob):
    with pytest.raises(ConfigurationError):
        generate_blob_dataset([blob], random_state=0)


def test_empty_blob_table_rejected():
    with pytest.raises(ConfigurationError):
        generate_blob_dataset([], random_state=0)

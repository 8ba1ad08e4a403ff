# test_metrics.py

import numpy as np
import pytest
from sklearn.datasets import make_blobs
from sklearn.mixture import GaussianMixture

import kmeans_vs_gmm.metrics as metrics


@pytest.fixture
def blob_data():
    X, _ = make_blobs(n_samples=100, centers=3, cluster_std=0.5, random_state=0)
    return X


def test_silhouette_needs_two_clusters(blob_data):
    X = blob_data
    assert np.isnan(metrics.compute_silhouette(X, np.zeros(len(X), dtype=int)))
    labels = (X[:, 0] > np.median(X[:, 0])).astype(int)
    s = metrics.compute_silhouette(X, labels)
    assert -1.0 <= s <= 1.0


def test_population_and_avg_distance():
    X = np.array([[0, 0], [2, 0], [10, 10], [10, 12], [10, 14]], dtype=float)
    labels = np.array([0, 0, 1, 1, 1])
    cents = np.array([[1, 0], [10, 12]], dtype=float)

    pops = metrics.cluster_population_distribution(labels)
    assert pops == {0: 2, 1: 3}

    dist = metrics.average_distance_to_centroids(X, labels, cents)
    assert pytest.approx(dist[0]) == 1.0
    assert pytest.approx(dist[1]) == 4 / 3


def test_wcss_per_cluster():
    X = np.array([[0, 0], [1, 1], [10, 10], [11, 11]])
    labels = np.array([0, 0, 1, 1])
    cents = np.array([[0.5, 0.5], [10.5, 10.5]])
    wcss = metrics.compute_wcss_per_cluster(X, labels, cents)
    # each point is 0.5 away per axis → 4 * 0.25
    assert pytest.approx(wcss[0]) == 1.0
    assert pytest.approx(wcss[1]) == 1.0


def test_gmm_bic_aic(blob_data):
    X = blob_data
    gm = GaussianMixture(n_components=3, random_state=0).fit(X)
    bic = metrics.compute_gmm_bic(gm, X)
    aic = metrics.compute_gmm_aic(gm, X)
    assert isinstance(bic, float)
    assert isinstance(aic, float)
    # BIC penalizes parameters harder than AIC once log(n) > 2
    assert bic > aic


def test_compare_assignments_ignores_numbering():
    km = np.array([1, 1, 2, 2, 3, 3])
    gm = np.array([3, 3, 1, 1, 2, 2])
    out = metrics.compare_assignments(km, gm)
    assert pytest.approx(out["ari"]) == 1.0

    ct = out["crosstab"]
    assert ct.shape == (3, 3)
    assert ct.values.sum() == len(km)
    assert ct.loc[1, 3] == 2
    assert ct.index.name == "K-means"
    assert ct.columns.name == "GMM"

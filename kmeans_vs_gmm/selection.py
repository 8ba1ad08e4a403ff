import logging

import numpy as np
import pandas as pd

from kmeans_vs_gmm.config import MIN_DISTINCT_KMEANS, N_EXAMPLE_POINTS
from kmeans_vs_gmm.errors import ConfigurationError, NoDemonstrativeExampleError

logger = logging.getLogger(__name__)


def build_results_table(X, kmeans_labels, responsibilities):
    """
    Joint assignment table, one row per point in dataset order.

    Args:
      X                : (n_samples, 2) coordinates
      kmeans_labels    : 0-based hard labels from K-means
      responsibilities : (n_samples, k) GMM posterior probabilities

    Returns:
      DataFrame with columns idx, kmeans_cluster, gmm_cluster, X1, X2;
      idx and both cluster ids are 1-based.
    """
    X = np.asarray(X)
    kmeans_labels = np.asarray(kmeans_labels)
    responsibilities = np.asarray(responsibilities)
    n = X.shape[0]
    if kmeans_labels.shape != (n,) or responsibilities.shape[0] != n:
        raise ConfigurationError(
            "Coordinates, hard labels and responsibilities must cover the same points"
        )

    return pd.DataFrame({
        "idx": np.arange(1, n + 1),
        "kmeans_cluster": kmeans_labels + 1,
        "gmm_cluster": responsibilities.argmax(axis=1) + 1,
        "X1": X[:, 0],
        "X2": X[:, 1],
    })


def find_demonstration_cluster(results, min_distinct=MIN_DISTINCT_KMEANS):
    """
    First GMM cluster (ascending id) whose points fall into at least
    `min_distinct` different K-means clusters.
    """
    distinct = results.groupby("gmm_cluster", sort=True)["kmeans_cluster"].nunique()
    if distinct.empty:
        raise NoDemonstrativeExampleError("Results table has no points to choose from")
    qualifying = distinct[distinct >= min_distinct]
    if qualifying.empty:
        raise NoDemonstrativeExampleError(
            f"No GMM cluster contains points from {min_distinct} or more "
            f"distinct K-means clusters (max found: {int(distinct.max())}); "
            "try another seed"
        )
    return int(qualifying.index[0])


def select_example_points(results, n_points=N_EXAMPLE_POINTS):
    """
    Pick `n_points` points that share one GMM cluster but sit in
    pairwise-different K-means clusters.

    Inside the demonstration cluster, the first point of each K-means
    cluster is taken, K-means clusters ordered by first appearance.
    The demonstration cluster must span at least MIN_DISTINCT_KMEANS
    K-means clusters, and at least `n_points` of them.
    Returns the 1-based idx values, in dataset order.
    """
    gmm_id = find_demonstration_cluster(
        results, min_distinct=max(MIN_DISTINCT_KMEANS, n_points)
    )
    group = results[results["gmm_cluster"] == gmm_id].sort_values("idx")
    picks = group.drop_duplicates("kmeans_cluster").head(n_points)

    example_points = [int(i) for i in picks["idx"]]
    logger.info(
        "GMM cluster %d spans K-means clusters %s; example points %s",
        gmm_id, sorted(group["kmeans_cluster"].unique().tolist()), example_points
    )
    return example_points

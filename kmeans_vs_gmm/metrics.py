import numpy as np
import pandas as pd
from sklearn.metrics import adjusted_rand_score, silhouette_score


def compute_silhouette(X, labels):
    if len(set(labels)) > 1:
        return float(silhouette_score(X, labels))
    return np.nan


def cluster_population_distribution(labels):
    unique, counts = np.unique(labels, return_counts=True)
    return {int(u): int(c) for u, c in zip(unique, counts)}


def average_distance_to_centroids(X, labels, centroids):
    distances = {}
    for idx, center in enumerate(centroids):
        pts = X[labels == idx]
        if len(pts) > 0:
            distances[idx] = float(np.mean(np.linalg.norm(pts - center, axis=1)))
        else:
            distances[idx] = np.nan
    return distances


# ── KMeans ─────────────────────────────────────────────────────────────────────

def compute_wcss_per_cluster(X, labels, centroids):
    """
    Returns dict {cluster_id: within-cluster sum of squares}.
    """
    wcss = {}
    for idx, c in enumerate(centroids):
        pts = X[labels == idx]
        wcss[idx] = float(np.sum((pts - c)**2)) if len(pts) else 0.0
    return wcss


# ── Gaussian Mixture ──────────────────────────────────────────────────────────

def compute_gmm_bic(model, X):
    """Bayesian Information Criterion from the fitted GaussianMixture."""
    return float(model.bic(X))


def compute_gmm_aic(model, X):
    """Akaike Information Criterion from the fitted GaussianMixture."""
    return float(model.aic(X))


# ── K-means vs GMM ────────────────────────────────────────────────────────────

def compare_assignments(kmeans_ids, gmm_ids):
    """
    Agreement between two labelings whose ids are numbered independently.
    The adjusted Rand index ignores the numbering; the crosstab shows how
    each K-means cluster is spread over the GMM clusters.
    """
    return {
        "ari": float(adjusted_rand_score(kmeans_ids, gmm_ids)),
        "crosstab": pd.crosstab(
            pd.Series(np.asarray(kmeans_ids), name="K-means"),
            pd.Series(np.asarray(gmm_ids), name="GMM")
        ),
    }


def compute_all_metrics(X, labels, centroids):
    return {
        "silhouette": compute_silhouette(X, labels),
        "population": cluster_population_distribution(labels),
        "avg_distance": average_distance_to_centroids(X, labels, centroids),
    }

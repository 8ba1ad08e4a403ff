# clustering_utils.py
import logging
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from kmeans_vs_gmm.clusterer import GMMClusterer, KMeansClusterer
from kmeans_vs_gmm.config import (
    DPI,
    GMM_MAX_ITER,
    GMM_TOL,
    KMEANS_INIT,
    N_CLUSTERS,
    N_EXAMPLE_POINTS,
    N_INIT,
    OUTPUT_PNG,
    RANDOM_STATE,
    validate_positive_int,
)
from kmeans_vs_gmm.metrics import (
    compare_assignments,
    compute_gmm_aic,
    compute_gmm_bic,
    compute_wcss_per_cluster,
)
from kmeans_vs_gmm.plotter import plot_comparison, save_figure
from kmeans_vs_gmm.reporter import format_footer, print_report
from kmeans_vs_gmm.selection import build_results_table, select_example_points
from kmeans_vs_gmm.synthetic_data import blob_membership, generate_blob_dataset

logger = logging.getLogger(__name__)


def run_comparison(
    X: np.ndarray,
    *,
    n_clusters: int = N_CLUSTERS,
    n_init: int = N_INIT,
    kmeans_init: str = KMEANS_INIT,
    gmm_tol: float = GMM_TOL,
    gmm_max_iter: int = GMM_MAX_ITER,
    n_example_points: int = N_EXAMPLE_POINTS,
    random_state: Optional[int] = RANDOM_STATE,
) -> Dict[str, Any]:
    """
    1) K-means with n_init random restarts
    2) GMM (full covariance) started from the K-means labels
    3) joint assignment table
    4) example points: same GMM cluster, different K-means clusters

    Returns a dict with the fitted clusterers, the table, the example idx
    values and both sets of centers (row i belongs to cluster id i+1).
    """
    n_example_points = validate_positive_int("n_example_points", n_example_points)

    km = KMeansClusterer(
        n_clusters=n_clusters,
        n_init=n_init,
        init=kmeans_init,
        random_state=random_state
    )
    km.fit(X)

    gm = GMMClusterer(
        n_clusters=n_clusters,
        tol=gmm_tol,
        max_iter=gmm_max_iter,
        random_state=random_state
    )
    gm.fit(X, km.labels_)

    results = build_results_table(X, km.labels_, gm.responsibilities_)
    example_points = select_example_points(results, n_points=n_example_points)

    return {
        "X": km.X_,
        "kmeans": km,
        "gmm": gm,
        "results": results,
        "responsibilities": gm.responsibilities_,
        "example_points": example_points,
        "centers_kmeans": km.get_virtual_centroids(),
        "centers_gmm": gm.get_virtual_centroids(),
    }


def summarize_models(comparison: Dict[str, Any]) -> Dict[str, Any]:
    """Diagnostics for the report's model-summary block, keyed by 1-based id."""
    km, gm = comparison["kmeans"], comparison["gmm"]
    results = comparison["results"]
    m_km = km.get_metrics()
    m_gm = gm.get_metrics()
    wcss = compute_wcss_per_cluster(km.X_, km.labels_, km.get_virtual_centroids())
    agreement = compare_assignments(results["kmeans_cluster"], results["gmm_cluster"])

    return {
        "kmeans": {
            "inertia": km.inertia_,
            "silhouette": m_km["silhouette"],
            "n_iter": int(km.n_iter_),
            "population": {k + 1: v for k, v in m_km["population"].items()},
            "wcss": {k + 1: v for k, v in wcss.items()},
            "avg_distance": {k + 1: v for k, v in m_km["avg_distance"].items()},
        },
        "gmm": {
            "log_likelihood": gm.log_likelihood_,
            "bic": compute_gmm_bic(gm.model, gm.X_),
            "aic": compute_gmm_aic(gm.model, gm.X_),
            "n_iter": int(gm.n_iter_),
            "converged": gm.converged_,
            "population": {k + 1: v for k, v in m_gm["population"].items()},
            "avg_distance": {k + 1: v for k, v in m_gm["avg_distance"].items()},
            "weights": {k + 1: float(w) for k, w in enumerate(gm.weights_)},
        },
        "ari": agreement["ari"],
        "crosstab": agreement["crosstab"],
    }


def save_cluster_labels(
    results: pd.DataFrame,
    responsibilities: np.ndarray,
    filepath: str
) -> None:
    """
    Dump the joint assignment table plus one posterior column per GMM
    component (p1..pk) to CSV.
    """
    df = results.copy()
    for k in range(responsibilities.shape[1]):
        df[f"p{k + 1}"] = responsibilities[:, k]
    df.to_csv(filepath, index=False)
    logger.info("Saved assignments to %s", filepath)


def run_and_report(
    *,
    blobs=None,
    random_state: Optional[int] = RANDOM_STATE,
    n_clusters: int = N_CLUSTERS,
    n_init: int = N_INIT,
    output: str = OUTPUT_PNG,
    dpi: int = DPI,
    results_csv: Optional[str] = None,
    caption: Optional[str] = None,
    show: bool = False,
    summary: bool = True,
) -> Dict[str, Any]:
    """
    Whole demonstration: generate → fit both models → pick example points
    → print report → plot → save PNG (and optionally the CSV table).
    """
    dpi = validate_positive_int("dpi", dpi)

    # 1) Generate the dataset
    X = generate_blob_dataset(blobs, random_state=random_state)
    logger.info("Generated %d points", X.shape[0])

    # 2) Fit K-means and GMM, pick the example points
    comparison = run_comparison(
        X,
        n_clusters=n_clusters,
        n_init=n_init,
        random_state=random_state
    )
    comparison["results"]["blob"] = blob_membership(blobs) + 1

    # 3) Console report
    model_summary = summarize_models(comparison) if summary else None
    print_report(
        comparison["results"],
        comparison["responsibilities"],
        comparison["example_points"],
        summary=model_summary
    )

    # 4) Plot and save
    fig = plot_comparison(
        comparison["results"],
        comparison["example_points"],
        comparison["centers_kmeans"],
        comparison["centers_gmm"],
        n_clusters=n_clusters,
        caption=caption
    )
    if show:
        plt.show()
    save_figure(fig, output, dpi=dpi)

    if results_csv:
        save_cluster_labels(comparison["results"], comparison["responsibilities"], results_csv)

    print(format_footer(output, dpi))
    comparison["summary"] = model_summary
    comparison["output"] = output
    return comparison

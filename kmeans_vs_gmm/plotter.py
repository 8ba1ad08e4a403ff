import logging

import numpy as np
import matplotlib.pyplot as plt
import matplotlib as mpl
from matplotlib.lines import Line2D

from kmeans_vs_gmm.config import DPI, FIGSIZE, OKABE_ITO

logger = logging.getLogger(__name__)

# 8-spoke asterisk for centers
CENTER_MARKER = (8, 2, 0)

_THEME = {
    "font.size": 12,
    "axes.titleweight": "bold",
    "axes.labelweight": "bold",
    "axes.edgecolor": "white",
    "axes.facecolor": "white",
    "figure.facecolor": "white",
    "xtick.color": "0.3",
    "ytick.color": "0.3",
}


def cluster_color(cluster_id, palette=OKABE_ITO):
    """Palette entry for a 1-based cluster id."""
    return palette[(int(cluster_id) - 1) % len(palette)]


def _style_axes(ax, title, subtitle):
    ax.set_title(title, loc="left", fontsize=14, pad=24)
    ax.text(0.0, 1.02, subtitle, transform=ax.transAxes,
            ha="left", va="bottom", fontsize=11, color="0.3")
    ax.set_xlabel("Feature 1")
    ax.set_ylabel("Feature 2")
    ax.grid(True, which="major", color="0.9", linewidth=0.3)
    ax.minorticks_off()
    ax.tick_params(length=0)
    ax.set_axisbelow(True)


def plot_cluster_panel(
    ax,
    X,
    cluster_ids,
    centers,
    example_mask,
    title,
    subtitle,
    n_clusters=None,
    palette=None,
):
    """
    One scatter panel: points colored by 1-based cluster id, example points
    as large opaque triangles, everything else as small translucent dots,
    centers as black asterisks. Legend goes under the panel.
    """
    if palette is None:
        palette = OKABE_ITO
    X = np.asarray(X)
    cluster_ids = np.asarray(cluster_ids)
    example_mask = np.asarray(example_mask, dtype=bool)
    if n_clusters is None:
        n_clusters = len(centers)

    handles = []
    for cid in range(1, n_clusters + 1):
        color = cluster_color(cid, palette)
        in_cluster = cluster_ids == cid
        others = in_cluster & ~example_mask
        examples = in_cluster & example_mask

        ax.scatter(X[others, 0], X[others, 1], s=16, marker="o",
                   color=color, alpha=0.5, linewidths=0)
        ax.scatter(X[examples, 0], X[examples, 1], s=90, marker="^",
                   color=color, alpha=1.0, edgecolors="black",
                   linewidths=0.6, zorder=3)
        handles.append(Line2D([], [], marker="o", linestyle="",
                              color=color, label=str(cid)))

    centers = np.asarray(centers)
    ax.scatter(centers[:, 0], centers[:, 1], s=220, marker=CENTER_MARKER,
               color="black", linewidths=1.5, zorder=4)

    handles += [
        Line2D([], [], marker="o", linestyle="", color="0.5", alpha=0.5,
               label="Other points"),
        Line2D([], [], marker="^", linestyle="", color="0.5",
               markersize=9, label="Example points"),
        Line2D([], [], marker=CENTER_MARKER, linestyle="", color="black",
               markersize=11, markeredgewidth=1.5, label="Centers"),
    ]
    ax.legend(handles=handles, title="Cluster", loc="upper center",
              bbox_to_anchor=(0.5, -0.12), ncol=len(handles),
              frameon=False, fontsize=9, title_fontproperties={"weight": "bold"},
              handletextpad=0.2, columnspacing=0.9)

    _style_axes(ax, title, subtitle)
    return ax


def plot_comparison(
    results,
    example_points,
    centers_kmeans,
    centers_gmm,
    n_clusters=None,
    caption=None,
    figsize=FIGSIZE,
    palette=None,
):
    """
    Side-by-side K-means | GMM panels under a shared title.

    `results` is the joint assignment table from selection.build_results_table.
    Returns the Figure; saving is left to save_figure().
    """
    if n_clusters is None:
        n_clusters = len(centers_kmeans)
    X = results[["X1", "X2"]].to_numpy()
    example_mask = results["idx"].isin(example_points).to_numpy()

    with mpl.rc_context(_THEME):
        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

        plot_cluster_panel(
            ax1, X, results["kmeans_cluster"].to_numpy(), centers_kmeans,
            example_mask,
            title="K-means Clustering",
            subtitle="Hard assignment: each point to nearest center",
            n_clusters=n_clusters, palette=palette,
        )
        plot_cluster_panel(
            ax2, X, results["gmm_cluster"].to_numpy(), centers_gmm,
            example_mask,
            title="Gaussian Mixture Model",
            subtitle="Soft assignment: considers distance, covariance, and mixing weights",
            n_clusters=n_clusters, palette=palette,
        )

        fig.text(0.01, 0.96, "Same Centers, Different Assignments",
                 ha="left", fontsize=16, fontweight="bold")
        fig.text(0.01, 0.925,
                 "Triangular points assigned to different k-means clusters "
                 "but same GMM cluster",
                 ha="left", fontsize=12, color="0.4")
        if caption:
            fig.text(0.99, 0.01, caption, ha="right", va="bottom",
                     fontsize=10, color="0.5")

        fig.subplots_adjust(left=0.05, right=0.98, top=0.80, bottom=0.2, wspace=0.15)
    return fig


def save_figure(fig, path, dpi=DPI):
    """Write the figure as PNG on a white background and close it."""
    try:
        fig.savefig(path, dpi=dpi, facecolor="white", format="png")
    finally:
        plt.close(fig)
    logger.info("Saved %s (%dx%d px)", path,
                int(fig.get_figwidth() * dpi), int(fig.get_figheight() * dpi))
    return path

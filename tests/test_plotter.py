# test_plotter.py

import numpy as np
import pandas as pd
import pytest
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba

from kmeans_vs_gmm.config import OKABE_ITO
from kmeans_vs_gmm.plotter import (
    cluster_color,
    plot_cluster_panel,
    plot_comparison,
    save_figure,
)


@pytest.fixture
def sample_results():
    rng = np.random.RandomState(0)
    n = 40
    return pd.DataFrame({
        "idx": np.arange(1, n + 1),
        "kmeans_cluster": np.tile([1, 2, 3, 4, 5], n // 5),
        "gmm_cluster": np.repeat([1, 2, 3, 4, 5], n // 5),
        "X1": rng.normal(size=n),
        "X2": rng.normal(size=n),
    })


@pytest.fixture
def centers():
    return np.arange(10, dtype=float).reshape(5, 2)


def test_cluster_color_cycles_palette():
    assert cluster_color(1) == OKABE_ITO[0]
    assert cluster_color(5) == OKABE_ITO[4]
    assert cluster_color(6) == OKABE_ITO[0]


def test_plot_cluster_panel_draws_points_and_centers(sample_results, centers):
    X = sample_results[["X1", "X2"]].to_numpy()
    mask = sample_results["idx"].isin([1, 2, 3]).to_numpy()

    fig, ax = plt.subplots()
    plot_cluster_panel(ax, X, sample_results["kmeans_cluster"], centers, mask,
                       title="T", subtitle="S")

    # two scatters per cluster + centers
    collections = ax.collections
    assert len(collections) == 2 * 5 + 1
    n_points = sum(len(c.get_offsets()) for c in collections[:-1])
    assert n_points == len(X)
    np.testing.assert_allclose(collections[-1].get_offsets(), centers)

    # example points of cluster 1 are opaque, the rest translucent
    others, examples = collections[0], collections[1]
    assert len(examples.get_offsets()) == 1
    assert others.get_alpha() == pytest.approx(0.5)
    assert examples.get_alpha() == pytest.approx(1.0)
    np.testing.assert_allclose(examples.get_facecolor()[0], to_rgba(OKABE_ITO[0]))

    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert labels == ["1", "2", "3", "4", "5", "Other points", "Example points", "Centers"]
    assert ax.get_xlabel() == "Feature 1"
    plt.close(fig)


def test_plot_comparison_layout(sample_results, centers):
    fig = plot_comparison(sample_results, [1, 2, 3], centers, centers + 1,
                          caption="my caption")

    axes = fig.axes
    assert len(axes) == 2
    assert axes[0].get_title(loc="left") == "K-means Clustering"
    assert axes[1].get_title(loc="left") == "Gaussian Mixture Model"
    assert tuple(fig.get_size_inches()) == (14, 7)

    texts = [t.get_text() for t in fig.texts]
    assert "Same Centers, Different Assignments" in texts
    assert "my caption" in texts
    plt.close(fig)


def test_save_figure_writes_png(tmp_path, sample_results, centers):
    fig = plot_comparison(sample_results, [1, 2, 3], centers, centers)
    path = tmp_path / "out.png"
    save_figure(fig, str(path), dpi=20)

    assert path.exists()
    with open(path, "rb") as fh:
        assert fh.read(8) == b"\x89PNG\r\n\x1a\n"
    # figure is closed after saving
    assert not plt.fignum_exists(fig.number)


def test_save_figure_surfaces_io_errors(tmp_path, sample_results, centers):
    fig = plot_comparison(sample_results, [1, 2, 3], centers, centers)
    with pytest.raises(OSError):
        save_figure(fig, str(tmp_path / "missing_dir" / "out.png"), dpi=20)

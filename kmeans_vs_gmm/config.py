import math
from numbers import Integral, Real
from typing import NamedTuple

from kmeans_vs_gmm.errors import ConfigurationError


class BlobSpec(NamedTuple):
    count: int
    mean_x: float
    mean_y: float
    sd: float


# One large diffuse blob around the origin plus four small tight ones
DEFAULT_BLOBS = [
    BlobSpec(150, 0.0, 0.0, 2.5),
    BlobSpec(20, 5.0, 2.0, 0.5),
    BlobSpec(20, 3.0, 5.0, 0.5),
    BlobSpec(20, -4.0, 3.0, 0.5),
    BlobSpec(20, -3.0, -4.0, 0.5),
]

RANDOM_STATE = 123

# Clustering
N_CLUSTERS = 5
N_INIT = 25
KMEANS_INIT = "random"
GMM_TOL = 1e-6
GMM_MAX_ITER = 1000
GMM_REG_COVAR = 1e-6

# Example selection
N_EXAMPLE_POINTS = 3
MIN_DISTINCT_KMEANS = 3

# Plot settings
FIGSIZE = (14, 7)
DPI = 600
OUTPUT_PNG = "kmeans_vs_gmm_comparison.png"

# Okabe-Ito colorblind-friendly palette
OKABE_ITO = ["#E69F00", "#56B4E9", "#009E73", "#F0E442", "#0072B2"]


def _is_int(value):
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_positive_int(name, value):
    if not _is_int(value) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def validate_blobs(blobs):
    """
    Check a blob table before any sampling happens.

    Every entry needs a positive integer count, finite means and a finite,
    strictly positive standard deviation.
    """
    try:
        blobs = [BlobSpec(*b) for b in blobs]
    except TypeError as err:
        raise ConfigurationError(
            "Each blob must be a (count, mean_x, mean_y, sd) tuple"
        ) from err
    if not blobs:
        raise ConfigurationError("At least one blob must be configured")

    for i, blob in enumerate(blobs):
        if not _is_int(blob.count) or blob.count <= 0:
            raise ConfigurationError(
                f"Blob {i}: count must be a positive integer, got {blob.count!r}"
            )
        for field in ("mean_x", "mean_y", "sd"):
            value = getattr(blob, field)
            if not isinstance(value, Real) or not math.isfinite(value):
                raise ConfigurationError(
                    f"Blob {i}: {field} must be a finite number, got {value!r}"
                )
        if blob.sd <= 0:
            raise ConfigurationError(f"Blob {i}: sd must be > 0, got {blob.sd!r}")
    return blobs


def validate_n_clusters(n_clusters, n_samples):
    n_clusters = validate_positive_int("n_clusters", n_clusters)
    if n_clusters > n_samples:
        raise ConfigurationError(
            f"n_clusters={n_clusters} exceeds the number of points ({n_samples})"
        )
    return n_clusters

# synthetic_data.py

import logging

import numpy as np
from sklearn.datasets import make_blobs

from kmeans_vs_gmm.config import DEFAULT_BLOBS, RANDOM_STATE, validate_blobs

logger = logging.getLogger(__name__)


def generate_blob_dataset(blobs=None, random_state=RANDOM_STATE):
    """
    Sample one isotropic 2-D Gaussian blob per (count, mean_x, mean_y, sd)
    entry and stack them in table order:
      - default table: one wide diffuse blob at the origin (150 points)
      - four small tight blobs around it (20 points each)
    All blobs draw from the same RandomState, so X depends only on the seed.
    Returns X (n_samples, 2).
    """
    blobs = validate_blobs(DEFAULT_BLOBS if blobs is None else blobs)
    rs = np.random.RandomState(random_state)

    parts = []
    for blob in blobs:
        Xb, _ = make_blobs(
            n_samples=blob.count,
            centers=[[blob.mean_x, blob.mean_y]],
            cluster_std=blob.sd,
            shuffle=False,
            random_state=rs
        )
        parts.append(Xb)

    # Stack all parts, group order preserved
    X = np.vstack(parts)
    logger.debug("Generated %d points from %d blobs", X.shape[0], len(blobs))
    return X


def blob_membership(blobs=None):
    """Index of the generating blob for every row of generate_blob_dataset()."""
    blobs = validate_blobs(DEFAULT_BLOBS if blobs is None else blobs)
    return np.repeat(np.arange(len(blobs)), [b.count for b in blobs])

import logging

import numpy as np
import pandas as pd
from scipy import linalg
from sklearn.cluster import KMeans
from sklearn.mixture import GaussianMixture

from kmeans_vs_gmm.config import (
    GMM_MAX_ITER,
    GMM_REG_COVAR,
    GMM_TOL,
    KMEANS_INIT,
    N_CLUSTERS,
    N_INIT,
    validate_n_clusters,
    validate_positive_int,
)
from kmeans_vs_gmm.errors import (
    ConfigurationError,
    DegenerateClusteringError,
    DegenerateCovarianceError,
)
from kmeans_vs_gmm.metrics import compute_all_metrics

logger = logging.getLogger(__name__)


class BaseClusterer:
    def __init__(self, n_clusters=N_CLUSTERS, **kwargs):
        self.n_clusters = validate_positive_int("n_clusters", n_clusters)
        self.model = None

    def _validate_input(self, X):
        if isinstance(X, pd.DataFrame):
            X = X.values
        if not isinstance(X, np.ndarray):
            raise ConfigurationError("Input must be numpy array or pandas DataFrame")
        if X.ndim != 2:
            raise ConfigurationError(f"Input must be 2-D, got shape {X.shape}")
        if not np.isfinite(X).all():
            raise ConfigurationError("Input contains NaN or infinite values")
        validate_n_clusters(self.n_clusters, X.shape[0])
        return X.astype(float)

    def get_virtual_centroids(self):
        """Model-provided centers, row i for label i."""
        return np.array(self.centroids_)

    def get_cluster_ids(self):
        """1-based cluster ids, as shown in reports and plots."""
        return self.labels_ + 1

    def get_metrics(self):
        return compute_all_metrics(self.X_, self.labels_, self.get_virtual_centroids())


class KMeansClusterer(BaseClusterer):
    """
    Hard assignment: Lloyd K-means restarted n_init times from random
    centers; the restart with the lowest inertia wins.
    """

    def __init__(self, n_clusters=N_CLUSTERS, n_init=N_INIT, init=KMEANS_INIT,
                 random_state=None, **kwargs):
        super().__init__(n_clusters=n_clusters)
        self.n_init = validate_positive_int("n_init", n_init)
        self.model = KMeans(
            n_clusters=self.n_clusters,
            n_init=self.n_init,
            init=init,
            random_state=random_state,
            **kwargs
        )

    def fit(self, X):
        X_arr = self._validate_input(X)
        self.model.fit(X_arr)
        self.labels_ = self.model.labels_
        self.centroids_ = self.model.cluster_centers_
        self.inertia_ = float(self.model.inertia_)
        self.n_iter_ = self.model.n_iter_
        self.X_ = X_arr

        populated = np.unique(self.labels_)
        if len(populated) < self.n_clusters:
            raise DegenerateClusteringError(
                f"K-means left {self.n_clusters - len(populated)} of "
                f"{self.n_clusters} clusters empty after {self.n_init} restarts"
            )
        logger.debug("K-means: inertia=%.3f after %d iterations",
                     self.inertia_, self.n_iter_)
        return self


def init_responsibilities(labels, n_clusters):
    """One-hot (n_samples, n_clusters) matrix from 0-based hard labels."""
    labels = np.asarray(labels)
    if labels.ndim != 1:
        raise ConfigurationError("Initial labels must be a 1-D array")
    if labels.size and (labels.min() < 0 or labels.max() >= n_clusters):
        raise ConfigurationError(
            f"Initial labels must lie in [0, {n_clusters - 1}]"
        )
    resp = np.zeros((labels.size, n_clusters))
    resp[np.arange(labels.size), labels] = 1.0
    return resp


def estimate_gaussian_parameters(X, resp, reg_covar=GMM_REG_COVAR):
    """
    M-step for full covariances.
    Returns (weights, means, covariances, precisions); raises
    DegenerateCovarianceError when a covariance is not positive definite.
    """
    n_samples, n_features = X.shape
    nk = resp.sum(axis=0)
    if np.any(nk == 0):
        empty = np.flatnonzero(nk == 0) + 1
        raise DegenerateCovarianceError(
            f"Components {empty.tolist()} have no points to estimate a covariance from"
        )

    weights = nk / n_samples
    means = resp.T @ X / nk[:, np.newaxis]

    covariances = np.empty((len(nk), n_features, n_features))
    precisions = np.empty_like(covariances)
    eye = np.eye(n_features)
    for k in range(len(nk)):
        diff = X - means[k]
        covariances[k] = (resp[:, k] * diff.T) @ diff / nk[k]
        covariances[k].flat[::n_features + 1] += reg_covar
        try:
            cov_chol = linalg.cholesky(covariances[k], lower=True)
        except linalg.LinAlgError as err:
            raise DegenerateCovarianceError(
                f"Covariance of component {k + 1} is singular "
                f"({int(nk[k])} points); cannot start EM"
            ) from err
        prec = linalg.cho_solve((cov_chol, True), eye)
        precisions[k] = (prec + prec.T) / 2
    return weights, means, covariances, precisions


class GMMClusterer(BaseClusterer):
    """
    Soft assignment: EM for a mixture of full-covariance Gaussians,
    started from a hard labeling instead of its own random/k-means init.
    """

    def __init__(self, n_clusters=N_CLUSTERS, tol=GMM_TOL, max_iter=GMM_MAX_ITER,
                 reg_covar=GMM_REG_COVAR, random_state=None, **kwargs):
        super().__init__(n_clusters=n_clusters)
        if not tol > 0:
            raise ConfigurationError(f"tol must be > 0, got {tol!r}")
        if not reg_covar >= 0:
            raise ConfigurationError(f"reg_covar must be >= 0, got {reg_covar!r}")
        self.tol = tol
        self.max_iter = validate_positive_int("max_iter", max_iter)
        self.reg_covar = reg_covar
        self.random_state = random_state
        self.kwargs = kwargs

    def fit(self, X, init_labels):
        X_arr = self._validate_input(X)
        init_labels = np.asarray(init_labels)
        if init_labels.shape != (X_arr.shape[0],):
            raise ConfigurationError(
                f"Expected {X_arr.shape[0]} initial labels, got shape {init_labels.shape}"
            )

        resp0 = init_responsibilities(init_labels, self.n_clusters)
        weights, means, _, precisions = estimate_gaussian_parameters(
            X_arr, resp0, self.reg_covar
        )

        self.model = GaussianMixture(
            n_components=self.n_clusters,
            covariance_type="full",
            tol=self.tol,
            max_iter=self.max_iter,
            reg_covar=self.reg_covar,
            weights_init=weights,
            means_init=means,
            precisions_init=precisions,
            random_state=self.random_state,
            **self.kwargs
        )
        try:
            self.model.fit(X_arr)
        except ValueError as err:
            if "ill-defined empirical covariance" in str(err):
                raise DegenerateCovarianceError(
                    "A mixture component collapsed onto too few points "
                    "(singular covariance) during EM"
                ) from err
            raise

        resp = self.model.predict_proba(X_arr)
        if not np.isfinite(resp).all():
            raise DegenerateCovarianceError("EM produced non-finite responsibilities")

        if not self.model.converged_:
            logger.warning(
                "GMM did not converge within %d iterations (tol=%g)",
                self.max_iter, self.tol
            )

        self.responsibilities_ = resp
        # argmax keeps the first component on ties
        self.labels_ = resp.argmax(axis=1)
        # GMM has means_ instead of cluster_centers_
        self.centroids_ = self.model.means_
        self.covariances_ = self.model.covariances_
        self.weights_ = self.model.weights_
        self.log_likelihood_ = float(self.model.score(X_arr) * X_arr.shape[0])
        self.n_iter_ = self.model.n_iter_
        self.converged_ = bool(self.model.converged_)
        self.X_ = X_arr
        logger.debug("GMM: log-likelihood=%.3f after %d iterations",
                     self.log_likelihood_, self.n_iter_)
        return self

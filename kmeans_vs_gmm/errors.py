class KMeansGMMError(Exception):
    """Base class for every failure the comparison pipeline reports."""


class ConfigurationError(KMeansGMMError, ValueError):
    """Invalid generation or clustering parameters; raised before any fitting."""


class DegenerateClusteringError(KMeansGMMError, RuntimeError):
    """K-means finished with at least one empty cluster."""


class DegenerateCovarianceError(KMeansGMMError, RuntimeError):
    """A mixture component's covariance became singular during the fit."""


class NoDemonstrativeExampleError(KMeansGMMError, RuntimeError):
    """No GMM cluster holds points from enough distinct K-means clusters."""

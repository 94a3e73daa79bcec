from __future__ import annotations
import numpy as np
from .primitives import check_positive

DEFAULT_PRIOR_VARIANCE = 100.0


def softplus(eta: np.ndarray) -> np.ndarray:
    # log(1 + exp(eta)) without overflow for large eta
    return np.logaddexp(0.0, eta)


def sigmoid(eta: np.ndarray) -> np.ndarray:
    return np.exp(-softplus(-np.asarray(eta, dtype=float)))


def log_likelihood(beta: np.ndarray, y: np.ndarray, X: np.ndarray) -> float:
    # Bernoulli log-likelihood under a logit link: sum(y*eta - log(1 + exp(eta)))
    eta = X @ beta
    return float(np.sum(y * eta - softplus(eta)))


def _gaussian_log_prior(beta: np.ndarray, v: float) -> float:
    beta = np.asarray(beta, dtype=float)
    return float(-0.5 * (beta @ beta) / v - 0.5 * beta.size * np.log(2.0 * np.pi * v))


def _log_posterior(beta: np.ndarray, y: np.ndarray, X: np.ndarray, v: float) -> float:
    # no argument checks; callers validate prior variance v once up front
    return log_likelihood(beta, y, X) + _gaussian_log_prior(beta, v)


def log_prior(beta: np.ndarray, prior_variance: float = DEFAULT_PRIOR_VARIANCE) -> float:
    # beta_j ~ N(0, prior_variance) independently
    return _gaussian_log_prior(beta, check_positive("prior_variance", prior_variance))


def log_posterior(
    beta: np.ndarray, y: np.ndarray, X: np.ndarray, prior_variance: float = DEFAULT_PRIOR_VARIANCE
) -> float:
    """Unnormalised log-posterior of a logistic regression with a Gaussian prior."""
    return _log_posterior(beta, y, X, check_positive("prior_variance", prior_variance))

from __future__ import annotations
from typing import Union
import numpy as np
from .errors import NotPositiveDefiniteError, ConfigurationError

SeedLike = Union[int, np.random.Generator, None]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """One ordered random stream per chain. ``seed=None`` pulls fresh OS entropy,
    so results then differ run to run."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def mean(v: np.ndarray) -> float:
    return float(np.mean(np.asarray(v, dtype=float)))


def variance(v: np.ndarray) -> float:
    # sample variance (n - 1 denominator)
    v = np.asarray(v, dtype=float)
    if v.size < 2:
        raise ConfigurationError("variance needs at least two observations")
    return float(np.var(v, ddof=1))


def cholesky_lower(M: np.ndarray, atol: float = 1e-10) -> np.ndarray:
    """Lower factor A with A @ A.T == M.

    numpy only reads the lower triangle, so symmetry is checked here explicitly.
    """
    M = np.asarray(M, dtype=float)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise NotPositiveDefiniteError(f"expected a square matrix, got shape {M.shape}")
    if not np.all(np.isfinite(M)):
        raise NotPositiveDefiniteError("matrix has non-finite entries")
    if not np.allclose(M, M.T, atol=atol, rtol=0.0):
        raise NotPositiveDefiniteError("matrix is not symmetric")
    try:
        return np.linalg.cholesky(M)
    except np.linalg.LinAlgError as exc:
        raise NotPositiveDefiniteError("matrix is not positive definite") from exc


def solve(M: np.ndarray, v: np.ndarray) -> np.ndarray:
    return np.linalg.solve(np.asarray(M, dtype=float), np.asarray(v, dtype=float))


def lm_coef(X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Least-squares coefficients of y on X (no intercept added)."""
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    if X.ndim != 2 or y.ndim != 1 or X.shape[0] != y.shape[0]:
        raise ConfigurationError(f"X {X.shape} and y {y.shape} are not row-aligned")
    if X.shape[0] == X.shape[1]:
        return solve(X, y)
    coef, *_ = np.linalg.lstsq(X, y, rcond=None)
    return coef


def draw_normal(n: int, mean: float, sd: float, rng: np.random.Generator) -> np.ndarray:
    return rng.normal(mean, sd, size=n)


def draw_gamma(n: int, shape: float, rate: float, rng: np.random.Generator) -> np.ndarray:
    # Gamma(shape, rate): density ∝ g^{shape-1} exp(-rate * g), mean shape/rate.
    # numpy takes scale = 1/rate; this is the only place that conversion happens.
    return rng.gamma(shape, 1.0 / rate, size=n)


def draw_uniform(n: int, rng: np.random.Generator) -> np.ndarray:
    return rng.random(n)


def draw_inverse_gamma(shape: float, rate: float, rng: np.random.Generator) -> float:
    # If G ~ Gamma(a, rate=b) then 1/G ~ InvGamma(a, b): p(s2) ∝ s2^{-(a+1)} exp(-b/s2)
    g = float(draw_gamma(1, shape, rate, rng)[0])
    # rate = inf gives scale 0 and g = 0; report inf and let the caller reject it
    return np.inf if g == 0.0 else 1.0 / g


def check_count(name: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def check_positive(name: str, value: float) -> float:
    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be positive and finite, got {value}")
    return value

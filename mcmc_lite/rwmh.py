from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import logging
import numpy as np
import tqdm
from .chain import ChainStore
from .errors import ConfigurationError
from .logistic import DEFAULT_PRIOR_VARIANCE, _log_posterior
from .primitives import (SeedLike, check_count, check_positive, cholesky_lower, draw_normal,
                         draw_uniform, make_rng)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RWMHState:
    beta: np.ndarray
    logp: float  # log_posterior(beta); replaced together with beta


@dataclass(frozen=True)
class RWMHResult:
    draws: np.ndarray  # (R, p), read-only
    n_accepted: int
    n_iter: int

    @property
    def acceptance_rate(self) -> float:
        return self.n_accepted / self.n_iter


def acceptance_probability(logp_new: float, logp_old: float) -> float:
    # min(1, exp(diff)); exp never sees a positive argument, so no overflow
    diff = logp_new - logp_old
    if np.isnan(diff):
        return 0.0
    return float(np.exp(min(0.0, diff)))


def rwmh_step(state: RWMHState, A: np.ndarray, y: np.ndarray, X: np.ndarray,
              rng: np.random.Generator, prior_variance: float = DEFAULT_PRIOR_VARIANCE
              ) -> Tuple[RWMHState, float]:
    """Propose beta' = beta + A z and accept with probability min(1, post'/post).

    Returns the next state and the acceptance probability used. ``prior_variance``
    is not checked here; ``sample_rwmh`` validates it once before the loop.
    """
    z = draw_normal(A.shape[0], 0.0, 1.0, rng)
    beta_prop = state.beta + A @ z
    logp_prop = _log_posterior(beta_prop, y, X, prior_variance)
    alpha = acceptance_probability(logp_prop, state.logp)
    u = draw_uniform(1, rng)[0]
    if u < alpha:
        return RWMHState(beta=beta_prop, logp=logp_prop), alpha
    return state, alpha


def _check_inputs(y, X, S) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    y = np.asarray(y, dtype=float)
    X = np.asarray(X, dtype=float)
    S = np.asarray(S, dtype=float)
    if X.ndim != 2:
        raise ConfigurationError(f"X must be a 2D matrix, got shape {X.shape}")
    if y.ndim != 1 or y.shape[0] != X.shape[0]:
        raise ConfigurationError(f"y {y.shape} does not match the {X.shape[0]} rows of X")
    if not np.all(np.isfinite(X)):
        raise ConfigurationError("X has non-finite values")
    if not np.all((y == 0) | (y == 1)):
        raise ConfigurationError("y must be binary (0/1)")
    p = X.shape[1]
    if S.shape != (p, p):
        raise ConfigurationError(f"S has shape {S.shape}, expected ({p}, {p}) for {p} columns of X")
    return y, X, S


def sample_rwmh(
    R: int, burn_in: int, y: np.ndarray, X: np.ndarray, S: np.ndarray,
    prior_variance: float = DEFAULT_PRIOR_VARIANCE, seed: SeedLike = None, verbose: bool = False
) -> RWMHResult:
    R = check_count("R", R, 1)
    burn_in = check_count("burn_in", burn_in, 0)
    prior_variance = check_positive("prior_variance", prior_variance)
    y, X, S = _check_inputs(y, X, S)
    # factor once; raises NotPositiveDefiniteError before any draw
    A = cholesky_lower(S)
    rng = make_rng(seed)

    p = X.shape[1]
    beta0 = np.zeros(p, dtype=float)
    state = RWMHState(beta=beta0, logp=_log_posterior(beta0, y, X, prior_variance))
    chain = ChainStore(R, [f"beta{j}" for j in range(p)])

    _LOGGER.info("RWMH: n=%d, p=%d, burn_in=%d, R=%d", X.shape[0], p, burn_in, R)
    n_accepted = 0
    total_iter = burn_in + R
    for r in tqdm.tqdm(range(total_iter), total=total_iter, disable=not verbose):
        new_state, _ = rwmh_step(state, A, y, X, rng, prior_variance)
        n_accepted += new_state is not state
        state = new_state
        if r >= burn_in:
            chain.append(state.beta)

    result = RWMHResult(draws=chain.finalize(), n_accepted=n_accepted, n_iter=total_iter)
    _LOGGER.info("RWMH: acceptance rate %.3f", result.acceptance_rate)
    return result


def run_rwmh(
    R: int, burn_in: int, y: np.ndarray, X: np.ndarray, S: np.ndarray,
    prior_variance: float = DEFAULT_PRIOR_VARIANCE, seed: SeedLike = None, verbose: bool = False
) -> np.ndarray:
    """Random-walk Metropolis for a logistic regression with beta_j ~ N(0, prior_variance).

    Proposals are beta + A z with A the lower Cholesky factor of ``S``. Starts at
    beta = 0, keeps iterations ``burn_in .. burn_in + R - 1`` and returns a
    read-only (R, p) array. Output is random unless ``seed`` is fixed.
    """
    return sample_rwmh(R, burn_in, y, X, S, prior_variance=prior_variance, seed=seed,
                       verbose=verbose).draws

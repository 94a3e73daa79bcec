from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Dict, List, Any, Optional
import json
import logging
import numpy as np
import pandas as pd
from .errors import ConfigurationError, NotFittedError
from .gibbs import GIBBS_COLUMNS, run_gibbs
from .logistic import DEFAULT_PRIOR_VARIANCE, sigmoid
from .primitives import solve
from .rwmh import sample_rwmh

_LOGGER = logging.getLogger(__name__)


@dataclass
class GibbsConfig:
    # Normal-mean / Inverse-Gamma-variance prior
    mu_mu: float = 0.0
    sigma2_mu: float = 100.0
    a_sigma: float = 2.0
    b_sigma: float = 1.0
    # chain options
    draws: int = 1000
    burn: int = 500
    seed: Optional[int] = 42
    save_draws: int = 400  # how many draws to persist. If <=0, saves none.


@dataclass
class RWMHConfig:
    features: List[str] = field(default_factory=list)
    intercept: bool = True
    prior_variance: float = DEFAULT_PRIOR_VARIANCE
    proposal_scale: float = 1.0
    proposal_cov: Optional[List[List[float]]] = None  # overrides the default proposal
    # chain options
    draws: int = 5000
    burn: int = 1000
    seed: Optional[int] = 42
    save_draws: int = 1000


def summarize_draws(draws: pd.DataFrame, level: float = 0.95) -> pd.DataFrame:
    """Posterior mean, sd and equal-tailed credible interval per column."""
    if not 0 < level < 1:
        raise ConfigurationError(f"level must lie in (0, 1), got {level}")
    lo = (1 - level) / 2 * 100
    hi = (1 + level) / 2 * 100
    return pd.DataFrame({
        "mean": draws.mean(axis=0),
        "sd": draws.std(axis=0, ddof=1),
        "lo": np.percentile(draws.to_numpy(), lo, axis=0),
        "hi": np.percentile(draws.to_numpy(), hi, axis=0),
    }, index=draws.columns)


def default_proposal_cov(X: np.ndarray, scale: float = 1.0) -> np.ndarray:
    # inverse Fisher information of the logistic likelihood at beta = 0 (weights 1/4),
    # scaled by the usual 2.4^2 / p random-walk factor
    p = X.shape[1]
    info = X.T @ X / 4.0
    return scale ** 2 * (2.4 ** 2 / p) * solve(info, np.eye(p))


def _check_fitted(m, attr: str) -> None:
    if getattr(m, attr) is None:
        raise NotFittedError(f"{type(m).__name__} is not fitted yet; call fit() first")


def _keep_tail(draws: np.ndarray, columns: List[str], save_draws: int) -> Optional[pd.DataFrame]:
    if save_draws and save_draws > 0:
        S = min(save_draws, draws.shape[0])
        return pd.DataFrame(draws[-S:], columns=columns)
    return None


class NormalPosterior:
    def __init__(self, config: GibbsConfig):
        self.config = config
        self.draws_: Optional[pd.DataFrame] = None  # (S, 2)
        self.mean_: Optional[pd.Series] = None
        self.n_obs_: int = 0

    def fit(self, df: pd.DataFrame, x_col: str = "x") -> "NormalPosterior":
        x = df[x_col].to_numpy(float)
        cfg = self.config
        out = run_gibbs(x, cfg.mu_mu, cfg.sigma2_mu, cfg.a_sigma, cfg.b_sigma,
                        R=cfg.draws, burn_in=cfg.burn, seed=cfg.seed)
        self.n_obs_ = int(x.shape[0])
        self.mean_ = pd.Series(out.mean(axis=0), index=list(GIBBS_COLUMNS))
        self.draws_ = _keep_tail(out, list(GIBBS_COLUMNS), cfg.save_draws)
        return self

    def summary(self, level: float = 0.95) -> pd.DataFrame:
        _check_fitted(self, "mean_")
        if self.draws_ is None:
            return pd.DataFrame({"mean": self.mean_})
        return summarize_draws(self.draws_, level)

    # ----- persistence -----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": asdict(self.config),
            "n_obs": self.n_obs_,
            "mean": self.mean_.tolist() if self.mean_ is not None else None,
            "draws": self.draws_.to_numpy().tolist() if self.draws_ is not None else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "NormalPosterior":
        m = cls(GibbsConfig(**d["config"]))
        m.n_obs_ = int(d["n_obs"])
        cols = list(GIBBS_COLUMNS)
        m.mean_ = pd.Series(d["mean"], index=cols) if d["mean"] is not None else None
        m.draws_ = pd.DataFrame(d["draws"], columns=cols) if d.get("draws") is not None else None
        return m

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f)

    @classmethod
    def load(cls, path: str) -> "NormalPosterior":
        with open(path, "r", encoding="utf-8") as f:
            d = json.load(f)
        return cls.from_dict(d)


class LogisticPosterior:
    def __init__(self, config: RWMHConfig):
        self.config = config
        self.feature_names_: List[str] = []
        self.draws_: Optional[pd.DataFrame] = None  # (S, p)
        self.beta_mean_: Optional[np.ndarray] = None
        self.acceptance_rate_: Optional[float] = None

    # ----- design matrix helpers -----
    def _design_matrix(self, df: pd.DataFrame) -> np.ndarray:
        feats = self.config.features or [c for c in df.columns if c.startswith("x")]
        if not feats and not self.config.intercept:
            raise ConfigurationError("no features selected and no intercept")
        cols = [df[c].to_numpy(float) for c in feats]
        names = list(feats)
        if self.config.intercept:
            cols.insert(0, np.ones(len(df), dtype=float))
            names.insert(0, "intercept")
        self.feature_names_ = names
        return np.column_stack(cols)

    # ----- fit/predict -----
    def fit(self, df: pd.DataFrame, y_col: str = "y") -> "LogisticPosterior":
        y = df[y_col].to_numpy(float)
        X = self._design_matrix(df)
        cfg = self.config
        if cfg.proposal_cov is not None:
            S = np.asarray(cfg.proposal_cov, dtype=float)
        else:
            S = default_proposal_cov(X, cfg.proposal_scale)

        res = sample_rwmh(cfg.draws, cfg.burn, y, X, S,
                          prior_variance=cfg.prior_variance, seed=cfg.seed)
        if res.acceptance_rate < 0.1 or res.acceptance_rate > 0.7:
            _LOGGER.warning("RWMH acceptance rate %.3f is outside [0.1, 0.7]; consider "
                            "changing proposal_scale", res.acceptance_rate)
        self.acceptance_rate_ = res.acceptance_rate
        self.beta_mean_ = res.draws.mean(axis=0)
        self.draws_ = _keep_tail(res.draws, self.feature_names_, cfg.save_draws)
        return self

    def _design_matrix_for(self, df: pd.DataFrame) -> np.ndarray:
        cols = [np.ones(len(df)) if c == "intercept" else df[c].to_numpy(float)
                for c in self.feature_names_]
        return np.column_stack(cols)

    def predict_proba(self, df: pd.DataFrame) -> pd.Series:
        """Posterior predictive P(y=1), averaged over kept draws when available."""
        _check_fitted(self, "beta_mean_")
        Xnew = self._design_matrix_for(df)
        if self.draws_ is not None:
            p = sigmoid(self.draws_.to_numpy() @ Xnew.T).mean(axis=0)  # (S, n) -> (n,)
        else:
            p = sigmoid(Xnew @ self.beta_mean_)
        return pd.Series(p, index=df.index, name="p")

    def summary(self, level: float = 0.95) -> pd.DataFrame:
        _check_fitted(self, "beta_mean_")
        if self.draws_ is None:
            return pd.DataFrame({"mean": self.beta_mean_}, index=self.feature_names_)
        return summarize_draws(self.draws_, level)

    # ----- persistence -----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": asdict(self.config),
            "feature_names": self.feature_names_,
            "acceptance_rate": self.acceptance_rate_,
            "beta_mean": self.beta_mean_.tolist() if self.beta_mean_ is not None else None,
            "draws": self.draws_.to_numpy().tolist() if self.draws_ is not None else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LogisticPosterior":
        m = cls(RWMHConfig(**d["config"]))
        m.feature_names_ = list(d["feature_names"])
        m.acceptance_rate_ = d.get("acceptance_rate")
        m.beta_mean_ = np.asarray(d["beta_mean"]) if d["beta_mean"] is not None else None
        if d.get("draws") is not None:
            m.draws_ = pd.DataFrame(d["draws"], columns=m.feature_names_)
        return m

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f)

    @classmethod
    def load(cls, path: str) -> "LogisticPosterior":
        with open(path, "r", encoding="utf-8") as f:
            d = json.load(f)
        return cls.from_dict(d)

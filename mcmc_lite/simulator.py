from __future__ import annotations
from typing import Sequence
import numpy as np
import pandas as pd
from .logistic import sigmoid


def simulate_normal(n: int = 200, mean: float = 5.0, sd: float = 2.0, seed: int = 42) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    return pd.DataFrame({"x": rng.normal(mean, sd, size=n)})


def simulate_logistic(
    n: int = 200,
    beta: Sequence[float] = (0.5, -1.0),
    intercept: bool = True,
    seed: int = 42,
) -> pd.DataFrame:
    """Binary outcome y with P(y=1) = sigmoid(X @ beta).

    With ``intercept`` the first coefficient multiplies a column of ones and the
    remaining columns are standard normal covariates ``x1, x2, ...``.
    """
    rng = np.random.default_rng(seed)
    beta = np.asarray(beta, dtype=float)
    p = beta.shape[0]
    k = p - 1 if intercept else p
    Z = rng.normal(size=(n, k))
    X = np.column_stack([np.ones(n), Z]) if intercept else Z
    y = (rng.random(n) < sigmoid(X @ beta)).astype(float)

    df = pd.DataFrame(Z, columns=[f"x{j + 1}" for j in range(k)])
    df["y"] = y
    return df

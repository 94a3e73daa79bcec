from mcmc_lite import simulate_normal, simulate_logistic, NormalPosterior, GibbsConfig, LogisticPosterior, RWMHConfig
df = simulate_normal(n=100, mean=5.0, sd=2.0, seed=3)
m = NormalPosterior(GibbsConfig(draws=2000, burn=500, seed=3)).fit(df, x_col="x")
print(m.summary().to_string())
dfl = simulate_logistic(n=100, beta=[0.5, -1.0], seed=3)
lm = LogisticPosterior(RWMHConfig(draws=4000, burn=1000, seed=3)).fit(dfl, y_col="y")
print(f"acceptance rate: {lm.acceptance_rate_:.3f}")
print(lm.summary().to_string())

from __future__ import annotations
import argparse, json, sys
import pandas as pd
from .log import setup_logging
from .models import GibbsConfig, LogisticPosterior, NormalPosterior, RWMHConfig
from .primitives import lm_coef
from .simulator import simulate_logistic, simulate_normal

def _seed(value: str):
    return None if value.lower() == "none" else int(value)

def cmd_simulate_normal(args):
    df = simulate_normal(n=args.n, mean=args.mean, sd=args.sd, seed=args.seed)
    df.to_csv(args.out, index=False)
    print(f"Wrote simulated dataset to {args.out}")

def cmd_simulate_logistic(args):
    beta = [float(b) for b in args.beta.split(",")]
    df = simulate_logistic(n=args.n, beta=beta, intercept=not args.no_intercept, seed=args.seed)
    df.to_csv(args.out, index=False)
    print(f"Wrote simulated dataset to {args.out}")

def _write_draws(m, path):
    if not path:
        return
    if m.draws_ is None:
        print(f"No draws kept (--save-draws <= 0); not writing {path}")
        return
    m.draws_.to_csv(path, index=False)

def cmd_gibbs(args):
    df = pd.read_csv(args.data)
    cfg = GibbsConfig(
        mu_mu=args.mu_mu, sigma2_mu=args.sigma2_mu, a_sigma=args.a_sigma, b_sigma=args.b_sigma,
        draws=args.draws, burn=args.burn, seed=args.seed, save_draws=args.save_draws,
    )
    m = NormalPosterior(cfg).fit(df, x_col=args.x_col)
    _write_draws(m, args.draws_out)
    m.save(args.model_out)
    print(f"Gibbs sampler finished. Saved to {args.model_out}")
    print(m.summary(level=args.level).to_string())

def cmd_rwmh(args):
    df = pd.read_csv(args.data)
    cfg = RWMHConfig(
        features=args.features.split(",") if args.features else [],
        intercept=not args.no_intercept,
        prior_variance=args.prior_variance,
        proposal_scale=args.proposal_scale,
        proposal_cov=json.loads(args.proposal_cov) if args.proposal_cov else None,
        draws=args.draws, burn=args.burn, seed=args.seed, save_draws=args.save_draws,
    )
    m = LogisticPosterior(cfg).fit(df, y_col=args.y_col)
    _write_draws(m, args.draws_out)
    m.save(args.model_out)
    print(f"RWMH sampler finished (acceptance rate {m.acceptance_rate_:.3f}). Saved to {args.model_out}")
    print(m.summary(level=args.level).to_string())

def cmd_ols(args):
    df = pd.read_csv(args.data)
    feats = args.features.split(",")
    if not args.no_intercept:
        df = df.assign(intercept=1.0)
        feats = ["intercept"] + feats
    X = df[feats].to_numpy(float)
    coef = lm_coef(X, df[args.y_col].to_numpy(float))
    print(pd.Series(coef, index=feats).to_string())

def _add_chain_options(p, draws, burn, save_draws):
    p.add_argument("--draws", type=int, default=draws)
    p.add_argument("--burn", type=int, default=burn)
    p.add_argument("--seed", type=_seed, default=42, help="integer seed, or 'none' for a fresh stream")
    p.add_argument("--save-draws", type=int, default=save_draws)
    p.add_argument("--level", type=float, default=0.95)
    p.add_argument("--draws-out", default=None, help="optional CSV of kept draws")

def build_parser():
    p = argparse.ArgumentParser(prog="mcmc-lite", description="Gibbs and random-walk Metropolis samplers.")
    p.add_argument("--log-level", default="WARNING")
    sub = p.add_subparsers()

    psn = sub.add_parser("simulate-normal", help="Generate x ~ N(mean, sd^2)")
    psn.add_argument("--n", type=int, default=200)
    psn.add_argument("--mean", type=float, default=5.0)
    psn.add_argument("--sd", type=float, default=2.0)
    psn.add_argument("--seed", type=int, default=42)
    psn.add_argument("--out", default="sim_normal.csv")
    psn.set_defaults(func=cmd_simulate_normal)

    psl = sub.add_parser("simulate-logistic", help="Generate a binary-outcome dataset")
    psl.add_argument("--n", type=int, default=200)
    psl.add_argument("--beta", default="0.5,-1.0")
    psl.add_argument("--no-intercept", action="store_true")
    psl.add_argument("--seed", type=int, default=42)
    psl.add_argument("--out", default="sim_logistic.csv")
    psl.set_defaults(func=cmd_simulate_logistic)

    pg = sub.add_parser("gibbs", help="Normal mean / Inverse-Gamma variance Gibbs sampler")
    pg.add_argument("--data", required=True)
    pg.add_argument("--x-col", default="x")
    pg.add_argument("--mu-mu", type=float, default=0.0)
    pg.add_argument("--sigma2-mu", type=float, default=100.0)
    pg.add_argument("--a-sigma", type=float, default=2.0)
    pg.add_argument("--b-sigma", type=float, default=1.0)
    _add_chain_options(pg, draws=1000, burn=500, save_draws=400)
    pg.add_argument("--model-out", default="gibbs_posterior.json")
    pg.set_defaults(func=cmd_gibbs)

    pr = sub.add_parser("rwmh", help="Random-walk Metropolis for Bayesian logistic regression")
    pr.add_argument("--data", required=True)
    pr.add_argument("--y-col", default="y")
    pr.add_argument("--features", default="", help="comma-separated; default: columns starting with 'x'")
    pr.add_argument("--no-intercept", action="store_true")
    pr.add_argument("--prior-variance", type=float, default=100.0)
    pr.add_argument("--proposal-scale", type=float, default=1.0)
    pr.add_argument("--proposal-cov", default=None, help="JSON p x p matrix, e.g. '[[0.1,0],[0,0.1]]'")
    _add_chain_options(pr, draws=5000, burn=1000, save_draws=1000)
    pr.add_argument("--model-out", default="rwmh_posterior.json")
    pr.set_defaults(func=cmd_rwmh)

    po = sub.add_parser("ols", help="Least-squares coefficients")
    po.add_argument("--data", required=True)
    po.add_argument("--y-col", default="y")
    po.add_argument("--features", required=True)
    po.add_argument("--no-intercept", action="store_true")
    po.set_defaults(func=cmd_ols)

    return p

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    p = build_parser()
    if len(argv) == 0:
        p.print_help()
        return 0
    args = p.parse_args(argv)
    setup_logging(args.log_level)
    if not hasattr(args, "func"):
        p.print_help()
        return 0
    return args.func(args)

if __name__ == "__main__":
    raise SystemExit(main())

import json

import pandas as pd

from mcmc_lite.cli import main


def test_no_args_prints_help(capsys):
    assert main([]) == 0
    assert "mcmc-lite" in capsys.readouterr().out


def test_gibbs_workflow(tmp_path, capsys):
    data = tmp_path / "normal.csv"
    main(["simulate-normal", "--n", "80", "--out", str(data)])
    model = tmp_path / "gibbs.json"
    draws = tmp_path / "draws.csv"
    main(["gibbs", "--data", str(data), "--draws", "300", "--burn", "50",
          "--save-draws", "100", "--model-out", str(model), "--draws-out", str(draws)])
    out = capsys.readouterr().out
    assert "sigma2" in out
    assert json.loads(model.read_text())["config"]["draws"] == 300
    assert pd.read_csv(draws).shape == (100, 2)


def test_rwmh_workflow(tmp_path, capsys):
    data = tmp_path / "logit.csv"
    main(["simulate-logistic", "--n", "120", "--beta", "0.2,1.0,-0.5", "--out", str(data)])
    assert list(pd.read_csv(data).columns) == ["x1", "x2", "y"]
    model = tmp_path / "rwmh.json"
    main(["rwmh", "--data", str(data), "--draws", "500", "--burn", "100",
          "--seed", "none", "--model-out", str(model)])
    out = capsys.readouterr().out
    assert "acceptance rate" in out
    d = json.loads(model.read_text())
    assert d["feature_names"] == ["intercept", "x1", "x2"]
    assert d["config"]["seed"] is None


def test_ols(tmp_path, capsys):
    data = tmp_path / "lin.csv"
    x = pd.Series(range(10), dtype=float)
    pd.DataFrame({"x1": x, "y": 2.0 + 3.0 * x}).to_csv(data, index=False)
    main(["ols", "--data", str(data), "--features", "x1"])
    out = capsys.readouterr().out
    lines = dict(line.split() for line in out.strip().splitlines())
    assert abs(float(lines["intercept"]) - 2.0) < 1e-8
    assert abs(float(lines["x1"]) - 3.0) < 1e-8


def test_draws_out_skipped_when_no_draws_kept(tmp_path, capsys):
    data = tmp_path / "normal.csv"
    main(["simulate-normal", "--n", "40", "--out", str(data)])
    draws = tmp_path / "draws.csv"
    main(["gibbs", "--data", str(data), "--draws", "50", "--burn", "10", "--save-draws", "0",
          "--model-out", str(tmp_path / "g.json"), "--draws-out", str(draws)])
    assert not draws.exists()
    assert "not writing" in capsys.readouterr().out

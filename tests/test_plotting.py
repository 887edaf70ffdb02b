import pytest

from oscfilter import osc
from oscfilter.compare import compare_variants
from oscfilter.plotting import plot_comparison, plot_scores


def test_plot_scores_writes_file(tmp_path, rng):
    X = rng.standard_normal((15, 4))
    Y = rng.standard_normal((15, 2))
    res = osc(X, Y, n_components=2, method="fearn")
    out = tmp_path / "scores.png"
    plot_scores(res, Y, component=1, outfile=str(out))
    assert out.exists()


def test_plot_scores_rejects_missing_component(independent_data):
    X, y = independent_data
    res = osc(X, y, n_components=1)
    with pytest.raises(IndexError):
        plot_scores(res, y, component=1, outfile="unused.png")


def test_plot_comparison_writes_file(tmp_path, independent_data):
    X, y = independent_data
    results, _ = compare_variants(X, y)
    out = tmp_path / "comparison.png"
    fig = plot_comparison(results, outfile=str(out))
    assert out.exists()
    assert len(fig.axes) == 2

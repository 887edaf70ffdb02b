import pytest

from oscfilter.compare import compare_variants, comparison_table, format_table
from oscfilter.exceptions import OSCInputError


def test_compare_runs_every_variant(independent_data):
    X, y = independent_data
    results, runtimes = compare_variants(X, y, n_components=1)
    assert list(results) == ["wold", "sjoblom", "fearn"]
    assert set(runtimes) == set(results)
    assert all(t >= 0.0 for t in runtimes.values())
    for method, res in results.items():
        assert res.method == method


def test_comparison_table_rows(independent_data):
    X, y = independent_data
    results, runtimes = compare_variants(X, y, methods=("fearn", "wold"), n_components=2)
    rows = comparison_table(results, runtimes)
    assert [r["method"] for r in rows] == ["fearn", "wold"]
    assert all("runtime_s" in r for r in rows)
    assert rows[0]["iterations"] >= 1
    assert all(r["weight_orth"] >= 0.0 for r in rows)
    text = format_table(rows)
    assert "fearn" in text and "wold" in text
    assert "W orth" in text
    assert text.splitlines()[0].startswith("method")


def test_comparison_table_without_runtimes(independent_data):
    X, y = independent_data
    results, _ = compare_variants(X, y, methods=("wold",))
    assert "runtime_s" not in comparison_table(results)[0]


def test_compare_rejects_unknown_method(independent_data):
    X, y = independent_data
    with pytest.raises(OSCInputError):
        compare_variants(X, y, methods=("wold", "opls"))


def test_single_component_rows_report_orthonormal_weights(independent_data):
    X, y = independent_data
    results, _ = compare_variants(X, y, n_components=1)
    assert [r["weight_orth"] for r in comparison_table(results)] == pytest.approx([0.0] * 3, abs=1e-4)

"""Test module to run examples from the examples.fit package

The tests are run using pytest.
"""

import os

import pytest  # pylint: disable=unused-import

from examples.fit import fit_benchmark, fit_to_svg


def test_examples_fit_to_svg(tmp_path):
    """Test function for fit_to_svg example"""
    output_filename = str(tmp_path / "svg" / "fit_to_svg.svg")
    assert fit_to_svg.main(output_filename) == output_filename
    assert os.path.getsize(output_filename) > 0


def test_examples_fit_benchmark():
    """Test function for fit_benchmark example"""
    results = fit_benchmark.main(anchor_counts=[3, 20], repeats=2)
    assert sorted(results) == [3, 20]
    assert all(set(timings) == {"banded", "dense"} for timings in results.values())

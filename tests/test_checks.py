"""网格自检单元测试"""

from dataclasses import replace

import numpy as np
import pytest

from lebquad.checks import GridCheckConfig, is_oh_invariant, oh_operations, verify_grid
from lebquad.grid import available_orders, lebedev_grid


@pytest.mark.symmetry
@pytest.mark.quick
def test_oh_group_has_48_operations():
    ops = oh_operations()
    assert len(ops) == 48
    assert len({(perm, tuple(signs)) for perm, signs in ops}) == 48


@pytest.mark.symmetry
@pytest.mark.quick
def test_asymmetric_point_set_detected():
    pts = np.array([[0.6, 0.8, 0.0], [-0.6, 0.8, 0.0]])
    assert not is_oh_invariant(pts)


@pytest.mark.grid
@pytest.mark.parametrize("order", available_orders())
def test_verify_all_grids(order):
    cfg = GridCheckConfig(max_degree_checked=15)
    report = verify_grid(lebedev_grid(order), cfg)
    assert report.passed, report
    assert report.oh_invariant
    assert report.degree_checked == min(15, lebedev_grid(order).degree)


@pytest.mark.grid
@pytest.mark.quick
def test_verify_verbose_output(capsys):
    report = verify_grid(lebedev_grid(50), verbose=True)
    out = capsys.readouterr().out
    assert report.passed
    assert "[Lebedev N=50]" in out
    assert "Oh invariant=True" in out


@pytest.mark.grid
@pytest.mark.quick
def test_verify_detects_corrupted_weights():
    g = lebedev_grid(38)
    bad = replace(g, w=g.w * 1.001)
    report = verify_grid(bad)
    assert not report.passed
    assert report.weight_sum_error > 1e-4


@pytest.mark.grid
def test_verify_detects_broken_symmetry():
    g = lebedev_grid(14)
    x = g.x.copy()
    x[0] = 0.9
    report = verify_grid(replace(g, x=x), GridCheckConfig(check_degree=False))
    assert not report.oh_invariant
    assert not report.passed
    assert report.max_degree_error is None


@pytest.mark.grid
def test_verify_default_checks_full_degree():
    """默认配置检验到网格的全部代数精度。"""
    assert GridCheckConfig().max_degree_checked is None
    report = verify_grid(lebedev_grid(302))
    assert report.degree_checked == 29
    assert report.passed, report

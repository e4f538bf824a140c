"""球谐函数与单项式参考值单元测试

测试 harmonics.py 模块，并借此检验各规则的代数精度。
"""

import numpy as np
import pytest
import sympy

from lebquad.grid import lebedev_grid
from lebquad.harmonics import max_monomial_error, monomial_sphere_average, real_spherical_harmonic


@pytest.mark.harmonics
@pytest.mark.quick
def test_monomial_average_known_values():
    """⟨x²⟩=1/3, ⟨x⁴⟩=1/5, ⟨x²y²⟩=1/15, ⟨x²y²z²⟩=1/105。"""
    assert monomial_sphere_average(0, 0, 0, exact=True) == 1
    assert monomial_sphere_average(2, 0, 0, exact=True) == sympy.Rational(1, 3)
    assert monomial_sphere_average(0, 0, 4, exact=True) == sympy.Rational(1, 5)
    assert monomial_sphere_average(2, 2, 0, exact=True) == sympy.Rational(1, 15)
    assert monomial_sphere_average(2, 2, 2, exact=True) == sympy.Rational(1, 105)
    assert np.isclose(monomial_sphere_average(2, 2, 2), 1.0 / 105.0, rtol=1e-15)


@pytest.mark.harmonics
@pytest.mark.quick
def test_monomial_average_odd_is_zero():
    assert monomial_sphere_average(1, 0, 0) == 0.0
    assert monomial_sphere_average(2, 3, 4) == 0.0


@pytest.mark.harmonics
def test_monomial_average_negative_exponent():
    with pytest.raises(ValueError, match="指数必须非负"):
        monomial_sphere_average(-2, 0, 0)


@pytest.mark.harmonics
@pytest.mark.parametrize("order", [6, 14, 26, 38, 50, 74, 86, 110, 146, 170, 194, 230, 266, 302])
def test_rule_exact_up_to_degree(order):
    """次数 ≤ L 的单项式被精确积分。"""
    grid = lebedev_grid(order)
    err = max_monomial_error(grid)
    assert err < 1e-13, f"N={order} 在 L={grid.degree} 内误差 {err:.3e}"


@pytest.mark.harmonics
@pytest.mark.parametrize("order", [350, 434, 590, 770, 974, 1202, 1454, 1730, 2030, 2354, 2702, 3074, 3470, 3890, 4334, 4802, 5294, 5810])
def test_large_rule_exact_low_degree(order):
    """大网格：检验到 31 次，轨道参数的抄录错误会在此暴露。"""
    grid = lebedev_grid(order)
    err = max_monomial_error(grid, degree=31)
    assert err < 1e-13, f"N={order} 在 L=31 内误差 {err:.3e}"


@pytest.mark.harmonics
@pytest.mark.parametrize("order", [6, 14, 26])
def test_rule_not_exact_beyond_degree(order):
    """超出代数精度后误差明显非零。"""
    grid = lebedev_grid(order)
    assert max_monomial_error(grid, grid.degree + 1) > 1e-6


@pytest.mark.harmonics
@pytest.mark.quick
def test_spherical_harmonic_invalid_indices():
    x = np.array([0.0])
    with pytest.raises(ValueError, match="量子数不合法"):
        real_spherical_harmonic(1, 2, x, x, x + 1.0)
    with pytest.raises(ValueError, match="量子数不合法"):
        real_spherical_harmonic(-1, 0, x, x, x + 1.0)


@pytest.mark.harmonics
@pytest.mark.quick
def test_spherical_harmonic_low_l_values():
    """Y_00 = 1/√(4π)，|Y_10| = √(3/4π) |z|。"""
    g = lebedev_grid(26)
    y00 = real_spherical_harmonic(0, 0, g.x, g.y, g.z)
    assert np.allclose(y00, 1.0 / np.sqrt(4 * np.pi))
    y10 = real_spherical_harmonic(1, 0, g.x, g.y, g.z)
    assert np.allclose(np.abs(y10), np.sqrt(3.0 / (4 * np.pi)) * np.abs(g.z))


@pytest.mark.harmonics
def test_spherical_harmonics_orthonormal_on_grid():
    """110 点网格（L=17）：ℓ, ℓ' ≤ 8 的实球谐函数正交归一。"""
    g = lebedev_grid(110)
    lmax = 8
    ys = np.array([
        real_spherical_harmonic(l, m, g.x, g.y, g.z)
        for l in range(lmax + 1)
        for m in range(-l, l + 1)
    ])
    gram = 4 * np.pi * (ys * g.w) @ ys.T
    assert gram.shape == ((lmax + 1) ** 2, (lmax + 1) ** 2)
    assert np.allclose(gram, np.eye(gram.shape[0]), atol=1e-12)

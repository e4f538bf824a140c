import numpy as np
import pytest

from lebquad.grid import (
    LebedevGrid,
    available_orders,
    generate_lebedev_grid,
    integrate_sphere,
    lebedev_grid,
    order_for_degree,
)

ORDERS = available_orders()


@pytest.mark.grid
@pytest.mark.quick
def test_available_orders():
    assert len(ORDERS) == 32
    assert ORDERS[0] == 6 and ORDERS[-1] == 5810
    assert ORDERS == sorted(ORDERS)


@pytest.mark.grid
@pytest.mark.parametrize("order", ORDERS)
def test_grid_size_norm_and_weight_sum(order):
    x, y, z, w = generate_lebedev_grid(order)
    for arr in (x, y, z, w):
        assert arr.shape == (order,)
        assert arr.dtype == np.float64
    # 单位球面
    assert np.max(np.abs(x**2 + y**2 + z**2 - 1.0)) < 1e-12
    # 权重归一化
    assert np.isclose(np.sum(w), 1.0, rtol=0, atol=1e-10)


@pytest.mark.grid
@pytest.mark.parametrize("order", [6, 110, 3470, 5810])
def test_grid_deterministic_and_fresh(order):
    """两次调用逐位相同，且返回的是各自独立的数组。"""
    g1 = generate_lebedev_grid(order)
    g2 = generate_lebedev_grid(order)
    for a1, a2 in zip(g1, g2):
        assert np.array_equal(a1, a2)
        assert not np.shares_memory(a1, a2)
    g1[3][:] = 0.0
    assert np.isclose(np.sum(generate_lebedev_grid(order)[3]), 1.0, rtol=0, atol=1e-10)


@pytest.mark.grid
@pytest.mark.quick
@pytest.mark.parametrize("order", [7, 0, 25, 6000, 6.0, 302.0])
def test_unsupported_order_raises(order):
    with pytest.raises(ValueError, match="不支持的 Lebedev 阶数"):
        generate_lebedev_grid(order)
    with pytest.raises(ValueError):
        lebedev_grid(order)


@pytest.mark.grid
@pytest.mark.quick
def test_six_point_grid():
    """6 点规则：(±1,0,0),(0,±1,0),(0,0,±1)，权重均为 1/6。"""
    x, y, z, w = generate_lebedev_grid(6)
    pts = np.column_stack([x, y, z])
    expected = np.array([
        [1, 0, 0], [-1, 0, 0],
        [0, 1, 0], [0, -1, 0],
        [0, 0, 1], [0, 0, -1],
    ], dtype=float)
    assert np.array_equal(pts, expected)
    assert np.all(w == 0.1666666666666667)


@pytest.mark.grid
@pytest.mark.quick
def test_twenty_six_point_grid():
    """26 点规则：6 个轴点 + 12 个棱中点 + 8 个顶点。"""
    x, y, z, w = generate_lebedev_grid(26)
    assert np.all(w[:6] == 0.04761904761904762)
    assert np.all(w[6:18] == 0.03809523809523810)
    assert np.all(w[18:] == 0.03214285714285714)
    n_zero = np.sum(np.column_stack([x, y, z]) == 0.0, axis=1)
    assert np.all(n_zero[:6] == 2)
    assert np.all(n_zero[6:18] == 1)
    assert np.all(n_zero[18:] == 0)
    assert np.isclose(np.sum(w), 1.0, rtol=0, atol=1e-14)


@pytest.mark.grid
@pytest.mark.quick
def test_lebedev_grid_container():
    g = lebedev_grid(302)
    assert isinstance(g, LebedevGrid)
    assert g.order == 302 and g.degree == 29
    assert g.points.shape == (302, 3)
    theta, phi = g.spherical()
    assert np.all((theta >= 0) & (theta <= np.pi))
    assert np.all((phi > -np.pi - 1e-15) & (phi <= np.pi))
    assert np.allclose(np.sin(theta) * np.cos(phi), g.x, atol=1e-14)
    assert np.allclose(np.cos(theta), g.z, atol=1e-14)


@pytest.mark.grid
def test_grid_integrate_shape_mismatch():
    g = lebedev_grid(14)
    with pytest.raises(ValueError, match="形状"):
        g.integrate(np.ones(13))


@pytest.mark.grid
@pytest.mark.quick
def test_integrate_sphere_simple_functions():
    # ∫ 1 dΩ = 4π, ∫ z^2 dΩ = 4π/3, ∫ x^2 y^2 z^2 dΩ = 4π/105
    assert np.isclose(integrate_sphere(lambda x, y, z: 1.0, 6), 4 * np.pi, rtol=0, atol=1e-12)
    assert np.isclose(integrate_sphere(lambda x, y, z: z**2, 14), 4 * np.pi / 3, rtol=0, atol=1e-12)
    assert np.isclose(
        integrate_sphere(lambda x, y, z: x**2 * y**2 * z**2, 50), 4 * np.pi / 105, rtol=0, atol=1e-13
    )
    # 奇函数积分为零
    assert abs(integrate_sphere(lambda x, y, z: x * y**2, 26)) < 1e-15


@pytest.mark.grid
def test_integrate_sphere_smooth_function_converges():
    """光滑非多项式函数：高阶网格收敛到解析值。"""
    # ∫ exp(z) dΩ = 2π (e - 1/e)
    exact = 2 * np.pi * (np.e - 1.0 / np.e)
    err_small = abs(integrate_sphere(lambda x, y, z: np.exp(z), 14) - exact)
    err_large = abs(integrate_sphere(lambda x, y, z: np.exp(z), 194) - exact)
    assert err_large < err_small
    assert err_large < 1e-12


@pytest.mark.grid
@pytest.mark.quick
def test_order_for_degree():
    assert order_for_degree(0) == 6
    assert order_for_degree(3) == 6
    assert order_for_degree(4) == 14
    assert order_for_degree(17) == 110
    assert order_for_degree(32) == 434
    assert order_for_degree(131) == 5810
    with pytest.raises(ValueError, match="超过"):
        order_for_degree(132)
    with pytest.raises(ValueError, match="非负"):
        order_for_degree(-1)

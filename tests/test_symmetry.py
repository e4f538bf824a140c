"""对称轨道展开单元测试

测试 symmetry.py 中 gen_oh / expand_orbit 的正确性。
"""

import numpy as np
import pytest

from lebquad.checks import is_oh_invariant
from lebquad.symmetry import Orbit, OrbitCode, expand_orbit, gen_oh, orbit_size

# 每种类型的一组合法生成坐标
SAMPLE_AB = {
    1: (0.0, 0.0),
    2: (0.0, 0.0),
    3: (0.0, 0.0),
    4: (0.4492044687397611, 0.0),
    5: (0.5823842309715585, 0.0),
    6: (0.2272181808998187, 0.4864661535886647),
}


@pytest.mark.symmetry
@pytest.mark.quick
@pytest.mark.parametrize("code, size", [(1, 6), (2, 12), (3, 8), (4, 24), (5, 24), (6, 48)])
def test_orbit_sizes(code, size):
    """每种类型的点数固定。"""
    a, b = SAMPLE_AB[code]
    assert orbit_size(code) == size
    assert OrbitCode(code).size == size
    assert expand_orbit(code, a, b, 0.5).shape == (size, 4)


@pytest.mark.symmetry
@pytest.mark.quick
def test_axis_orbit_points():
    """code 1: (±1,0,0), (0,±1,0), (0,0,±1)。"""
    g = expand_orbit(1, v=0.25)
    expected = np.array([
        [1.0, 0.0, 0.0],
        [-1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, -1.0, 0.0],
        [0.0, 0.0, 1.0],
        [0.0, 0.0, -1.0],
    ])
    assert np.array_equal(g[:, :3], expected)
    assert np.all(g[:, 3] == 0.25)


@pytest.mark.symmetry
@pytest.mark.quick
def test_edge_and_corner_coordinates_fixed_internally():
    """code 2、3 忽略输入 a，内部固定为 1/√2、1/√3。"""
    edge = expand_orbit(2, a=0.9, b=0.1)
    corner = expand_orbit(3, a=0.9, b=0.1)
    assert np.allclose(np.sort(np.abs(edge[:, :3]), axis=1)[:, 1:], np.sqrt(0.5), atol=0, rtol=1e-15)
    assert np.all(np.sort(np.abs(edge[:, :3]), axis=1)[:, 0] == 0.0)
    assert np.allclose(np.abs(corner[:, :3]), np.sqrt(1.0 / 3.0), atol=0, rtol=1e-15)


@pytest.mark.symmetry
@pytest.mark.parametrize("code", [1, 2, 3, 4, 5, 6])
def test_orbit_on_unit_sphere_and_distinct(code):
    """轨道点位于单位球面，且两两不同。"""
    a, b = SAMPLE_AB[code]
    g = expand_orbit(code, a, b, 1.0)
    r2 = np.sum(g[:, :3] ** 2, axis=1)
    assert np.max(np.abs(r2 - 1.0)) < 1e-14
    assert np.unique(g[:, :3], axis=0).shape[0] == g.shape[0], "轨道内存在重复点"


@pytest.mark.symmetry
@pytest.mark.quick
@pytest.mark.parametrize("code", [1, 2, 3, 4, 5, 6])
def test_orbit_oh_invariant(code):
    """轨道在 48 个 O_h 操作下封闭。"""
    a, b = SAMPLE_AB[code]
    g = expand_orbit(code, a, b, 1.0)
    assert is_oh_invariant(g[:, :3], tol=1e-14)


@pytest.mark.symmetry
def test_aab_orbit_ordering():
    """code 4 的点序：x 符号变化最快，置换顺序 (a,a,b),(a,b,a),(b,a,a)。"""
    a = 0.3015113445777636
    b = np.sqrt(1.0 - 2.0 * a * a)
    g = expand_orbit(4, a)
    assert np.array_equal(g[0, :3], [a, a, b])
    assert np.array_equal(g[1, :3], [-a, a, b])
    assert np.array_equal(g[2, :3], [a, -a, b])
    assert np.array_equal(g[4, :3], [a, a, -b])
    assert np.array_equal(g[8, :3], [a, b, a])
    assert np.array_equal(g[16, :3], [b, a, a])
    assert np.array_equal(g[23, :3], [-b, -a, -a])


@pytest.mark.symmetry
def test_ab0_and_abc_orbit_ordering():
    """code 5、6 的置换顺序。"""
    a = 0.4597008433809831
    b = np.sqrt(1.0 - a * a)
    g5 = expand_orbit(5, a)
    assert np.array_equal(g5[4, :3], [b, a, 0.0])
    assert np.array_equal(g5[8, :3], [a, 0.0, b])
    assert np.array_equal(g5[12, :3], [b, 0.0, a])
    assert np.array_equal(g5[16, :3], [0.0, a, b])
    assert np.array_equal(g5[20, :3], [0.0, b, a])

    a, b = SAMPLE_AB[6]
    c = np.sqrt(1.0 - a * a - b * b)
    g6 = expand_orbit(6, a, b)
    for idx, expected in zip(range(0, 48, 8), [(a, b, c), (a, c, b), (b, a, c), (b, c, a), (c, a, b), (c, b, a)]):
        assert np.array_equal(g6[idx, :3], expected), f"第 {idx} 个点应为 {expected}"
    assert np.array_equal(g6[47, :3], [-c, -b, -a])


@pytest.mark.symmetry
@pytest.mark.quick
def test_gen_oh_writes_at_offset():
    """gen_oh 从 offset 开始写入并返回点数，其余位置不变。"""
    x, y, z, w = (np.full(20, 9.0) for _ in range(4))
    n = gen_oh(3, 0.0, 0.0, 0.125, x, y, z, w, offset=5)
    assert n == 8
    assert np.all(x[:5] == 9.0) and np.all(x[13:] == 9.0)
    assert np.all(w[5:13] == 0.125)
    assert np.allclose(x[5:13] ** 2 + y[5:13] ** 2 + z[5:13] ** 2, 1.0)


@pytest.mark.symmetry
@pytest.mark.quick
@pytest.mark.parametrize("code", [0, 7, -1])
def test_gen_oh_invalid_code(code):
    """非法 code 报错且不写入任何数据。"""
    x, y, z, w = (np.full(48, 9.0) for _ in range(4))
    with pytest.raises(ValueError, match="非法的轨道类型"):
        gen_oh(code, 0.3, 0.3, 1.0, x, y, z, w)
    for buf in (x, y, z, w):
        assert np.all(buf == 9.0)


@pytest.mark.symmetry
def test_gen_oh_insufficient_capacity():
    """缓冲区不足时报错且不写入。"""
    x, y, z, w = (np.full(30, 9.0) for _ in range(4))
    with pytest.raises(ValueError, match="缓冲区容量不足"):
        gen_oh(6, 0.2, 0.4, 1.0, x, y, z, w)
    with pytest.raises(ValueError, match="缓冲区容量不足"):
        gen_oh(4, 0.3, 0.0, 1.0, x, y, z, w, offset=10)
    assert np.all(x == 9.0)


@pytest.mark.symmetry
def test_generator_outside_unit_sphere():
    """派生坐标需要对负数开方时报错。"""
    with pytest.raises(ValueError, match="超出单位球"):
        expand_orbit(4, a=0.8)
    with pytest.raises(ValueError, match="超出单位球"):
        expand_orbit(5, a=1.2)
    with pytest.raises(ValueError, match="超出单位球"):
        expand_orbit(6, a=0.8, b=0.8)


@pytest.mark.symmetry
def test_orbit_dataclass_expand():
    """Orbit.expand 与 expand_orbit 一致。"""
    orb = Orbit(code=5, a=0.3545877390518688, b=0.0, v=0.5198069864064399e-2)
    assert orb.size == 24
    assert np.array_equal(orb.expand(), expand_orbit(5, orb.a, orb.b, orb.v))

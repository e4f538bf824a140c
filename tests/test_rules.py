"""规则表与分派单元测试"""

import hashlib

import numpy as np
import pytest

from lebquad import rules
from lebquad.symmetry import Orbit
from lebquad.rules import LEBEDEV_DEGREE, LEBEDEV_RULES, leb_order_routing, orbits
from lebquad.tables import LEBEDEV_TABLES

SUPPORTED = [
    6, 14, 26, 38, 50, 74, 86, 110, 146, 170, 194, 230, 266, 302, 350, 434,
    590, 770, 974, 1202, 1454, 1730, 2030, 2354, 2702, 3074, 3470, 3890,
    4334, 4802, 5294, 5810,
]


@pytest.mark.rules
@pytest.mark.quick
def test_supported_orders_closed_set():
    """受支持的点数恰为 32 个固定值，每个点数对应唯一规则与代数精度。"""
    assert sorted(LEBEDEV_RULES) == SUPPORTED
    assert sorted(LEBEDEV_TABLES) == SUPPORTED
    assert sorted(LEBEDEV_DEGREE) == SUPPORTED
    assert len(set(LEBEDEV_RULES.values())) == 32


@pytest.mark.rules
@pytest.mark.quick
def test_rule_functions_exposed_by_name():
    """ld0006 … ld5810 以模块级函数形式存在。"""
    for order in SUPPORTED:
        name = f"ld{order:04d}"
        fn = getattr(rules, name)
        assert fn is LEBEDEV_RULES[order]
        assert fn.__name__ == name
        assert name in rules.__all__


@pytest.mark.rules
@pytest.mark.parametrize("order", SUPPORTED)
def test_table_sizes_match_order(order):
    """轨道点数之和等于规则点数，且 code 均在 1-6 内。"""
    orbs = orbits(order)
    assert all(1 <= o.code <= 6 for o in orbs)
    assert sum(o.size for o in orbs) == order


@pytest.mark.rules
@pytest.mark.parametrize("order", SUPPORTED)
def test_rule_function_fills_buffers(order):
    """规则函数写满 order 个点并返回 order。"""
    x, y, z, w = (np.full(order, np.nan) for _ in range(4))
    n = LEBEDEV_RULES[order](x, y, z, w)
    assert n == order
    for buf in (x, y, z, w):
        assert np.all(np.isfinite(buf))


@pytest.mark.rules
@pytest.mark.quick
def test_router_accepts_larger_buffers():
    """缓冲区可大于 order，多余部分保持不变。"""
    x, y, z, w = (np.full(40, -5.0) for _ in range(4))
    n = leb_order_routing(26, x, y, z, w)
    assert n == 26
    assert np.all(w[26:] == -5.0)
    assert np.isclose(np.sum(w[:26]), 1.0, rtol=0, atol=1e-14)


@pytest.mark.rules
@pytest.mark.quick
@pytest.mark.parametrize("order", [0, 1, 7, 100, 5811, -6])
def test_router_rejects_unsupported_order(order):
    """不支持的阶数报错，且不写入任何数据。"""
    x, y, z, w = (np.full(6000, 3.0) for _ in range(4))
    with pytest.raises(ValueError, match="不支持的 Lebedev 阶数"):
        leb_order_routing(order, x, y, z, w)
    for buf in (x, y, z, w):
        assert np.all(buf == 3.0)


@pytest.mark.rules
def test_router_rejects_small_buffers():
    """缓冲区小于 order 时报错且不写入。"""
    x, y, z = (np.zeros(50) for _ in range(3))
    w = np.zeros(49)
    with pytest.raises(ValueError, match="缓冲区容量不足"):
        leb_order_routing(50, x, y, z, w)
    assert np.all(x == 0.0)


@pytest.mark.rules
def test_orbits_rejects_unsupported_order():
    with pytest.raises(ValueError):
        orbits(7)


@pytest.mark.rules
@pytest.mark.quick
@pytest.mark.parametrize("order", [74, 230, 266])
def test_negative_weights_are_tabulated(order):
    """部分规则含负权重（原始表格如此），总和仍为 1。"""
    orbs = orbits(order)
    assert min(o.v for o in orbs) < 0.0
    x, y, z, w = (np.empty(order) for _ in range(4))
    leb_order_routing(order, x, y, z, w)
    assert np.any(w < 0.0)
    assert np.isclose(np.sum(w), 1.0, rtol=0, atol=1e-10)


@pytest.mark.rules
def test_ld3470_table_entries():
    """3470 点规则：a=0.1108335359204799 的轨道恰好出现一次，权重未错位。"""
    orbs = orbits(3470)
    hits = [o for o in orbs if o.a == 0.1108335359204799]
    assert len(hits) == 1
    assert hits[0].code == 4
    assert hits[0].v == 0.2083153161230153e-3


@pytest.mark.rules
@pytest.mark.quick
def test_small_rule_literals():
    """核对少量规则的原始参数。"""
    assert orbits(6) == (Orbit(1, 0.0, 0.0, 0.1666666666666667),)
    assert [o.v for o in orbits(14)] == [0.6666666666666667e-1, 0.7500000000000000e-1]
    assert [(o.code, o.v) for o in orbits(26)] == [
        (1, 0.4761904761904762e-1),
        (2, 0.3809523809523810e-1),
        (3, 0.3214285714285714e-1),
    ]
    last = orbits(5810)[-1]
    assert (last.code, last.a, last.b, last.v) == (
        6, 0.6772135750395347, 0.2919946135808105e-1, 0.1905534498734563e-3,
    )


@pytest.mark.rules
@pytest.mark.quick
@pytest.mark.parametrize("order", [6.0, 26.0, True, "6", None])
def test_router_rejects_non_integer_order(order):
    """阶数必须为整数，数值相等的浮点数等也不接受。"""
    x, y, z, w = (np.full(30, 3.0) for _ in range(4))
    with pytest.raises(ValueError, match="不支持的 Lebedev 阶数"):
        leb_order_routing(order, x, y, z, w)
    assert np.all(w == 3.0)
    with pytest.raises(ValueError, match="不支持的 Lebedev 阶数"):
        orbits(order)


@pytest.mark.rules
@pytest.mark.quick
def test_numpy_integer_order_accepted():
    assert orbits(np.int64(26)) == orbits(26)
    x, y, z, w = (np.empty(26) for _ in range(4))
    assert leb_order_routing(np.int32(26), x, y, z, w) == 26


# 各规则轨道表 (code, a, b, v) 按行拼接为小端 float64 后的 sha256，
# 由 lebedev-laikov.c 的原始字面量计算（code 1-3 取 a=b=0，code 4-5 取 b=0）
TABLE_SHA256 = {
    6: "17c9a4d1127174371907a3c79ff50b100359a4ae6fdc7107830f20f5706acb88",
    14: "a3d7d974e8407884598d75f82116b763cabe34ec062b8401f4d903b16a8c9edc",
    26: "d436c1d0f6dc340b64686b8c3048fd8404f49ac9d334ed1a5bc0f300ad2481ee",
    38: "073d638fb3837d32ca94d81fded7f59c200fbd3f851104488c192c5f70b6d48f",
    50: "e79059531bbe61725aa2d7473e494f95346690d48887dc78b0f9e54e29968805",
    74: "73c199d5aa3c1915d2122a436eb5ac9c106d48bbc599b21ca2dfc208220f1006",
    86: "c9d9cc88889ac86b97ad695ccc8b322b07b27c6d443b9ec84113b40621a82a5f",
    110: "f25906d0d709f692c9932268563fac6f0a5f43d1bda0c057bcbaefd98e9339d5",
    146: "505c056d8d80eebae825b0126dd85e1d6c597488ca01362a1d79829b1e8c47b6",
    170: "ece1baf130faa18bed7c889cce1b949d5c9514d4df0e02fa5c363ee10df9e58a",
    194: "ba4287b24383551b49e1959024721b19725380ca8e6734bb7bf8c81fb9e7c008",
    230: "0153083bc4ebcd07d448ae2c17114586801b77d9cf08ff038d73c23d600844af",
    266: "5abf0281d4e6136d72be23516e4d84f799bf74eab90d4269c720408e993073ac",
    302: "59c13291c79feb6ddf070d8397fba0d1da5ac17dadf3905347220b9e80ed6732",
    350: "d921508a676de7c359dc8df7a5a396ea24e9dc943bda76142897d616f80c3f87",
    434: "27aed7dae8bf07df5296cbe598c982dc347eaaeb829d4a5e726572f51120468d",
    590: "333bca92822835ef6eafb2ffd669a6130668e16adc1be2d5a416db4d3327f263",
    770: "d6fdca182f6676c932ef1969b28baa2c2e7777384fe493c44a7d2fe84ac42130",
    974: "ac66f623620d222fd947871785bcf4a12aab2f420a60693ad26a0fe74b23b5f9",
    1202: "2b12ffeb1727be5376cc9a6455825c6fe4944a8e840ebb635cd31bdd7b20853c",
    1454: "9283400375b00af65258e6ad651470f3eaee2127aaacb0c777aaec240faf7683",
    1730: "92675fe93bed083925b5d7c3c6f20953ce79e8da9ce4bf7e703ec9c7d66d4238",
    2030: "7417b78c855d747407c5b2149ec3b3dbb9f9a50d9193fc4b3332d291c3a1e803",
    2354: "be6f185638689da55a34add356fad5d65ad649be5471e77493efbdc0a77bbd44",
    2702: "2bda27f1fb548483943378acb73cc0d5ba76eddf35e547c147d53cff2d99bb1d",
    3074: "c76b3b98e50dd8be4b36f5cbe0df9ce69275255005fc43cb9cea2c66a94b3fc8",
    3470: "3adc03b6281c66aa1d2b6fb975bf54258663236d06f8b5614f0a8fb5c880af07",
    3890: "3e88e44e6dc08aee31682f9fcd1afde8ccbbb3ba78913c6c9e5ff111e0f2626f",
    4334: "55501018987928a4e7a0606b8bd464876597363620a07513bf5651d19d160776",
    4802: "cf2f4ba810ef4fef05c0d79c4f1d10e2f531bcea139d683629ef50818e8442c1",
    5294: "690ea22cf8a04377cea2fed7bc2a769ff0f7186f53393b70fe30b0b02a86d5a4",
    5810: "4b33deb43d3004d555835d6060d70b78f1e3903ccdadf561b5a765688d2f5f64",
}


@pytest.mark.rules
@pytest.mark.parametrize("order", SUPPORTED)
def test_table_digest(order):
    """全部轨道参数逐位核对，任一常数抄错都会改变摘要。"""
    rows = np.array([(int(o.code), o.a, o.b, o.v) for o in orbits(order)], dtype="<f8")
    assert hashlib.sha256(rows.tobytes()).hexdigest() == TABLE_SHA256[order]

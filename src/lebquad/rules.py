r"""Lebedev 规则函数与按阶数分派

每个 ``ldNNNN`` 函数依次展开 :mod:`lebquad.tables` 中对应的轨道表，
将 NNNN 个点写入调用方提供的 ``x, y, z, w`` 缓冲区并返回点数。
:func:`leb_order_routing` 按请求的点数查表分派，不支持的阶数直接报错，
不做任何近似或就近替换。

阶数（点数）与代数精度的对应关系见 :data:`LEBEDEV_DEGREE`：
点数为 N 的规则对次数不超过 ``LEBEDEV_DEGREE[N]`` 的球面多项式精确。
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

import numpy as np

from .symmetry import Orbit, gen_oh
from .tables import LEBEDEV_TABLES

__all__ = [
    "LEBEDEV_DEGREE",
    "LEBEDEV_RULES",
    "check_order",
    "orbits",
    "leb_order_routing",
]

# 点数 -> 代数精度（约为 (L+1)^2/3 个点）
LEBEDEV_DEGREE = {
    6: 3,
    14: 5,
    26: 7,
    38: 9,
    50: 11,
    74: 13,
    86: 15,
    110: 17,
    146: 19,
    170: 21,
    194: 23,
    230: 25,
    266: 27,
    302: 29,
    350: 31,
    434: 35,
    590: 41,
    770: 47,
    974: 53,
    1202: 59,
    1454: 65,
    1730: 71,
    2030: 77,
    2354: 83,
    2702: 89,
    3074: 95,
    3470: 101,
    3890: 107,
    4334: 113,
    4802: 119,
    5294: 125,
    5810: 131,
}

RuleFunc = Callable[[np.ndarray, np.ndarray, np.ndarray, np.ndarray], int]


def _make_rule(order: int) -> RuleFunc:
    table = LEBEDEV_TABLES[order]

    def rule(x: np.ndarray, y: np.ndarray, z: np.ndarray, w: np.ndarray) -> int:
        n = 0
        for code, a, b, v in table:
            n += gen_oh(code, a, b, v, x, y, z, w, offset=n)
        return n

    rule.__name__ = rule.__qualname__ = f"ld{order:04d}"
    rule.__doc__ = (
        f"计算 {order} 点 Lebedev 角向网格（代数精度 {LEBEDEV_DEGREE[order]}）。\n\n"
        f"写入 ``x, y, z, w`` 的前 {order} 个元素并返回写入点数；"
        f"各数组长度需不小于 {order}。"
    )
    return rule


ld0006 = _make_rule(6)
ld0014 = _make_rule(14)
ld0026 = _make_rule(26)
ld0038 = _make_rule(38)
ld0050 = _make_rule(50)
ld0074 = _make_rule(74)
ld0086 = _make_rule(86)
ld0110 = _make_rule(110)
ld0146 = _make_rule(146)
ld0170 = _make_rule(170)
ld0194 = _make_rule(194)
ld0230 = _make_rule(230)
ld0266 = _make_rule(266)
ld0302 = _make_rule(302)
ld0350 = _make_rule(350)
ld0434 = _make_rule(434)
ld0590 = _make_rule(590)
ld0770 = _make_rule(770)
ld0974 = _make_rule(974)
ld1202 = _make_rule(1202)
ld1454 = _make_rule(1454)
ld1730 = _make_rule(1730)
ld2030 = _make_rule(2030)
ld2354 = _make_rule(2354)
ld2702 = _make_rule(2702)
ld3074 = _make_rule(3074)
ld3470 = _make_rule(3470)
ld3890 = _make_rule(3890)
ld4334 = _make_rule(4334)
ld4802 = _make_rule(4802)
ld5294 = _make_rule(5294)
ld5810 = _make_rule(5810)

LEBEDEV_RULES: dict[int, RuleFunc] = {
    6: ld0006,
    14: ld0014,
    26: ld0026,
    38: ld0038,
    50: ld0050,
    74: ld0074,
    86: ld0086,
    110: ld0110,
    146: ld0146,
    170: ld0170,
    194: ld0194,
    230: ld0230,
    266: ld0266,
    302: ld0302,
    350: ld0350,
    434: ld0434,
    590: ld0590,
    770: ld0770,
    974: ld0974,
    1202: ld1202,
    1454: ld1454,
    1730: ld1730,
    2030: ld2030,
    2354: ld2354,
    2702: ld2702,
    3074: ld3074,
    3470: ld3470,
    3890: ld3890,
    4334: ld4334,
    4802: ld4802,
    5294: ld5294,
    5810: ld5810,
}

__all__ += [f.__name__ for f in LEBEDEV_RULES.values()]


def check_order(order: int) -> int:
    """校验 ``order`` 是受支持的点数，返回其 ``int`` 值；否则抛出 ``ValueError``。

    只接受整数（含 ``numpy.integer``）；``6.0`` 或 ``True`` 之类同样报错。
    """
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)) or order not in LEBEDEV_RULES:
        supported = ", ".join(str(n) for n in LEBEDEV_RULES)
        raise ValueError(f"不支持的 Lebedev 阶数 order={order}，可选值: {supported}")
    return int(order)


@lru_cache(maxsize=None, typed=True)
def orbits(order: int) -> tuple[Orbit, ...]:
    """返回点数为 ``order`` 的规则的轨道表（:class:`~lebquad.symmetry.Orbit` 元组）。

    Raises
    ------
    ValueError
        ``order`` 不在支持的 32 个点数之内。
    """
    order = check_order(order)
    return tuple(Orbit(*row) for row in LEBEDEV_TABLES[order])


def leb_order_routing(
    order: int,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    w: np.ndarray,
) -> int:
    r"""按点数选择 Lebedev 规则并写入缓冲区。

    Parameters
    ----------
    order : int
        规则点数，必须属于 :data:`LEBEDEV_RULES` 的键（6, 14, 26, ..., 5810）。
    x, y, z, w : numpy.ndarray
        一维输出数组，长度均不小于 ``order``。

    Returns
    -------
    int
        写入的点数，恒等于 ``order``。

    Raises
    ------
    ValueError
        不支持的 ``order`` 或缓冲区长度不足；两种情况下均不写入任何数据。
    """
    order = check_order(order)
    capacity = min(len(x), len(y), len(z), len(w))
    if capacity < order:
        raise ValueError(f"缓冲区容量不足：order={order}，实际 {capacity}")
    n = LEBEDEV_RULES[order](x, y, z, w)
    assert n == order, f"规则 ld{order:04d} 写入 {n} 个点，应为 {order}"
    return n

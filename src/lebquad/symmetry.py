r"""八面体（:math:`O_h`）对称轨道展开

Lebedev 网格的每个点都属于某个 :math:`O_h` 对称轨道：给定一个代表点，
对其坐标施加全部符号翻转与坐标轴置换即得到整条轨道，轨道上所有点共享同一权重 :math:`v`。

按生成坐标的形式，轨道分为六类：

- code 1：:math:`(1, 0, 0)` 及其置换，6 个点；
- code 2：:math:`(0, a, a)`，:math:`a = 1/\sqrt{2}`，12 个点；
- code 3：:math:`(a, a, a)`，:math:`a = 1/\sqrt{3}`，8 个点；
- code 4：:math:`(a, a, b)`，:math:`b = \sqrt{1 - 2a^2}`，24 个点；
- code 5：:math:`(a, b, 0)`，:math:`b = \sqrt{1 - a^2}`，24 个点；
- code 6：:math:`(a, b, c)`，:math:`c = \sqrt{1 - a^2 - b^2}`，48 个点。

点的排列顺序与 Laikov 原始例程一致：先按坐标置换
:math:`(a,b,c),(a,c,b),(b,a,c),(b,c,a),(c,a,b),(c,b,a)` 排列（退化情形自动合并），
每个置换内部 x 符号变化最快，其次 y，最后 z；零分量不翻转符号。

References
----------
.. [LebedevLaikov1999] Lebedev, V. I. & Laikov, D. N. (1999)
   "A quadrature formula for the sphere of the 131st algebraic order of accuracy"
   Doklady Mathematics, 59(3), 477-481
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from itertools import product
from typing import Callable

import numpy as np

__all__ = [
    "OrbitCode",
    "Orbit",
    "orbit_size",
    "expand_orbit",
    "gen_oh",
]


class OrbitCode(IntEnum):
    """轨道类型（取值 1–6，与原始表格中的 ``code`` 一致）。"""

    AXIS = 1
    EDGE = 2
    CORNER = 3
    AAB = 4
    AB0 = 5
    ABC = 6

    @property
    def size(self) -> int:
        """该类型轨道包含的点数。"""
        return _ORBIT_SIZES[self]


_ORBIT_SIZES = {
    OrbitCode.AXIS: 6,
    OrbitCode.EDGE: 12,
    OrbitCode.CORNER: 8,
    OrbitCode.AAB: 24,
    OrbitCode.AB0: 24,
    OrbitCode.ABC: 48,
}


@dataclass(frozen=True)
class Orbit:
    r"""一条对称轨道的生成参数。

    Attributes
    ----------
    code : int
        轨道类型 1–6，见 :class:`OrbitCode`。
    a : float
        第一个生成坐标（仅 code 4、5、6 使用）。
    b : float
        第二个生成坐标（仅 code 6 使用）。
    v : float
        轨道上每个点的求积权重，可以为负。
    """

    code: int
    a: float
    b: float
    v: float

    @property
    def size(self) -> int:
        return orbit_size(self.code)

    def expand(self) -> np.ndarray:
        """等价于 ``expand_orbit(code, a, b, v)``。"""
        return expand_orbit(self.code, self.a, self.b, self.v)


def _as_code(code: int) -> OrbitCode:
    try:
        return OrbitCode(code)
    except ValueError:
        raise ValueError(f"非法的轨道类型 code={code}，必须为 1-6") from None


def orbit_size(code: int) -> int:
    """返回类型 ``code`` 的轨道点数（6、12、8、24、24 或 48）。"""
    return _as_code(code).size


def _checked_sqrt(value: float, what: str) -> float:
    if value < 0.0:
        raise ValueError(f"生成坐标超出单位球：{what} = {value:.3e} < 0")
    return float(np.sqrt(value))


# 各类型的代表点（坐标置换已展开），符号翻转在 _sign_expand 中统一处理
def _axis_bases(a: float, b: float) -> list[tuple[float, float, float]]:
    return [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]


def _edge_bases(a: float, b: float) -> list[tuple[float, float, float]]:
    a = float(np.sqrt(0.5))
    return [(0.0, a, a), (a, 0.0, a), (a, a, 0.0)]


def _corner_bases(a: float, b: float) -> list[tuple[float, float, float]]:
    a = float(np.sqrt(1.0 / 3.0))
    return [(a, a, a)]


def _aab_bases(a: float, b: float) -> list[tuple[float, float, float]]:
    b = _checked_sqrt(1.0 - 2.0 * a * a, "1 - 2a^2")
    return [(a, a, b), (a, b, a), (b, a, a)]


def _ab0_bases(a: float, b: float) -> list[tuple[float, float, float]]:
    b = _checked_sqrt(1.0 - a * a, "1 - a^2")
    return [
        (a, b, 0.0), (b, a, 0.0),
        (a, 0.0, b), (b, 0.0, a),
        (0.0, a, b), (0.0, b, a),
    ]


def _abc_bases(a: float, b: float) -> list[tuple[float, float, float]]:
    c = _checked_sqrt(1.0 - a * a - b * b, "1 - a^2 - b^2")
    return [(a, b, c), (a, c, b), (b, a, c), (b, c, a), (c, a, b), (c, b, a)]


_BASES: dict[OrbitCode, Callable[[float, float], list[tuple[float, float, float]]]] = {
    OrbitCode.AXIS: _axis_bases,
    OrbitCode.EDGE: _edge_bases,
    OrbitCode.CORNER: _corner_bases,
    OrbitCode.AAB: _aab_bases,
    OrbitCode.AB0: _ab0_bases,
    OrbitCode.ABC: _abc_bases,
}


def _sign_expand(base: tuple[float, float, float]) -> list[tuple[float, float, float]]:
    """对非零分量施加全部符号翻转，x 符号变化最快。"""
    px, py, pz = base
    sx = (1.0, -1.0) if px != 0.0 else (1.0,)
    sy = (1.0, -1.0) if py != 0.0 else (1.0,)
    sz = (1.0, -1.0) if pz != 0.0 else (1.0,)
    return [(fx * px, fy * py, fz * pz) for fz, fy, fx in product(sz, sy, sx)]


def expand_orbit(code: int, a: float = 0.0, b: float = 0.0, v: float = 1.0) -> np.ndarray:
    r"""展开一条 :math:`O_h` 对称轨道，返回新分配的点与权重数组。

    Parameters
    ----------
    code : int
        轨道类型 1–6。
    a, b : float, optional
        生成坐标，含义见模块说明；code 1–3 忽略二者，code 4、5 忽略 ``b``。
    v : float, optional
        轨道权重，默认 1.0。

    Returns
    -------
    numpy.ndarray
        形状 ``(n, 4)`` 的数组，列依次为 x, y, z, w；``n`` 等于 :func:`orbit_size`。

    Raises
    ------
    ValueError
        ``code`` 不在 1–6 内，或派生坐标需要对负数开方。

    Examples
    --------
    >>> expand_orbit(3, v=0.075).shape  # (±a, ±a, ±a)
    (8, 4)
    >>> expand_orbit(5, a=0.6).shape
    (24, 4)
    """
    kind = _as_code(code)
    pts = [p for base in _BASES[kind](a, b) for p in _sign_expand(base)]
    g = np.empty((len(pts), 4))
    g[:, :3] = pts
    g[:, 3] = v
    # 每种类型的点数固定，与输入数据无关
    assert g.shape[0] == kind.size
    return g


def gen_oh(
    code: int,
    a: float,
    b: float,
    v: float,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    w: np.ndarray,
    offset: int = 0,
) -> int:
    r"""将一条对称轨道写入调用方提供的缓冲区。

    从下标 ``offset`` 开始写入 ``x, y, z, w`` 四个数组，返回写入的点数。
    所有检查均在写入之前完成：出错时缓冲区保持不变。

    Parameters
    ----------
    code : int
        轨道类型 1–6。
    a, b : float
        生成坐标。
    v : float
        轨道权重。
    x, y, z, w : numpy.ndarray
        一维输出数组，自 ``offset`` 起至少还需容纳 :func:`orbit_size` 个点。
    offset : int, optional
        起始写入位置，默认 0。

    Returns
    -------
    int
        写入的点数（6、12、8、24、24 或 48）。

    Raises
    ------
    ValueError
        非法 ``code``、缓冲区容量不足或派生坐标越界。
    """
    n = orbit_size(code)
    capacity = min(len(x), len(y), len(z), len(w))
    if offset < 0 or offset + n > capacity:
        raise ValueError(f"缓冲区容量不足：需要 {offset + n}，实际 {capacity}")
    g = expand_orbit(code, a, b, v)
    x[offset:offset + n] = g[:, 0]
    y[offset:offset + n] = g[:, 1]
    z[offset:offset + n] = g[:, 2]
    w[offset:offset + n] = g[:, 3]
    return n

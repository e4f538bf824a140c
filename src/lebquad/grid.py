from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .rules import LEBEDEV_DEGREE, check_order, leb_order_routing

__all__ = [
    "LebedevGrid",
    "generate_lebedev_grid",
    "lebedev_grid",
    "available_orders",
    "order_for_degree",
    "integrate_sphere",
]


@dataclass(frozen=True, eq=False)
class LebedevGrid:
    r"""单位球面上的 Lebedev 角向求积网格。

    Attributes
    ----------
    order : int
        网格点数 :math:`N`。
    degree : int
        代数精度 :math:`L`：对次数 :math:`\le L` 的球面多项式精确。
    x, y, z : numpy.ndarray
        单位球面笛卡尔坐标，满足 :math:`x_i^2+y_i^2+z_i^2=1`。
    w : numpy.ndarray
        归一化权重，满足 :math:`\sum_i w_i = 1`（个别规则含负权重）。
    """

    order: int
    degree: int
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    w: np.ndarray

    @property
    def points(self) -> np.ndarray:
        """形状 ``(N, 3)`` 的坐标数组。"""
        return np.column_stack([self.x, self.y, self.z])

    def integrate(self, values: np.ndarray) -> float:
        r"""由网格点上的函数值计算球面积分。

        .. math::
            \int_{S^2} f\,\mathrm{d}\Omega \approx 4\pi \sum_i w_i f_i
        """
        values = np.asarray(values)
        if values.shape != self.w.shape:
            raise ValueError(f"函数值形状 {values.shape} 与网格点数 ({self.order},) 不一致")
        return float(4.0 * np.pi * np.sum(self.w * values))

    def spherical(self) -> tuple[np.ndarray, np.ndarray]:
        r"""返回球坐标 :math:`(\theta, \varphi)`。

        :math:`\theta \in [0, \pi]` 为极角（自 +z 轴量起），
        :math:`\varphi \in (-\pi, \pi]` 为方位角。
        """
        theta = np.arccos(np.clip(self.z, -1.0, 1.0))
        phi = np.arctan2(self.y, self.x)
        return theta, phi


def generate_lebedev_grid(order: int) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    r"""生成点数为 ``order`` 的 Lebedev 角向网格。

    近似式：

    .. math::
        \frac{1}{4\pi}\int_{S^2} f(\hat{r})\,\mathrm{d}\Omega \approx \sum_{i=0}^{N-1} w_i f(x_i, y_i, z_i)

    Parameters
    ----------
    order : int
        网格点数，取值见 :func:`available_orders`。

    Returns
    -------
    x, y, z : numpy.ndarray
        单位球面坐标，长度 ``order``。
    w : numpy.ndarray
        归一化权重（总和为 1），长度 ``order``；若需对 :math:`\mathrm{d}\Omega` 积分，乘以 :math:`4\pi`。

    Raises
    ------
    ValueError
        ``order`` 不是受支持的点数。

    Examples
    --------
    >>> x, y, z, w = generate_lebedev_grid(26)
    >>> x.size
    26
    >>> np.isclose(w.sum(), 1.0)
    True
    """
    n = check_order(order)
    x = np.empty(n)
    y = np.empty(n)
    z = np.empty(n)
    w = np.empty(n)
    leb_order_routing(n, x, y, z, w)
    return x, y, z, w


def lebedev_grid(order: int) -> LebedevGrid:
    """生成 :class:`LebedevGrid`（参数与异常同 :func:`generate_lebedev_grid`）。"""
    x, y, z, w = generate_lebedev_grid(order)
    n = x.size
    return LebedevGrid(order=n, degree=LEBEDEV_DEGREE[n], x=x, y=y, z=z, w=w)


def available_orders() -> list[int]:
    """按升序返回全部受支持的点数（共 32 个，6 到 5810）。"""
    return sorted(LEBEDEV_DEGREE)


def order_for_degree(degree: int) -> int:
    r"""返回代数精度不低于 ``degree`` 的最小规则点数。

    Parameters
    ----------
    degree : int
        需要精确积分的球面多项式最高次数，要求 :math:`0 \le L \le 131`。

    Returns
    -------
    int
        规则点数。

    Notes
    -----
    - 对角动量为 :math:`\ell_1, \ell_2` 的球谐函数乘积积分，需 ``degree >= l1 + l2``。
    - 这是显式的选择接口；:func:`generate_lebedev_grid` 本身从不替换阶数。

    Examples
    --------
    >>> order_for_degree(17)
    110
    >>> order_for_degree(32)
    434
    """
    if degree < 0:
        raise ValueError(f"degree 必须非负，当前值: {degree}")
    for order in available_orders():
        if LEBEDEV_DEGREE[order] >= degree:
            return order
    raise ValueError(f"degree={degree} 超过 Lebedev 规则的最高代数精度 {max(LEBEDEV_DEGREE.values())}")


def integrate_sphere(f: Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray], order: int) -> float:
    r"""用 ``order`` 点 Lebedev 网格计算 :math:`\int_{S^2} f\,\mathrm{d}\Omega`。

    Parameters
    ----------
    f : callable
        向量化函数 ``f(x, y, z)``，输入为单位球面坐标数组。
    order : int
        网格点数。

    Returns
    -------
    float
        球面积分近似值（已乘 :math:`4\pi`）。

    Examples
    --------
    >>> np.isclose(integrate_sphere(lambda x, y, z: z**2, 14), 4 * np.pi / 3)
    True
    """
    grid = lebedev_grid(order)
    values = np.broadcast_to(f(grid.x, grid.y, grid.z), grid.w.shape)
    return grid.integrate(values)

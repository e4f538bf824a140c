r"""球面参考函数：实球谐函数与单项式球面平均

本模块提供检验角向求积精度所需的解析参考值：

- 实球谐函数 :math:`Y_{\ell m}`（通过 scipy.special 计算）
- 单项式球面平均 :math:`\langle x^i y^j z^k \rangle`（通过 sympy 精确有理数计算）
- 网格对单项式积分的最大误差

数学背景
========

单位球面上单项式的平均值为

.. math::

    \langle x^i y^j z^k \rangle = \frac{1}{4\pi}\int_{S^2} x^i y^j z^k\,\mathrm{d}\Omega
    = \frac{(i-1)!!\,(j-1)!!\,(k-1)!!}{(i+j+k+1)!!}

当 :math:`i, j, k` 均为偶数时成立，否则为 0（约定 :math:`(-1)!! = 1`）。

代数精度为 :math:`L` 的规则对所有 :math:`i+j+k \le L` 的单项式精确，
等价地，对 :math:`\ell + \ell' \le L` 的球谐函数乘积满足正交归一关系。

References
----------
.. [Folland2001] Folland, G. B. (2001)
   "How to integrate a polynomial over a sphere"
   The American Mathematical Monthly, 108(5), 446-448
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np
import sympy
from scipy.special import gammaln, lpmv

from .grid import LebedevGrid

__all__ = [
    "real_spherical_harmonic",
    "monomial_sphere_average",
    "max_monomial_error",
]


def real_spherical_harmonic(l: int, m: int, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    r"""在单位球面点上计算实球谐函数 :math:`Y_{\ell m}`。

    定义（:math:`N_{\ell m}` 为归一化常数）：

    .. math::

        Y_{\ell m} =
        \begin{cases}
        \sqrt{2}\,N_{\ell |m|} P_\ell^{|m|}(\cos\theta)\sin(|m|\varphi), & m < 0 \\
        N_{\ell 0} P_\ell(\cos\theta), & m = 0 \\
        \sqrt{2}\,N_{\ell m} P_\ell^{m}(\cos\theta)\cos(m\varphi), & m > 0
        \end{cases}

    .. math::

        N_{\ell m} = \sqrt{\frac{2\ell+1}{4\pi}\frac{(\ell-m)!}{(\ell+m)!}}

    Parameters
    ----------
    l : int
        角动量量子数（l ≥ 0）
    m : int
        磁量子数（|m| ≤ l）
    x, y, z : numpy.ndarray
        单位球面坐标

    Returns
    -------
    numpy.ndarray
        :math:`Y_{\ell m}` 在各点的值，满足 :math:`\int Y_{\ell m} Y_{\ell' m'}\,\mathrm{d}\Omega = \delta_{\ell\ell'}\delta_{mm'}`

    Notes
    -----
    ``scipy.special.lpmv`` 含 Condon–Shortley 相位 :math:`(-1)^m`，不影响正交归一性。
    """
    if l < 0 or abs(m) > l:
        raise ValueError(f"量子数不合法: l={l}, m={m}（要求 l ≥ 0 且 |m| ≤ l）")
    am = abs(m)
    cos_theta = np.clip(z, -1.0, 1.0)
    phi = np.arctan2(y, x)
    norm = np.sqrt((2 * l + 1) / (4.0 * np.pi) * np.exp(gammaln(l - am + 1) - gammaln(l + am + 1)))
    p = lpmv(am, l, cos_theta)
    if m == 0:
        return norm * p
    if m > 0:
        return np.sqrt(2.0) * norm * p * np.cos(am * phi)
    return np.sqrt(2.0) * norm * p * np.sin(am * phi)


def _double_factorial(n: int) -> sympy.Integer:
    # (-1)!! = 0!! = 1
    if n <= 0:
        return sympy.Integer(1)
    return sympy.factorial2(n)


@lru_cache(maxsize=None)
def monomial_sphere_average(i: int, j: int, k: int, exact: bool = False) -> float | sympy.Rational:
    r"""单项式 :math:`x^i y^j z^k` 在单位球面上的平均值。

    Parameters
    ----------
    i, j, k : int
        非负整数指数
    exact : bool, optional
        为 True 时返回 sympy 有理数，默认返回 float

    Returns
    -------
    float | sympy.Rational
        :math:`\frac{1}{4\pi}\int_{S^2} x^i y^j z^k\,\mathrm{d}\Omega`

    Examples
    --------
    >>> monomial_sphere_average(2, 0, 0, exact=True)
    1/3
    >>> monomial_sphere_average(2, 2, 0, exact=True)
    1/15
    >>> monomial_sphere_average(1, 0, 0)
    0.0
    """
    if i < 0 or j < 0 or k < 0:
        raise ValueError(f"指数必须非负: i={i}, j={j}, k={k}")
    if i % 2 or j % 2 or k % 2:
        value = sympy.Integer(0)
    else:
        value = (
            _double_factorial(i - 1) * _double_factorial(j - 1) * _double_factorial(k - 1)
            / _double_factorial(i + j + k + 1)
        )
    if exact:
        return sympy.Rational(value)
    return float(value)


def max_monomial_error(grid: LebedevGrid, degree: int | None = None) -> float:
    r"""网格对全部 :math:`i+j+k \le L` 单项式的最大绝对误差。

    计算 :math:`\max |\sum_n w_n x_n^i y_n^j z_n^k - \langle x^i y^j z^k \rangle|`。

    Parameters
    ----------
    grid : LebedevGrid
        待检验的网格（需具有 ``x, y, z, w`` 属性）
    degree : int, optional
        检验的最高次数 :math:`L`，默认取 ``grid.degree``

    Returns
    -------
    float
        最大绝对误差；若 ``degree`` 不超过网格的代数精度，应处于舍入误差量级

    Notes
    -----
    单项式数目为 :math:`(L+1)(L+2)(L+3)/6`，高次检验（L > 40）耗时明显。
    """
    if degree is None:
        degree = grid.degree
    if degree < 0:
        raise ValueError(f"degree 必须非负，当前值: {degree}")

    # 逐次幂表：pow_x[i] = x**i
    pow_x = np.cumprod(np.vstack([np.ones_like(grid.x)] + [grid.x] * degree), axis=0)
    pow_y = np.cumprod(np.vstack([np.ones_like(grid.y)] + [grid.y] * degree), axis=0)
    pow_z = np.cumprod(np.vstack([np.ones_like(grid.z)] + [grid.z] * degree), axis=0)

    err = 0.0
    for i in range(degree + 1):
        wx = grid.w * pow_x[i]
        for j in range(degree + 1 - i):
            wxy = wx * pow_y[j]
            quad = pow_z[: degree + 1 - i - j] @ wxy
            for k, q in enumerate(quad):
                err = max(err, abs(q - monomial_sphere_average(i, j, k)))
    return float(err)

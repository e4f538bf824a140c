"""lebquad 包
=================

Lebedev–Laikov 单位球面角向求积网格（6 至 5810 点，代数精度 3 至 131）。

本包提供：

- 八面体对称轨道展开（``gen_oh``）
- 32 个照录原始参数表的规则函数（``ld0006`` … ``ld5810``）与按点数分派
- 返回新数组的网格接口与球面积分
- 实球谐函数、单项式球面平均与网格自检工具

权重归一化为总和 1；对 :math:`\\mathrm{d}\\Omega` 积分时需乘以 :math:`4\\pi`。

注：本项目所有文档与注释均使用中文，Docstring 采用 Sphinx + NumPy 风格，公式使用 ``:math:`` 标记。
"""

from lebquad.symmetry import OrbitCode, Orbit, expand_orbit, gen_oh
from lebquad.rules import LEBEDEV_DEGREE, LEBEDEV_RULES, leb_order_routing, orbits
from lebquad.grid import (
    LebedevGrid,
    available_orders,
    generate_lebedev_grid,
    integrate_sphere,
    lebedev_grid,
    order_for_degree,
)
from lebquad.harmonics import real_spherical_harmonic, monomial_sphere_average
from lebquad.checks import GridCheckConfig, verify_grid

__all__ = [
    "OrbitCode",
    "Orbit",
    "expand_orbit",
    "gen_oh",
    "LEBEDEV_DEGREE",
    "LEBEDEV_RULES",
    "leb_order_routing",
    "orbits",
    "LebedevGrid",
    "available_orders",
    "generate_lebedev_grid",
    "integrate_sphere",
    "lebedev_grid",
    "order_for_degree",
    "real_spherical_harmonic",
    "monomial_sphere_average",
    "GridCheckConfig",
    "verify_grid",
]

__version__ = "0.1.0"

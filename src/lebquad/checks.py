from __future__ import annotations

from dataclasses import dataclass
from itertools import permutations, product

import numpy as np

from .grid import LebedevGrid
from .harmonics import max_monomial_error
from .rules import orbits

__all__ = [
    "GridCheckConfig",
    "GridCheckReport",
    "oh_operations",
    "is_oh_invariant",
    "verify_grid",
]


@dataclass
class GridCheckConfig:
    r"""网格自检参数。

    Attributes
    ----------
    norm_tol : float
        单位球约束 :math:`|x^2+y^2+z^2-1|` 的容差。
    weight_tol : float
        权重归一化 :math:`|\sum_i w_i - 1|` 的容差。
    symmetry_tol : float
        :math:`O_h` 对称像点匹配的距离容差。
    check_degree : bool
        是否检验单项式积分精度。
    degree_tol : float
        单项式积分的绝对误差容差。
    max_degree_checked : int | None
        单项式检验的最高次数上限；``None`` 表示检验到网格的代数精度（大网格较慢）。
    """

    norm_tol: float = 1e-12
    weight_tol: float = 1e-10
    symmetry_tol: float = 1e-12
    check_degree: bool = True
    degree_tol: float = 1e-12
    max_degree_checked: int | None = None


@dataclass
class GridCheckReport:
    r"""网格自检结果。"""

    order: int
    max_norm_error: float
    weight_sum_error: float
    oh_invariant: bool
    degree_checked: int | None
    max_degree_error: float | None
    passed: bool


def oh_operations() -> list[tuple[tuple[int, int, int], np.ndarray]]:
    """返回 :math:`O_h` 群的 48 个操作，每个为（坐标置换, 符号向量）。"""
    return [
        (perm, np.array(signs))
        for perm in permutations(range(3))
        for signs in product((1.0, -1.0), repeat=3)
    ]


def is_oh_invariant(points: np.ndarray, tol: float = 1e-12) -> bool:
    """检查点集在全部 48 个 :math:`O_h` 操作下是否封闭。

    Parameters
    ----------
    points : numpy.ndarray
        形状 ``(n, 3)`` 的点集（通常为一条轨道）。
    tol : float, optional
        像点与原点集中最近点的距离容差。
    """
    points = np.asarray(points)
    for perm, signs in oh_operations():
        images = points[:, list(perm)] * signs
        dist = np.linalg.norm(images[:, None, :] - points[None, :, :], axis=-1)
        if np.max(np.min(dist, axis=1)) > tol:
            return False
    return True


def verify_grid(grid: LebedevGrid, cfg: GridCheckConfig | None = None, verbose: bool = False) -> GridCheckReport:
    r"""对 Lebedev 网格做完整性自检。

    检验项：

    - 单位球约束 :math:`x_i^2+y_i^2+z_i^2 = 1`；
    - 权重归一化 :math:`\sum_i w_i = 1`（负权重属正常）；
    - 每条轨道在 :math:`O_h` 下封闭；
    - （可选）次数不超过代数精度的单项式被精确积分。

    Parameters
    ----------
    grid : LebedevGrid
        待检验网格。
    cfg : GridCheckConfig, optional
        容差设置，默认 :class:`GridCheckConfig()`。
    verbose : bool, optional
        是否打印各项结果。

    Returns
    -------
    GridCheckReport
        各项误差与总体结论。
    """
    if cfg is None:
        cfg = GridCheckConfig()
    tag = f"[Lebedev N={grid.order}]"

    r2 = grid.x**2 + grid.y**2 + grid.z**2
    norm_err = float(np.max(np.abs(r2 - 1.0)))
    weight_err = float(abs(np.sum(grid.w) - 1.0))
    if verbose:
        print(f"{tag} |r^2-1|_max={norm_err:.3e}")
        print(f"{tag} |sum(w)-1|={weight_err:.3e}")

    pts = grid.points
    symmetric = True
    start = 0
    for orb in orbits(grid.order):
        stop = start + orb.size
        if not is_oh_invariant(pts[start:stop], tol=cfg.symmetry_tol):
            symmetric = False
            if verbose:
                print(f"{tag} orbit code={orb.code} at [{start}:{stop}] not Oh-invariant")
        start = stop
    if verbose:
        print(f"{tag} Oh invariant={symmetric}")

    degree_checked = None
    degree_err = None
    if cfg.check_degree:
        degree_checked = grid.degree
        if cfg.max_degree_checked is not None:
            degree_checked = min(degree_checked, cfg.max_degree_checked)
        degree_err = max_monomial_error(grid, degree_checked)
        if verbose:
            print(f"{tag} monomial degree<={degree_checked} err_max={degree_err:.3e}")

    passed = norm_err <= cfg.norm_tol and weight_err <= cfg.weight_tol and symmetric
    if degree_err is not None:
        passed = passed and degree_err <= cfg.degree_tol
    return GridCheckReport(
        order=grid.order,
        max_norm_error=norm_err,
        weight_sum_error=weight_err,
        oh_invariant=symmetric,
        degree_checked=degree_checked,
        max_degree_error=degree_err,
        passed=passed,
    )

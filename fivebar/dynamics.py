"""Rigid-body dynamics of a five-bar parallel linkage.

The model uses the same joint naming as :mod:`fivebar.kinematics`: ``q1`` and
``q2`` are the right and left base link angles, ``q3`` and ``q4`` the right and
left distal link angles.  Each link's centre of mass is taken at its midpoint
and its inertia is approximated as that of a point mass there.

Configurations where the distal links are parallel make the constraint
Jacobian singular; the matrices then come back holding NaN or infinity rather
than raising.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _inverse_2x2(matrix: np.ndarray) -> np.ndarray:
    """Closed-form inverse of a 2x2 matrix; singular input yields inf/NaN entries."""
    (a, b), (c, d) = matrix
    with np.errstate(divide="ignore", invalid="ignore"):
        inv_det = np.float64(1.0) / np.float64(a * d - b * c)
        return inv_det * np.array([[d, -b], [-c, a]])


@dataclass(frozen=True)
class _Geometry:
    """Configuration-dependent matrices shared by the mass and Coriolis terms."""

    as_: np.ndarray
    ac: np.ndarray
    as34: np.ndarray
    ac34: np.ndarray
    a12: np.ndarray
    a34: np.ndarray
    a34_inv: np.ndarray
    a3412: np.ndarray


@dataclass
class FiveBarDynamics:
    """Mass and centrifugal/Coriolis matrices of a five-bar robot.

    ``l0`` is the distance between the motors, ``l1``/``l2`` the right/left base
    links, ``l3``/``l4`` the right/left distal links (metres), and ``m1`` to
    ``m4`` the masses of those links (kilograms).
    """

    l0: float = 1.0
    l1: float = 1.0
    l2: float = 1.0
    l3: float = 1.0
    l4: float = 1.0
    m1: float = 1.0
    m2: float = 1.0
    m3: float = 1.0
    m4: float = 1.0

    @property
    def lc1(self) -> float:
        """Distance from the right base joint to the centre of mass of link 1."""
        return self.l1 / 2

    @property
    def lc2(self) -> float:
        """Distance from the left base joint to the centre of mass of link 2."""
        return self.l2 / 2

    @property
    def lc3(self) -> float:
        """Distance from the right elbow to the centre of mass of link 3."""
        return self.l3 / 2

    @property
    def lc4(self) -> float:
        """Distance from the left elbow to the centre of mass of link 4."""
        return self.l4 / 2

    @property
    def i1(self) -> float:
        """Point-mass moment of inertia of link 1."""
        return self.m1 * self.lc1**2

    @property
    def i2(self) -> float:
        """Point-mass moment of inertia of link 2."""
        return self.m2 * self.lc2**2

    @property
    def i3(self) -> float:
        """Point-mass moment of inertia of link 3."""
        return self.m3 * self.lc3**2

    @property
    def i4(self) -> float:
        """Point-mass moment of inertia of link 4."""
        return self.m4 * self.lc4**2

    def mass_matrix(self, q1: float, q2: float, q3: float, q4: float) -> np.ndarray:
        """Mass matrix in the base joint coordinates."""
        with np.errstate(all="ignore"):
            g = self._geometry(q1, q2, q3, q4)
            m12 = np.diag([self.m1, self.m2])
            m34 = np.diag([self.m3, self.m4])
            i12 = np.diag([self.i1, self.i2])
            i34 = np.diag([self.i3, self.i4])

            sin_arm = g.as34 @ g.a3412 + g.as_
            cos_arm = g.ac34 @ g.a3412 + g.ac
            return (
                i12
                + g.a3412.T @ i34 @ g.a3412
                + g.as_.T @ m12 @ g.as_
                + sin_arm.T @ m34 @ sin_arm
                + g.ac.T @ m12 @ g.ac
                + cos_arm.T @ m34 @ cos_arm
            )

    def coriolis_matrix(
        self,
        q1: float,
        q2: float,
        q3: float,
        q4: float,
        q1d: float,
        q2d: float,
        q3d: float,
        q4d: float,
    ) -> np.ndarray:
        """Centrifugal/Coriolis matrix for the given angles and angular velocities."""
        with np.errstate(all="ignore"):
            g = self._geometry(q1, q2, q3, q4)
            s1, c1 = np.sin(q1), np.cos(q1)
            s2, c2 = np.sin(q2), np.cos(q2)
            s3, c3 = np.sin(q3), np.cos(q3)
            s4, c4 = np.sin(q4), np.cos(q4)
            l1, l2, l3, l4 = self.l1, self.l2, self.l3, self.l4

            m12 = np.diag([self.m1, self.m2])
            m34 = np.diag([self.m3, self.m4])
            i34 = np.diag([self.i3, self.i4])
            sc1 = np.array([s1, c1])
            sc2 = np.array([s2, c2])

            cs34 = np.diag(
                [
                    -2 * self.m3 * l1 * self.lc3 * np.sin(q1 - q3) * q1d,
                    -2 * self.m4 * l2 * self.lc4 * np.sin(q2 - q4) * q2d,
                ]
            )
            c34 = np.vstack(
                [
                    l1 * (g.a34_inv @ sc1) @ -cs34,
                    l1 * (g.a34_inv @ sc2) @ -cs34,
                ]
            )

            a12d = np.array(
                [
                    [l1 * c1 * q1d, -l2 * c2 * q2d],
                    [-l1 * s1 * q2d, l2 * s2 * q2d],
                ]
            )
            asd = np.diag([-self.lc1 * c1 * q1d, -self.lc2 * c2 * q2d])
            acd = np.diag([-self.lc1 * s1 * q1d, -self.lc2 * s2 * q2d])
            as34d = np.diag([self.lc3 * s3 * q3d, self.lc4 * s4 * q4d])
            ac34d = np.diag([self.lc3 * c3 * q3d, self.lc4 * c4 * q4d])
            a34d = np.array(
                [
                    [-l3 * c3 * q3d, l4 * c4 * q4d],
                    [l3 * s3 * q3d, -l4 * s4 * q4d],
                ]
            )
            a3412 = g.a3412
            a3412d = g.a34_inv @ a12d

            d = 2 * a3412.T @ i34 @ (g.a34_inv @ (a12d - a34d @ a3412))
            d = (
                d
                + 2 * g.as_.T @ m12 @ asd
                + 2
                * (g.as34 @ a3412 + g.as_).T
                @ m34
                @ ((as34d - g.as34 @ a3412d) @ a3412 + g.as34 @ a3412d + asd)
            )
            d = (
                d
                + 2 * g.ac.T @ m12 @ acd
                + 2
                * (g.ac34 @ a3412 + asd)
                @ m34
                @ ((ac34d - g.ac34 @ a3412d) @ a3412 + g.ac34 @ a3412d + acd)
            )

            cq = (cs34 + c34) @ a3412
            return d - cq

    def _geometry(self, q1: float, q2: float, q3: float, q4: float) -> _Geometry:
        s1, c1 = np.sin(q1), np.cos(q1)
        s2, c2 = np.sin(q2), np.cos(q2)
        s3, c3 = np.sin(q3), np.cos(q3)
        s4, c4 = np.sin(q4), np.cos(q4)
        a12 = np.array([[self.l1 * s1, -self.l2 * s2], [self.l1 * c1, -self.l2 * c2]])
        a34 = np.array([[-self.l3 * s3, self.l4 * s4], [-self.l3 * c3, self.l4 * c4]])
        a34_inv = _inverse_2x2(a34)
        return _Geometry(
            as_=np.diag([self.lc1 * s1, self.lc2 * s2]),
            ac=np.diag([self.lc1 * c1, self.lc2 * c2]),
            as34=np.diag([self.lc3 * s3, self.lc4 * s4]),
            ac34=np.diag([self.lc3 * c3, self.lc4 * c4]),
            a12=a12,
            a34=a34,
            a34_inv=a34_inv,
            a3412=a34_inv @ a12,
        )
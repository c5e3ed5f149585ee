"""Planar kinematics of a five-bar parallel linkage.

Joint naming: ``q1`` and ``q2`` are the absolute angles of the right and left
base links, ``q3`` and ``q4`` the absolute angles of the right and left distal
links.  The right motor sits at ``(+l0/2, 0)`` and the left motor at
``(-l0/2, 0)``.

Results outside the reachable workspace come back as NaN rather than raising,
so that a control loop keeps running on a bad sample.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

import numpy as np

PI = 3.14159
SAMPLE_PERIOD = 0.0022
VELOCITY_WINDOW = 10


def _law_of_cos_length(a: float, b: float, theta: float) -> float:
    """Length of the side opposite ``theta`` in a triangle with sides ``a`` and ``b``."""
    with np.errstate(invalid="ignore"):
        return float(np.sqrt(np.float64(a * a + b * b - 2 * a * b * np.cos(theta))))


def _law_of_cos_angle(a: float, b: float, c: float) -> float:
    """Angle opposite side ``c`` in a triangle with sides ``a``, ``b`` and ``c``."""
    with np.errstate(invalid="ignore", divide="ignore"):
        ratio = np.float64(a * a + b * b - c * c) / np.float64(2 * a * b)
        return float(np.arccos(ratio))


@dataclass
class FiveBarKinematics:
    """Forward, inverse and velocity kinematics of a five-bar robot.

    ``l0`` is the distance between the motors, ``l1``/``l2`` the right/left base
    links and ``l3``/``l4`` the right/left distal links, all in metres.
    """

    l0: float = 1.0
    l1: float = 1.0
    l2: float = 1.0
    l3: float = 1.0
    l4: float = 1.0
    _q1_history: deque = field(
        default_factory=lambda: deque([0.0] * VELOCITY_WINDOW, maxlen=VELOCITY_WINDOW),
        init=False,
        repr=False,
        compare=False,
    )
    _q2_history: deque = field(
        default_factory=lambda: deque([0.0] * VELOCITY_WINDOW, maxlen=VELOCITY_WINDOW),
        init=False,
        repr=False,
        compare=False,
    )

    def forward(self, q1: float, q2: float) -> np.ndarray:
        """End-effector position ``(x, y)`` for the base joint angles.

        The position is the average of the estimates through the right and the
        left arm.
        """
        q3, q4 = self.distal_angles(q1, q2)
        xr = self.l0 / 2 + self.l1 * np.cos(q1) + self.l3 * np.cos(q3)
        xl = -self.l0 / 2 + self.l2 * np.cos(q2) + self.l4 * np.cos(q4)
        yr = self.l1 * np.sin(q1) + self.l3 * np.sin(q3)
        yl = self.l2 * np.sin(q2) + self.l4 * np.sin(q4)
        return np.array([(xr + xl) / 2, (yr + yl) / 2])

    def inverse(self, x: float, y: float) -> np.ndarray:
        """Base joint angles ``(q1, q2)`` that place the end effector at ``(x, y)``."""
        mag_right, mag_left = self._magnitudes(x, y)
        with np.errstate(invalid="ignore", divide="ignore"):
            q2 = np.arctan2(y, x + self.l0 / 2) + np.arccos(
                np.float64(self.l2**2 + mag_left**2 - self.l4**2)
                / np.float64(2 * self.l2 * mag_left)
            )
            q1 = np.arctan2(y, x - self.l0 / 2) - np.arccos(
                np.float64(self.l1**2 + mag_left**2 - self.l3**2)
                / np.float64(2 * self.l1 * mag_right)
            )
        return np.array([float(q1), float(q2)])

    def distal_angles(self, q1: float, q2: float) -> np.ndarray:
        """Absolute angles ``(q3, q4)`` of the distal links."""
        ext_right, ext_left = self._exterior_angles(q1, q2)
        return np.array([q1 + ext_right, q2 - ext_left])

    def base_velocity(self, q1: float, q2: float) -> np.ndarray:
        """Record a new sample of the base angles and return their velocities.

        The velocity is the slope over the last ten samples, taken one
        ``SAMPLE_PERIOD`` apart; earlier samples start out as zero.
        """
        self._q1_history.appendleft(q1)
        self._q2_history.appendleft(q2)
        span = SAMPLE_PERIOD * VELOCITY_WINDOW
        return np.array(
            [
                (self._q1_history[0] - self._q1_history[-1]) / span,
                (self._q2_history[0] - self._q2_history[-1]) / span,
            ]
        )

    def distal_velocity(self, q1: float, q2: float, q1d: float, q2d: float) -> np.ndarray:
        """Angular velocities ``(q3d, q4d)`` of the distal links."""
        q3, q4 = self.distal_angles(q1, q2)
        with np.errstate(invalid="ignore", divide="ignore"):
            denom = np.float64(np.sin(q3 - q4))
            q3d = (
                -self.l1 * q1d * np.sin(q1 - q4) + self.l2 * q2d * np.sin(q2 - q4)
            ) / (self.l3 * denom)
            q4d = (
                -self.l1 * q1d * np.sin(q1 - q3) + self.l2 * q2d * np.sin(q2 - q3)
            ) / (self.l4 * denom)
        return np.array([float(q3d), float(q4d)])

    def end_effector_velocity(
        self, q1: float, q2: float, q1d: float, q2d: float, q3d: float, q4d: float
    ) -> np.ndarray:
        """End-effector velocity ``(xd, yd)``, averaged over both arms."""
        q3, q4 = self.distal_angles(q1, q2)
        jacobian_right = np.array(
            [
                [-self.l1 * np.sin(q1), -self.l3 * np.sin(q3)],
                [self.l1 * np.cos(q1), self.l3 * np.cos(q3)],
            ]
        )
        jacobian_left = np.array(
            [
                [-self.l2 * np.sin(q2), -self.l4 * np.sin(q4)],
                [self.l2 * np.cos(q2), self.l4 * np.cos(q4)],
            ]
        )
        end_right = jacobian_right @ np.array([q1d, q3d])
        end_left = jacobian_left @ np.array([q2d, q4d])
        return 0.5 * (end_right + end_left)

    def _exterior_angles(self, q1: float, q2: float) -> tuple[float, float]:
        """Exterior angles at the right and left elbow joints."""
        d1r = _law_of_cos_length(self.l0, self.l1, PI - q1)
        alpha_r = _law_of_cos_angle(d1r, self.l1, self.l0)
        d2r = _law_of_cos_length(d1r, self.l2, q2 - q1 + alpha_r)
        beta_r = _law_of_cos_angle(d1r, d2r, self.l2)
        c_r = _law_of_cos_angle(d2r, self.l3, self.l4)

        d1l = _law_of_cos_length(self.l0, self.l1, q2)
        alpha_l = _law_of_cos_angle(d1l, self.l2, self.l0)
        d2l = _law_of_cos_length(d1l, self.l1, q2 - q1 + alpha_l)
        beta_l = _law_of_cos_angle(d1l, d2l, self.l1)
        c_l = _law_of_cos_angle(d2l, self.l4, self.l3)

        return PI - (alpha_r + beta_r + c_r), PI - (alpha_l + beta_l + c_l)

    def _magnitudes(self, x: float, y: float) -> tuple[float, float]:
        """Distances from the right and the left motor to ``(x, y)``."""
        mag_left = float(np.hypot(x + self.l0 / 2, y))
        mag_right = float(np.hypot(x - self.l0 / 2, y))
        return mag_right, mag_left
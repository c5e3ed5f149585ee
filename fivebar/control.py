"""Torque controllers for a five-bar robot built on its kinematics and dynamics."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from fivebar.dynamics import FiveBarDynamics, _inverse_2x2
from fivebar.kinematics import FiveBarKinematics


@dataclass
class FiveBarController:
    """Computed-torque control laws.

    The controller shares its kinematics object with the caller, so every call
    records a new base-angle sample in that object's velocity history.
    """

    kin: FiveBarKinematics
    dyn: FiveBarDynamics

    def kinematic_shaping(self, q1: float, q2: float, tau: float) -> np.ndarray:
        """Motor torques that decay the end-effector velocity with time constant ``tau``."""
        kin = self.kin
        with np.errstate(all="ignore"):
            q3, q4 = kin.distal_angles(q1, q2)
            q1d, q2d = kin.base_velocity(q1, q2)
            q3d, q4d = kin.distal_velocity(q1, q2, q1d, q2d)
            coriolis = self.dyn.coriolis_matrix(q1, q2, q3, q4, q1d, q2d, q3d, q4d)
            mass = self.dyn.mass_matrix(q1, q2, q3, q4)
            end_vel = kin.end_effector_velocity(q1, q2, q1d, q2d, q3d, q4d)

            end_acc = -end_vel / np.float64(tau)
            jacobian_right = np.array(
                [
                    [-kin.l1 * np.sin(q1), -kin.l3 * np.sin(q3)],
                    [kin.l1 * np.cos(q1), kin.l3 * np.cos(q3)],
                ]
            )
            jacobian_left = np.array(
                [
                    [-kin.l2 * np.sin(q2), -kin.l4 * np.sin(q4)],
                    [kin.l2 * np.cos(q2), kin.l4 * np.cos(q4)],
                ]
            )
            right_inv = _inverse_2x2(jacobian_right)
            left_inv = _inverse_2x2(jacobian_left)

            ang_vel_right = right_inv @ end_vel
            ang_vel_left = right_inv @ end_vel

            centripetal_right = np.array(
                [
                    end_acc[0]
                    + kin.l1 * np.cos(q1) * ang_vel_right[0] ** 2
                    + kin.l2 * np.cos(q3) * ang_vel_right[1] ** 2,
                    end_acc[1]
                    + kin.l1 * np.sin(q1) * ang_vel_right[0] ** 2
                    + kin.l2 * np.sin(q3) * ang_vel_right[1] ** 2,
                ]
            )
            centripetal_left = np.array(
                [
                    end_acc[0]
                    + kin.l1 * np.cos(q2) * ang_vel_left[0] ** 2
                    + kin.l2 * np.cos(q4) * ang_vel_left[1] ** 2,
                    end_acc[1]
                    + kin.l1 * np.sin(q2) * ang_vel_left[0] ** 2
                    + kin.l2 * np.cos(q4) * ang_vel_left[1] ** 2,
                ]
            )
            ang_acc_right = right_inv @ centripetal_right
            ang_acc_left = left_inv @ centripetal_left

            base_vel = np.array([ang_vel_right[0], ang_vel_left[0]])
            base_acc = np.array([ang_acc_right[0], ang_acc_left[0]])
            return mass @ base_acc - coriolis @ base_vel

    def nonlinear_cancel(self, q1: float, q2: float) -> np.ndarray:
        """Motor torques that cancel the centrifugal/Coriolis terms."""
        with np.errstate(all="ignore"):
            q3, q4 = self.kin.distal_angles(q1, q2)
            q1d, q2d = self.kin.base_velocity(q1, q2)
            q3d, q4d = self.kin.distal_velocity(q1, q2, q1d, q2d)
            coriolis = self.dyn.coriolis_matrix(q1, q2, q3, q4, q1d, q2d, q3d, q4d)
            return coriolis @ np.array([q1d, q2d])
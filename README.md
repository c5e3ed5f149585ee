# fivebar

Kinematics, dynamics and torque control for a planar five-bar linkage robot.

The robot has two motors on its base, `l0` apart. The right motor is at
`(+l0/2, 0)` and the left motor is at `(-l0/2, 0)`. The base links are `l1`
(right) and `l2` (left). The distal links are `l3` (right) and `l4` (left), and
they meet at the end effector.

The joint angles are named as follows:

- `q1` and `q2` are the absolute angles of the right and left base links.
- `q3` and `q4` are the absolute angles of the right and left distal links.

All angles are in radians and all lengths are in metres. Every result is
returned as a NumPy array.

## Installation

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install .[test]
pytest
```

## Kinematics

`FiveBarKinematics` is a dataclass. Its fields are `l0`, `l1`, `l2`, `l3` and
`l4`, and each defaults to `1.0`.

```python
from fivebar.kinematics import FiveBarKinematics

kin = FiveBarKinematics(l0=1.0, l1=1.0, l2=1.0, l3=1.0, l4=1.0)

q1, q2 = kin.inverse(0.0, 1.5)        # base joint angles for a target point
x, y = kin.forward(q1, q2)            # end effector position
q3, q4 = kin.distal_angles(q1, q2)    # absolute distal link angles
```

`forward` computes the end effector position through the right arm and through
the left arm, and returns the average of the two.

If a configuration or point is outside the reachable workspace, the methods
return NaN. They do not raise an exception.

### Velocities

`base_velocity(q1, q2)` records a new sample of the base angles and returns
`(q1d, q2d)`. Call it once per control loop tick. It keeps the last ten
samples. It returns the difference between the newest and the oldest sample,
divided by `10 * SAMPLE_PERIOD`, where `SAMPLE_PERIOD` is 0.0022 s. Before ten
real samples have been recorded, the history is padded with zeros.

```python
q1d, q2d = kin.base_velocity(q1, q2)
q3d, q4d = kin.distal_velocity(q1, q2, q1d, q2d)
vx, vy = kin.end_effector_velocity(q1, q2, q1d, q2d, q3d, q4d)
```

`end_effector_velocity` averages the velocity computed through the Jacobian of
each arm.

## Dynamics

`FiveBarDynamics` is a dataclass. Its fields are the link lengths `l0` to `l4`
and the link masses `m1` to `m4` in kilograms, and each defaults to `1.0`.

It has some derived properties:

- `lc1` to `lc4` are the distances to each link's centre of mass. Each is half
  the link length.
- `i1` to `i4` are the moments of inertia, using the point-mass approximation.

```python
from fivebar.dynamics import FiveBarDynamics

dyn = FiveBarDynamics(l0=1.0, l1=1.0, l2=1.0, l3=1.0, l4=1.0,
                      m1=1.0, m2=1.0, m3=1.0, m4=1.0)

M = dyn.mass_matrix(q1, q2, q3, q4)
C = dyn.coriolis_matrix(q1, q2, q3, q4, q1d, q2d, q3d, q4d)
```

Both methods return 2x2 matrices in base joint coordinates. If the distal links
are parallel, the constraint Jacobian is singular and the matrices contain NaN
or infinity. They do not raise an exception.

## Control

`FiveBarController` combines a `FiveBarKinematics` object and a
`FiveBarDynamics` object. For the current base angles, it returns the two motor
torques.

```python
from fivebar.control import FiveBarController

con = FiveBarController(kin, dyn)

torque = con.kinematic_shaping(q1, q2, tau=0.1)   # decay end effector velocity with time constant tau
cancel = con.nonlinear_cancel(q1, q2)             # C @ (q1d, q2d)
```

Both controller methods call `base_velocity` on the shared kinematics object,
so each call records a new velocity sample. Call only one of them per loop
tick.

## What this package does not do

The package only does the computations. It does not:

- read encoders
- drive motors
- run a control loop
- keep time

You supply the angles and apply the torques yourself, at the fixed 0.0022 s
period that the velocity estimate assumes.
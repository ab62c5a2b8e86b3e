"""Device orientation ↔ camera rotation.

The sensor reports intrinsic angles relative to a device lying flat on a
table. The AR camera uses a right-handed, Y-up scene, looks down its local
−Z, and the device is held upright. The mapping below is order-sensitive:
pitch (beta) goes to scene X, yaw (alpha) to scene Y and negated roll (gamma)
to scene Z, composed in YXZ order, then a fixed −90° about X tilts the flat
reference pose upright, and finally the screen rotation is undone about the
camera's forward axis.
"""

import math

from arsunpath.geometry import UNIT_X, UNIT_Y, UNIT_Z, Euler, Quaternion, Vector3
from arsunpath.models import DeviceOrientation

# −90° about X: turns the "flat on a table" sensor frame into the upright one
Q_MINUS_90_X = Quaternion(-math.sqrt(0.5), 0.0, 0.0, math.sqrt(0.5))
_Q_MINUS_90_X_INVERSE = Q_MINUS_90_X.inverse()

_FORWARD = -UNIT_Z


def _radians_or_zero(value: float | None) -> float:
    return math.radians(value) if value is not None else 0.0


def to_rotation(
    alpha: float | None,
    beta: float | None,
    gamma: float | None,
    screen_rotation: float | None = 0.0,
) -> Quaternion:
    """Camera rotation for a device orientation sample.

    Args:
        alpha: Yaw in degrees. None is read as 0.
        beta: Pitch in degrees. None is read as 0.
        gamma: Roll in degrees. None is read as 0.
        screen_rotation: Host display rotation in degrees (0/90/180/270).

    Returns:
        A fresh unit quaternion.
    """
    euler = Euler(
        _radians_or_zero(beta),
        _radians_or_zero(alpha),
        -_radians_or_zero(gamma),
        "YXZ",
    )
    q = Quaternion.from_euler(euler) * Q_MINUS_90_X
    screen = Quaternion.from_axis_angle(UNIT_Z, -_radians_or_zero(screen_rotation))
    return (q * screen).normalized()


def orientation_to_rotation(
    sample: DeviceOrientation, screen_rotation: float | None = 0.0
) -> Quaternion:
    """to_rotation() for a DeviceOrientation record."""
    return to_rotation(sample.alpha, sample.beta, sample.gamma, screen_rotation)


def to_device_orientation(rotation: Quaternion) -> DeviceOrientation:
    """Recover the sensor angles that produce ``rotation`` (screen rotation 0).

    Inverts the Euler mapping and the upright correction of to_rotation().
    beta comes back in [-90, 90]: a sample with |beta| > 90 is returned as
    its equivalent triple (beta mirrored, alpha and gamma turned by 180°),
    which yields the same rotation. At gimbal lock (beta ≈ ±90) roll is
    folded into yaw and gamma is 0.

    Args:
        rotation: Camera rotation. Normalized before decomposition.

    Returns:
        DeviceOrientation with alpha in [0, 360) and absolute=False.
    """
    q = rotation.normalized() * _Q_MINUS_90_X_INVERSE
    euler = Euler.from_quaternion(q, "YXZ")
    alpha = math.degrees(euler.y) % 360.0
    if alpha >= 360.0:
        alpha = 0.0
    gamma = -math.degrees(euler.z)
    # -0.0 reads badly in the editor readout
    return DeviceOrientation(
        alpha=alpha + 0.0,
        beta=math.degrees(euler.x) + 0.0,
        gamma=gamma + 0.0,
        absolute=False,
    )


def camera_forward(rotation: Quaternion) -> Vector3:
    """Scene direction the camera looks along."""
    return rotation.rotate(_FORWARD)


def camera_up(rotation: Quaternion) -> Vector3:
    return rotation.rotate(UNIT_Y)


def camera_right(rotation: Quaternion) -> Vector3:
    return rotation.rotate(UNIT_X)

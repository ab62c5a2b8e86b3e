"""Minimal rotation algebra: vectors, quaternions and ordered Euler triples.

Conventions follow the right-handed, Y-up scene used by the AR camera:
  x → right (East at zero yaw)
  y → up
  z → toward the viewer; a camera looks down its local −Z

Quaternions are stored as (x, y, z, w). Multiplication ``a * b`` applies ``b``
first when rotating a vector, i.e. ``(a * b).rotate(v) == a.rotate(b.rotate(v))``.
"""

import math
from dataclasses import dataclass

import numpy as np

# |m| above this is treated as a singular (gimbal-locked) decomposition
GIMBAL_EPSILON = 0.9999999

_SUPPORTED_ORDERS = ("YXZ",)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Vector3:
    """Immutable 3-component vector."""

    x: float
    y: float
    z: float

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector3":
        n = self.length()
        if n == 0:
            return Vector3(0.0, 0.0, 0.0)
        return self * (1.0 / n)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])


UNIT_X = Vector3(1.0, 0.0, 0.0)
UNIT_Y = Vector3(0.0, 1.0, 0.0)
UNIT_Z = Vector3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Euler:
    """Intrinsic Tait-Bryan angles (radians) with an explicit axis order.

    ``order`` names the axes in the sequence the rotations are composed:
    "YXZ" means R = Ry(y) · Rx(x) · Rz(z).
    """

    x: float
    y: float
    z: float
    order: str = "YXZ"

    def __post_init__(self) -> None:
        if self.order not in _SUPPORTED_ORDERS:
            raise ValueError(f"Unsupported Euler order: {self.order!r}")

    @classmethod
    def from_matrix(cls, m: np.ndarray, order: str = "YXZ") -> "Euler":
        """Decompose a pure rotation matrix into an Euler triple.

        At the singularity one degree of freedom is lost; the returned triple
        puts all of it into ``y`` and sets ``z`` to zero.
        """
        if order not in _SUPPORTED_ORDERS:
            raise ValueError(f"Unsupported Euler order: {order!r}")
        m11, _, m13 = m[0]
        m21, m22, m23 = m[1]
        m31, _, m33 = m[2]

        x = math.asin(-_clamp(m23, -1.0, 1.0))
        if abs(m23) < GIMBAL_EPSILON:
            y = math.atan2(m13, m33)
            z = math.atan2(m21, m22)
        else:
            y = math.atan2(-m31, m11)
            z = 0.0
        return cls(x, y, z, order)

    @classmethod
    def from_quaternion(cls, q: "Quaternion", order: str = "YXZ") -> "Euler":
        return cls.from_matrix(q.normalized().to_matrix(), order)


@dataclass(frozen=True)
class Quaternion:
    """Immutable rotation quaternion (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_axis_angle(cls, axis: Vector3, angle: float) -> "Quaternion":
        """Rotation of ``angle`` radians about ``axis`` (normalized here)."""
        a = axis.normalized()
        s = math.sin(angle / 2.0)
        return cls(a.x * s, a.y * s, a.z * s, math.cos(angle / 2.0))

    @classmethod
    def from_euler(cls, euler: Euler) -> "Quaternion":
        c1 = math.cos(euler.x / 2.0)
        c2 = math.cos(euler.y / 2.0)
        c3 = math.cos(euler.z / 2.0)
        s1 = math.sin(euler.x / 2.0)
        s2 = math.sin(euler.y / 2.0)
        s3 = math.sin(euler.z / 2.0)

        return cls(
            s1 * c2 * c3 + c1 * s2 * s3,
            c1 * s2 * c3 - s1 * c2 * s3,
            c1 * c2 * s3 - s1 * s2 * c3,
            c1 * c2 * c3 + s1 * s2 * s3,
        )

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        ax, ay, az, aw = self.x, self.y, self.z, self.w
        bx, by, bz, bw = other.x, other.y, other.z, other.w
        return Quaternion(
            ax * bw + aw * bx + ay * bz - az * by,
            ay * bw + aw * by + az * bx - ax * bz,
            az * bw + aw * bz + ax * by - ay * bx,
            aw * bw - ax * bx - ay * by - az * bz,
        )

    def length(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)

    def normalized(self) -> "Quaternion":
        """Unit-length copy. A zero quaternion normalizes to the identity."""
        n = self.length()
        if n == 0:
            return Quaternion()
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverse(self) -> "Quaternion":
        n2 = self.x**2 + self.y**2 + self.z**2 + self.w**2
        if n2 == 0:
            return Quaternion()
        c = self.conjugate()
        return Quaternion(c.x / n2, c.y / n2, c.z / n2, c.w / n2)

    def rotate(self, v: Vector3) -> Vector3:
        """Apply this rotation to a vector."""
        qx, qy, qz, qw = self.x, self.y, self.z, self.w
        tx = 2.0 * (qy * v.z - qz * v.y)
        ty = 2.0 * (qz * v.x - qx * v.z)
        tz = 2.0 * (qx * v.y - qy * v.x)
        return Vector3(
            v.x + qw * tx + qy * tz - qz * ty,
            v.y + qw * ty + qz * tx - qx * tz,
            v.z + qw * tz + qx * ty - qy * tx,
        )

    def to_matrix(self) -> np.ndarray:
        """3×3 rotation matrix (row-major) of a unit quaternion."""
        x, y, z, w = self.x, self.y, self.z, self.w
        x2, y2, z2 = x + x, y + y, z + z
        xx, xy, xz = x * x2, x * y2, x * z2
        yy, yz, zz = y * y2, y * z2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        return np.array(
            [
                [1.0 - (yy + zz), xy - wz, xz + wy],
                [xy + wz, 1.0 - (xx + zz), yz - wx],
                [xz - wy, yz + wx, 1.0 - (xx + yy)],
            ]
        )

    def angle_to(self, other: "Quaternion") -> float:
        """Smallest rotation angle (radians) between two orientations."""
        d = abs(
            self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w
        )
        return 2.0 * math.acos(_clamp(d, -1.0, 1.0))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w])

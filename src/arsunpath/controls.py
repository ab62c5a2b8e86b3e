"""Keyboard-style orientation nudges for the simulator/editor."""

from dataclasses import dataclass

from arsunpath.models import DeviceOrientation


@dataclass(frozen=True)
class OrientationDelta:
    """Degrees to add per axis. All-zero means "reset"."""

    alpha: float = 0.0
    beta: float = 0.0
    gamma: float = 0.0

    @property
    def is_reset(self) -> bool:
        return self.alpha == 0 and self.beta == 0 and self.gamma == 0


RESET = OrientationDelta()

# Device held upright, facing the forward reference (north in the scene)
DEFAULT_ORIENTATION = DeviceOrientation(alpha=180.0, beta=90.0, gamma=0.0)

KEY_DELTAS: dict[str, OrientationDelta] = {
    "KeyA": OrientationDelta(alpha=-5),
    "KeyD": OrientationDelta(alpha=5),
    "KeyW": OrientationDelta(beta=-5),
    "KeyS": OrientationDelta(beta=5),
    "KeyQ": OrientationDelta(gamma=-5),
    "KeyE": OrientationDelta(gamma=5),
    "ArrowLeft": OrientationDelta(alpha=-1),
    "ArrowRight": OrientationDelta(alpha=1),
    "ArrowUp": OrientationDelta(beta=-1),
    "ArrowDown": OrientationDelta(beta=1),
}


def _wrap_alpha(value: float) -> float:
    wrapped = value % 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def delta_for_key(code: str) -> OrientationDelta | None:
    """Delta bound to a key code, RESET for Space, None if unbound."""
    if code == "Space":
        return RESET
    return KEY_DELTAS.get(code)


def apply_orientation_delta(
    orientation: DeviceOrientation, delta: OrientationDelta
) -> DeviceOrientation:
    """Return a new sample nudged by ``delta``.

    alpha wraps into [0, 360); beta clamps to [-180, 180]; gamma clamps to
    [-90, 90]. Missing axes start from 0. A reset delta zeroes all three axes.
    """
    if delta.is_reset:
        return DeviceOrientation(0.0, 0.0, 0.0, orientation.absolute)

    return DeviceOrientation(
        alpha=_wrap_alpha((orientation.alpha or 0.0) + delta.alpha),
        beta=_clamp((orientation.beta or 0.0) + delta.beta, -180.0, 180.0),
        gamma=_clamp((orientation.gamma or 0.0) + delta.gamma, -90.0, 90.0),
        absolute=orientation.absolute,
    )

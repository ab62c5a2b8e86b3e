"""Runtime settings read from the environment (.env supported via python-dotenv)."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

_ROOT = Path(__file__).parent.parent.parent

DEFAULT_CAMERA_FOV = 75.0


class ConfigError(Exception):
    """Invalid environment configuration."""


@dataclass(frozen=True)
class Settings:
    """Paths and display parameters shared by the app and CLI."""

    resources_dir: Path = field(default_factory=lambda: _ROOT / "resources")
    ephemeris_file: str = "de421.bsp"  # JPL kernel loaded by skyfield
    camera_fov: float = DEFAULT_CAMERA_FOV  # Vertical FOV of the device camera (degrees)
    log_level: str = "INFO"

    @property
    def ephemeris_path(self) -> Path:
        return self.resources_dir / self.ephemeris_file

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ARSUNPATH_* environment variables.

        Raises:
            ConfigError: When ARSUNPATH_CAMERA_FOV is not a number in (0, 180).
        """
        defaults = cls()
        fov_raw = os.environ.get("ARSUNPATH_CAMERA_FOV")
        fov = defaults.camera_fov
        if fov_raw:
            try:
                fov = float(fov_raw)
            except ValueError as e:
                raise ConfigError(f"ARSUNPATH_CAMERA_FOV is not a number: {fov_raw!r}") from e
            if not 0 < fov < 180:
                raise ConfigError(f"ARSUNPATH_CAMERA_FOV out of range (0, 180): {fov}")

        resources = os.environ.get("ARSUNPATH_RESOURCES_DIR")
        return cls(
            resources_dir=Path(resources) if resources else defaults.resources_dir,
            ephemeris_file=os.environ.get("ARSUNPATH_EPHEMERIS", defaults.ephemeris_file),
            camera_fov=fov,
            log_level=os.environ.get("ARSUNPATH_LOG_LEVEL", defaults.log_level).upper(),
        )


def configure_logging(settings: Settings) -> None:
    """Root logging setup. Entry points only; library modules just log."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""CLI entry point for sun path preview generation.

Edit the where/when variables at the top, then run:
    uv run python src/arsunpath/sunpath.py
"""

import datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from arsunpath.compute import run  # noqa: E402
from arsunpath.config import Settings, configure_logging  # noqa: E402
from arsunpath.content import build_ar_content  # noqa: E402
from arsunpath.controls import DEFAULT_ORIENTATION  # noqa: E402
from arsunpath.ephemeris import SkyfieldEphemeris  # noqa: E402
from arsunpath.models import Location, TrajectoryQuery  # noqa: E402
from arsunpath.orientation import orientation_to_rotation  # noqa: E402
from arsunpath.renderers.plotly_3d import render_scene  # noqa: E402

_ROOT = Path(__file__).parent.parent.parent

where = Location(latitude=34.18, longitude=-118.37)
when = datetime.date(2024, 6, 21)

settings = Settings.from_env()
configure_logging(settings)

trajectory = run(
    TrajectoryQuery(location=where, day=when), ephemeris=SkyfieldEphemeris(settings)
)
content = build_ar_content(trajectory)
fig = render_scene(
    content, orientation_to_rotation(DEFAULT_ORIENTATION), fov=settings.camera_fov
)

path = _ROOT / "results" / f"sunpath_{where.latitude}_{where.longitude}_{when.isoformat()}.html"
path.parent.mkdir(parents=True, exist_ok=True)
fig.write_html(path)
print(f"Sunrise: {trajectory.sunrise}  Sunset: {trajectory.sunset}")
print(f"Saved: {path}")

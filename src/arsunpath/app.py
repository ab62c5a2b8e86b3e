"""ARSunPath: Streamlit editor for previewing the sun path AR scene."""

import datetime

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from arsunpath.compute import TimezoneLookupError, run  # noqa: E402
from arsunpath.config import Settings, configure_logging  # noqa: E402
from arsunpath.content import build_ar_content  # noqa: E402
from arsunpath.controls import (  # noqa: E402
    DEFAULT_ORIENTATION,
    apply_orientation_delta,
    delta_for_key,
)
from arsunpath.ephemeris import EphemerisError, SkyfieldEphemeris  # noqa: E402
from arsunpath.models import DeviceOrientation, Location, TrajectoryQuery  # noqa: E402
from arsunpath.orientation import (  # noqa: E402
    camera_forward,
    orientation_to_rotation,
    to_device_orientation,
)
from arsunpath.renderers.plotly_3d import first_person_camera, render_scene  # noqa: E402

settings = Settings.from_env()
configure_logging(settings)

st.set_page_config(
    page_title="AR Sun Path Editor",
    page_icon="☀",
    layout="wide",
    initial_sidebar_state="expanded",
)

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0a0a0a !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stSidebar"] {
        background-color: #141414 !important;
    }
    .overlay-box {
        background: rgba(0, 0, 0, 0.65);
        border-radius: 12px;
        padding: 1.0rem 1.4rem;
        color: #e8e8e8;
        font-family: monospace;
        margin-bottom: 0.5rem;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Session state initialization ---
if "trajectory" not in st.session_state:
    st.session_state.trajectory = None
if "content" not in st.session_state:
    st.session_state.content = None
if "orientation" not in st.session_state:
    st.session_state.orientation = DEFAULT_ORIENTATION
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None


@st.cache_resource
def _ephemeris() -> SkyfieldEphemeris:
    return SkyfieldEphemeris(settings)


def _nudge(key: str) -> None:
    delta = delta_for_key(key)
    if delta is not None:
        st.session_state.orientation = apply_orientation_delta(
            st.session_state.orientation, delta
        )


def _reset() -> None:
    st.session_state.orientation = DEFAULT_ORIENTATION


# --- Sidebar: location/date ---
with st.sidebar:
    st.markdown("### Location")
    lat = st.number_input("Latitude", value=34.18, min_value=-90.0, max_value=90.0, format="%.4f")
    lon = st.number_input("Longitude", value=-118.37, min_value=-180.0, max_value=180.0, format="%.4f")
    day = st.date_input("Date", value=datetime.date.today())
    submitted = st.button("☀ Compute sun path", use_container_width=True)

    st.markdown("### Orientation")
    current: DeviceOrientation = st.session_state.orientation
    alpha = st.slider("alpha (yaw)", 0.0, 359.0, float(current.alpha or 0.0), step=1.0)
    beta = st.slider("beta (pitch)", -180.0, 180.0, float(current.beta or 0.0), step=1.0)
    gamma = st.slider("gamma (roll)", -90.0, 90.0, float(current.gamma or 0.0), step=1.0)
    st.session_state.orientation = DeviceOrientation(alpha, beta, gamma, current.absolute)

    pad = st.columns(3)
    pad[0].button("Q ↺", on_click=_nudge, args=("KeyQ",), use_container_width=True)
    pad[1].button("W ▲", on_click=_nudge, args=("KeyW",), use_container_width=True)
    pad[2].button("E ↻", on_click=_nudge, args=("KeyE",), use_container_width=True)
    pad = st.columns(3)
    pad[0].button("A ◀", on_click=_nudge, args=("KeyA",), use_container_width=True)
    pad[1].button("S ▼", on_click=_nudge, args=("KeyS",), use_container_width=True)
    pad[2].button("D ▶", on_click=_nudge, args=("KeyD",), use_container_width=True)
    pad = st.columns(2)
    pad[0].button("Face north", on_click=_reset, use_container_width=True)
    pad[1].button("Zero", on_click=_nudge, args=("Space",), use_container_width=True)

    first_person = st.toggle("First-person view", value=False)

# --- Form submission handler ---
if submitted:
    st.session_state.error_msg = None
    with st.spinner("Computing sun path..."):
        try:
            trajectory = run(
                TrajectoryQuery(location=Location(lat, lon), day=day),
                ephemeris=_ephemeris(),
            )
            st.session_state.trajectory = trajectory
            st.session_state.content = build_ar_content(trajectory)
        except (EphemerisError, TimezoneLookupError) as e:
            st.session_state.error_msg = f"Could not compute the sun path: {e}"
    st.rerun()

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='overlay-box' style='border:1px solid #ff6b6b; color:#ff9999;'>"
        f"{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

# --- Scene ---
rotation = orientation_to_rotation(st.session_state.orientation)

if st.session_state.content is not None:
    fig = render_scene(st.session_state.content, rotation, fov=settings.camera_fov)
    if first_person:
        fig.update_layout(scene_camera=first_person_camera(rotation))
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
else:
    st.markdown(
        "<div style='height:60vh; display:flex; align-items:center; justify-content:center;"
        " color:#555555; font-size:1.2rem;'>Enter a location and date to compute the sun path</div>",
        unsafe_allow_html=True,
    )

# --- Readout ---
recovered = to_device_orientation(rotation)
forward = camera_forward(rotation)
trajectory = st.session_state.trajectory
sun_lines = ""
if trajectory is not None:
    sun_lines = (
        f"sunrise   {trajectory.sunrise}<br>"
        f"sunset    {trajectory.sunset}<br>"
    )
    if trajectory.current_position is not None:
        cp = trajectory.current_position
        sun_lines += f"sun now   az {cp.azimuth:.1f}° alt {cp.altitude:.1f}°<br>"
st.markdown(
    f"<div class='overlay-box'>"
    f"quaternion ({rotation.x:+.4f}, {rotation.y:+.4f}, {rotation.z:+.4f}, {rotation.w:+.4f})<br>"
    f"forward   ({forward.x:+.3f}, {forward.y:+.3f}, {forward.z:+.3f})<br>"
    f"recovered α {recovered.alpha:.1f}° β {recovered.beta:.1f}° γ {recovered.gamma:.1f}°<br>"
    f"{sun_lines}</div>",
    unsafe_allow_html=True,
)

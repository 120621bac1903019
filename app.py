import logging
import time
from dataclasses import replace
from typing import Optional

import streamlit as st

from grid_walk.config import WalkConfig, make_driver
from grid_walk.driver import RunDriver
from grid_walk.renderer import BoardRenderer

logging.basicConfig(level=logging.INFO)

st.set_page_config(layout="wide", page_title="Grid Walk")
st.markdown(
    """
    <style>
        header, footer, #MainMenu { visibility: hidden; }
        .stMainBlockContainer {
            padding-top: 0;
            padding-bottom: 0;
        }
    </style>
""",
    unsafe_allow_html=True,
)


# --------- Session State ---------


def set_default_state() -> None:
    if "config" not in st.session_state:
        st.session_state["config"] = WalkConfig()
        st.session_state["running"] = False
        st.session_state["error"] = None
    if "driver" not in st.session_state:
        st.session_state["driver"] = make_driver(st.session_state["config"])


def reset_run(config: WalkConfig) -> None:
    """Build a fresh driver for ``config`` and reset it (no ticks yet)."""
    driver = make_driver(config)
    st.session_state["driver"] = driver
    st.session_state["running"] = False
    st.session_state["error"] = None
    try:
        if driver.reset(config.start_column, config.vertical_threshold) is None:
            st.session_state["error"] = f"Error loading grid data from {config.grid_path}"
    except ValueError as e:
        st.session_state["error"] = str(e)


def get_config_from_widgets(current: WalkConfig) -> WalkConfig:
    st.subheader("Run")
    grid_path = st.text_input("Grid file", value=current.grid_path)
    start_column = st.number_input(
        "Starting column",
        min_value=1,
        value=current.start_column + 1,
        help="1-based column of the bottom-row start cell.",
    )
    vertical_threshold = st.number_input(
        "Vertical threshold",
        value=current.vertical_threshold,
        step=1,
        help="Upward moves onto cells below this value are always taken.",
    )
    return replace(
        current,
        grid_path=grid_path,
        start_column=int(start_column) - 1,
        vertical_threshold=int(vertical_threshold),
    )


# --------- Main App ---------

set_default_state()

config_col, board_col = st.columns([0.3, 0.7])

with config_col:
    config: WalkConfig = get_config_from_widgets(st.session_state["config"])
    st.session_state["config"] = config

    start_btn, reset_btn, step_btn = st.columns([1, 1, 1])
    with start_btn:
        if st.button("▶️ Start", key="start_btn", width="stretch"):
            reset_run(config)
            st.session_state["running"] = st.session_state["driver"].active
    with reset_btn:
        if st.button("🔁 Reset", key="reset_btn", width="stretch"):
            reset_run(config)
    with step_btn:
        if st.button("⏭️ Step", key="step_btn", width="stretch"):
            st.session_state["driver"].tick()

    driver: RunDriver = st.session_state["driver"]
    error: Optional[str] = st.session_state["error"]
    if error:
        st.error(error)

    st.divider()
    if driver.state is not None:
        st.metric("Score", driver.state.score)
        st.info(f"{driver.state.phase}".capitalize(), icon="🚶")
        if driver.state.message:
            st.info(driver.state.message, icon="💬")

with board_col:
    if driver.state is not None:
        renderer = BoardRenderer(resolution=config.resolution)
        st.image(renderer.render(driver.state), width="stretch")

if st.session_state["running"]:
    if driver.active:
        time.sleep(config.move_interval)
        driver.tick()
        st.rerun()
    else:
        st.session_state["running"] = False

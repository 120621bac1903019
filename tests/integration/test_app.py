from pathlib import Path

from streamlit.testing.v1 import AppTest

APP_PATH = Path(__file__).resolve().parents[2] / "app.py"
GRID_PATH = Path(__file__).resolve().parents[2] / "grid-data.json"


def test_app_renders_controls() -> None:
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception
    assert [b.label for b in at.button] == ["▶️ Start", "🔁 Reset", "⏭️ Step"]


def test_app_reset_creates_run() -> None:
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    at.text_input[0].input(str(GRID_PATH)).run()
    at.button(key="reset_btn").click().run()
    assert not at.exception
    assert not at.error
    driver = at.session_state["driver"]
    assert driver.state is not None
    assert driver.state.score == 0
    assert at.metric[0].value == "0"

from __future__ import annotations

from pathlib import Path

from streamlit.testing.v1 import AppTest

ROOT = Path(__file__).resolve().parents[1]


def test_app_renders_without_tasks() -> None:
    at = AppTest.from_file(str(ROOT / "src" / "app.py")).run(timeout=30)
    assert not at.exception
    assert "Generate Schedule" in at.info[0].value

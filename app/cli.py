"""Console entry point: launch the dashboard with `portfolio-projector`."""

from __future__ import annotations

import sys
from pathlib import Path

from streamlit.web import cli as stcli

APP_PATH = Path(__file__).resolve().parent / "streamlit_app.py"


def main() -> int:
    sys.argv = ["streamlit", "run", str(APP_PATH)] + sys.argv[1:]
    return stcli.main()


if __name__ == "__main__":
    sys.exit(main())

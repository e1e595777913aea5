#!/usr/bin/env python
"""
Run the Food & Glucose Drill-down Dashboard

Usage:
    python run_dashboard.py                  # Will invoke streamlit
    python run_dashboard.py my_config.yaml   # Use a custom configuration

    or

    streamlit run food_glucose_dashboard/app.py
"""

import os
import subprocess
import sys
from pathlib import Path

CONFIG_ENV_VAR = "FOOD_GLUCOSE_DASHBOARD_CONFIG"


def main():
    app_path = Path(__file__).parent / "food_glucose_dashboard" / "app.py"

    if not app_path.exists():
        print(f"Error: App not found at {app_path}")
        sys.exit(1)

    env = os.environ.copy()
    if len(sys.argv) > 1:
        config_path = Path(sys.argv[1]).resolve()
        if not config_path.exists():
            print(f"Error: Config not found at {config_path}")
            sys.exit(1)
        env[CONFIG_ENV_VAR] = str(config_path)

    result = subprocess.run(
        [
            sys.executable, "-m", "streamlit", "run",
            str(app_path),
            "--browser.gatherUsageStats", "false",
        ],
        env=env,
    )
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()

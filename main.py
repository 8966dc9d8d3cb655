"""Tianshan SLG dev launcher. Starts the game server in watch mode."""

import argparse
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "13013")


def main():
    parser = argparse.ArgumentParser(description="Tianshan SLG dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--reset", action="store_true",
                        help="Delete the stored save before starting")
    args = parser.parse_args()

    # Build env for the server so it picks up the same data dir
    env = os.environ.copy()
    data_dir = args.data_dir or Path(env.get("DATA_DIR", ROOT / "data"))
    env["DATA_DIR"] = str(data_dir.resolve())

    if args.reset:
        variables = data_dir / "variables.json"
        if variables.exists():
            variables.unlink()
            print(f"Removed {variables}")

    print(f"Starting server on http://localhost:{PORT} ...")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "tianshan.app:app", "--reload", "--host", HOST, "--port", PORT],
        cwd=ROOT, env=env,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()

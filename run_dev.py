#!/usr/bin/env python3
"""
Development runner script for Campus Connect Chat.
Starts the API server with auto-reload.
"""

import subprocess
import sys
from pathlib import Path

from config.settings import get_settings

PROJECT_ROOT = Path(__file__).parent


def run_api(host: str, port: int):
    """Start the FastAPI backend server."""
    return subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "src.api.main:app", "--reload", "--host", host, "--port", str(port)],
        cwd=PROJECT_ROOT
    )


def main():
    settings = get_settings()

    print(f"""
════════════════════════════════════════════════════════════
   Campus Connect Chat Development Server

   📡 API Server:    http://localhost:{settings.api_port}
   📚 API Docs:      http://localhost:{settings.api_port}/docs

   Press Ctrl+C to stop
════════════════════════════════════════════════════════════
    """)

    api_proc = run_api(settings.api_host, settings.api_port)

    try:
        api_proc.wait()
    except KeyboardInterrupt:
        print("\n\n👋 Shutting down...")
        api_proc.terminate()
        try:
            api_proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            api_proc.kill()
        print("✅ Server stopped.")
        sys.exit(0)


if __name__ == "__main__":
    main()

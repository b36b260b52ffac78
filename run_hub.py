from __future__ import annotations

import os
import subprocess
import sys
from dotenv import load_dotenv


def run_web_ui():
    # Run FastAPI app (webapp.py) via uvicorn
    args = [
        sys.executable,
        "-m",
        "uvicorn",
        "webapp:app",
        "--host",
        os.getenv("WEB_HOST", "127.0.0.1"),
        "--port",
        os.getenv("WEB_PORT", "8000"),
    ]
    if os.getenv("WEB_RELOAD", "0") in ("1", "true", "True"):
        args.append("--reload")
    return subprocess.Popen(args)


def main():
    load_dotenv(override=True)
    web = run_web_ui()
    print("Yandex GPT node is running:")
    print("- API: http://127.0.0.1:" + os.getenv("WEB_PORT", "8000") + "/api/nodes")
    try:
        web.wait()
    except KeyboardInterrupt:
        web.terminate()


if __name__ == "__main__":
    main()

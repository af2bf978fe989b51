"""
Run the Wellness Insight service

Start: python -m insight_service.run_server
Stop:  Ctrl+C

Configuration via HOST, PORT and LOG_LEVEL environment variables.
"""

import os

import uvicorn

from insight_service.app import app

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()


def main():
    print("=" * 60)
    print("Wellness Insight - Starting Server")
    print("=" * 60)
    print(f"API Docs: http://localhost:{PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL
    )


if __name__ == "__main__":
    main()

"""
SmartNotes Server Entry Point

Run with: python main.py
Or with uvicorn: uvicorn app:app --reload

Host and port come from SMARTNOTES_HOST / SMARTNOTES_PORT; auto-reload is
on unless SMARTNOTES_ENV is set to something other than "development".
"""

import os

import uvicorn


def run() -> None:
    is_dev = os.getenv("SMARTNOTES_ENV", "development") == "development"

    uvicorn.run(
        "app:app",
        host=os.getenv("SMARTNOTES_HOST", "127.0.0.1"),
        port=int(os.getenv("SMARTNOTES_PORT", "8000")),
        reload=is_dev,
        log_level=os.getenv("SMARTNOTES_LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    run()

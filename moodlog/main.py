from __future__ import annotations

import os

import uvicorn

from moodlog.app.core.config import get_settings
from moodlog.app.main import app


def run() -> None:
    """Serve the moodlog API; PORT and HOST come from the environment."""

    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "127.0.0.1")
    uvicorn.run(app, host=host, port=port, log_level=get_settings().log_level.lower())


if __name__ == "__main__":
    run()

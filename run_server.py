"""Launch the ProConnect API under Uvicorn.

Host, port and reload come from the environment; the log level follows
``LOG_LEVEL`` from the application settings so the server and the app agree.
"""
from __future__ import annotations

import os

import uvicorn

from proconnect.config import get_settings


def _flag(name: str, default: str = "false") -> bool:
  return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


def main() -> None:
  settings = get_settings()
  uvicorn.run(
    "proconnect.main:app",
    host=os.getenv("PROCONNECT_SERVER_HOST", "0.0.0.0"),
    port=int(os.getenv("PROCONNECT_SERVER_PORT", "8000")),
    reload=_flag("UVICORN_RELOAD") and not settings.is_production,
    log_level=settings.log_level.lower(),
    proxy_headers=settings.is_production,
  )


if __name__ == "__main__":
  main()

"""Run the service: ``python -m taskmanager``."""
from __future__ import annotations

import uvicorn

from taskmanager.adapters.fastapi import create_app
from taskmanager.config import AppSettings, EnvSettingsLoader


def main() -> None:
    settings = EnvSettingsLoader().load(AppSettings)
    # log_config=None keeps uvicorn on the structlog-configured root logger
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()

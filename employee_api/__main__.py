"""
Name: Module runner (`python -m employee_api`)

Responsibilities:
  - Start uvicorn on the configured PORT serving employee_api.main:app
"""

import uvicorn

from .crosscutting.config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "employee_api.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

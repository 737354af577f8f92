"""
Name: Backend ASGI Entrypoint (employee_api.main)

Responsibilities:
  - Re-export the ASGI app for servers and tooling
  - Preserve the import path used by uvicorn and tests
  - Keep this module side-effect free beyond importing employee_api.api.main

Collaborators:
  - employee_api.api.main: module that constructs the application
  - ASGI servers (uvicorn) configured to import employee_api.main:app

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
  - Changing this path is a deployment-breaking change for infra scripts
"""

from employee_api.api.main import app, create_app

__all__ = ["app", "create_app"]

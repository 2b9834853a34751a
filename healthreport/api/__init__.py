"""
Web API Module

Wiring of healthcheck endpoints into FastAPI applications.
"""

from healthreport.api.web import create_app, install_healthcheck

__all__ = ["create_app", "install_healthcheck"]

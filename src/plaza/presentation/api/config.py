"""API configuration adapter.

Bridges the centralized plaza_config settings with the API layer. The
settings instance is fixed per application in ``create_app``.
"""

from fastapi import Request

from plaza_config.settings import Settings


def get_api_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings

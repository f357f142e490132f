"""HTTP API routers."""

from warden.api.router import api_router


__all__ = ["api_router"]

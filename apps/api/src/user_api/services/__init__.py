"""Service dependencies for route handlers."""

from fastapi import Request

from user_common.services.user_store import UserStore


def get_user_store(request: Request) -> UserStore:
    """Get the user store owned by the running application.

    Args:
        request: Incoming request

    Returns:
        UserStore instance attached at startup
    """
    return request.app.state.user_store

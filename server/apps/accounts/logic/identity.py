"""Caller identity helpers shared by the files and contributions apps."""

import logging
from typing import TYPE_CHECKING

from django.http import HttpRequest

from server.apps.accounts.exceptions import UnauthenticatedError

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)


def resolve_caller(request: HttpRequest) -> 'User | None':
    """Resolve the calling principal of a request.

    Args:
        request: Incoming request, after AuthenticationMiddleware.

    Returns:
        Authenticated user, or None for anonymous requests.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    return user  # type: ignore[return-value]


def require_caller(caller: 'User | None', operation: str) -> 'User':
    """Ensure an operation runs on behalf of an authenticated user.

    Args:
        caller: Resolved caller or None.
        operation: Operation name, used in the error and log message.

    Returns:
        The caller, narrowed to User.

    Raises:
        UnauthenticatedError: If there is no caller.
    """
    if caller is None or not caller.is_authenticated:
        logger.warning('Refused %s: no authenticated caller', operation)
        raise UnauthenticatedError(operation)
    return caller

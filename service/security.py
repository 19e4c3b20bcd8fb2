"""
Role gate for roster mutations.

Provides:
- ensure_teacher(actor, verb) -> None          raises AuthorizationError
- require_teacher(verb)                         decorator for service methods

The decorator binds the call arguments, picks out the `actor` parameter and
runs ensure_teacher() before the wrapped body, so a rejected call never
touches the student list or the audit log.
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

from service.errors import AuthorizationError
from service.models import User, UserRole

logger = logging.getLogger("Audit")

ACTOR_PARAM = "actor"


def ensure_teacher(actor: Optional[User], verb: str) -> None:
    role = getattr(actor, "role", None)
    if role is not UserRole.TEACHER:
        who = actor.display_name if isinstance(actor, User) else "anonymous"
        logger.warning("Rejected '%s' for %s (role=%s)", verb, who, getattr(role, "value", role))
        raise AuthorizationError(f"Only teachers can {verb}")


def require_teacher(verb: str) -> Callable[..., Any]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        sig = inspect.signature(fn)
        if ACTOR_PARAM not in sig.parameters:
            raise TypeError(f"{fn.__qualname__} has no '{ACTOR_PARAM}' parameter to check")

        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                bound = sig.bind(*args, **kwargs)
            except TypeError:
                # let the real call report the signature problem
                return fn(*args, **kwargs)
            ensure_teacher(bound.arguments.get(ACTOR_PARAM), verb)
            return fn(*args, **kwargs)

        wrapper.required_role = UserRole.TEACHER  # type: ignore[attr-defined]
        return wrapper
    return deco

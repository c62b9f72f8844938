"""Helpers for calling collaborators that may be sync or async."""

import inspect
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def resolve(value: T | Awaitable[T]) -> T:
    """Await ``value`` if it is awaitable, otherwise return it unchanged.

    Lets orchestration code always ``await`` a collaborator call regardless
    of whether the concrete collaborator is a plain function or a coroutine.

    Example:
        >>> result = await resolve(installer.install(plugin_id, version, False))
    """
    if inspect.isawaitable(value):
        return await value
    return value

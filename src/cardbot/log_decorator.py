"""Decorator for automatically logging bot command calls."""

import time
from functools import wraps
from typing import Any, Callable

import logging

logger = logging.getLogger("cardbot.commands")


def log_command_calls(func: Callable) -> Callable:
    """
    Decorator that logs async command handlers with their query and timing.

    The decorated coroutine must take ``(self, ctx, *, query)``. The command
    name comes from ``ctx.invoked_with`` when available so aliases show up
    as typed.
    """

    @wraps(func)
    async def wrapper(self, ctx, *args, **kwargs) -> Any:
        command = getattr(ctx, "invoked_with", None) or func.__name__
        query = kwargs.get("query", args[0] if args else None)
        guild = getattr(getattr(ctx, "guild", None), "name", None)
        user = getattr(getattr(ctx, "author", None), "name", None)

        start_time = time.time()

        logger.debug(
            f"Command {command} started",
            extra={"command": command, "query": query, "guild": guild, "user": user},
        )

        try:
            result = await func(self, ctx, *args, **kwargs)

            execution_time_ms = int((time.time() - start_time) * 1000)
            logger.info(
                f"Command {command} completed in {execution_time_ms}ms",
                extra={
                    "command": command,
                    "query": query,
                    "guild": guild,
                    "user": user,
                    "execution_time_ms": execution_time_ms,
                    "success": True,
                },
            )
            return result

        except Exception as e:
            execution_time_ms = int((time.time() - start_time) * 1000)
            logger.error(
                f"Command {command} failed with error: {str(e)}",
                extra={
                    "command": command,
                    "query": query,
                    "guild": guild,
                    "user": user,
                    "execution_time_ms": execution_time_ms,
                    "success": False,
                    "error": str(e),
                },
            )
            raise

    return wrapper

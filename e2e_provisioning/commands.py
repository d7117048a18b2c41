# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/commands.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Command registry exposing provisioning operations as named, chainable steps.

Typical use::

    registry = CommandRegistry()
    registry.add("double", double)
    result = await registry.double(2).then(lambda v: v + 1)

Every call returns a ``Chain``: a deferred value that resolves once, on the
first await. Later awaits return the same result or raise the same error.
Commands run one at a time; a command issued while another is in flight waits
for it to finish.
"""

# Standard
import asyncio
import contextvars
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Step = Callable[[Any], Awaitable[Any]]

# Registries whose lock is held by the current context. Tasks spawned by a
# running command inherit it, so their commands run without re-acquiring.
_held_registries: contextvars.ContextVar[Tuple["CommandRegistry", ...]] = contextvars.ContextVar("held_registries", default=())


class CommandRegistry:
    """Named async operations, serialized by a context-aware lock."""

    def __init__(self):
        self._commands: Dict[str, Callable[..., Awaitable[Any]]] = {}
        self._lock = asyncio.Lock()

    def add(self, name: str, fn: Callable[..., Awaitable[Any]]) -> None:
        """Register ``fn`` under ``name``.

        Raises:
            ValueError: If the name is taken, private, or shadows a registry/chain attribute.
        """
        if not name or name.startswith("_"):
            raise ValueError(f"Invalid command name: {name!r}")
        if name in self._commands:
            raise ValueError(f"Command already registered: {name}")
        if hasattr(CommandRegistry, name) or hasattr(Chain, name):
            raise ValueError(f"Command name shadows a built-in attribute: {name}")
        self._commands[name] = fn

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __getattr__(self, name: str) -> Callable[..., "Chain"]:
        if name.startswith("_") or name not in self._commands:
            raise AttributeError(f"No command named {name!r}")

        def _start(*args: Any, **kwargs: Any) -> "Chain":
            return self.chain().call(name, *args, **kwargs)

        return _start

    def chain(self, subject: Any = None) -> "Chain":
        """Start an empty chain whose initial subject is ``subject``."""
        return Chain(self, subject)

    async def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run one command, waiting for any command already in flight.

        A command invoked from inside another command, directly or from a task
        the outer command started, runs without waiting on the outer one.
        """
        fn = self._commands[name]
        held = _held_registries.get()
        if self in held:
            return await fn(*args, **kwargs)

        async with self._lock:
            token = _held_registries.set(held + (self,))
            try:
                logger.debug(f"Running command {name}")
                return await fn(*args, **kwargs)
            finally:
                _held_registries.reset(token)


class Chain:
    """A deferred value built from a parent chain plus one step.

    The step receives the parent's result. ``call`` and ``then`` return a new
    chain and never change this one. The result is computed on the first
    await and shared by every later await, including those of derived chains.
    """

    def __init__(self, registry: CommandRegistry, subject: Any = None, parent: Optional["Chain"] = None, step: Optional[Step] = None):
        self._registry = registry
        self._subject = subject
        self._parent = parent
        self._step = step
        self._task: Optional[asyncio.Task] = None

    def _append(self, step: Step) -> "Chain":
        return Chain(self._registry, parent=self, step=step)

    def call(self, name: str, *args: Any, **kwargs: Any) -> "Chain":
        """Append registered command ``name``; it ignores the previous subject."""
        if name not in self._registry:
            raise AttributeError(f"No command named {name!r}")

        async def _step(_subject: Any) -> Any:
            return await self._registry.invoke(name, *args, **kwargs)

        return self._append(_step)

    def then(self, fn: Callable[[Any], Any]) -> "Chain":
        """Append ``fn(subject)``. Awaitables and chains it returns are resolved."""

        async def _step(subject: Any) -> Any:
            result = fn(subject)
            if inspect.isawaitable(result):
                result = await result
            return result

        return self._append(_step)

    def __getattr__(self, name: str) -> Callable[..., "Chain"]:
        if name.startswith("_"):
            raise AttributeError(name)

        def _next(*args: Any, **kwargs: Any) -> "Chain":
            return self.call(name, *args, **kwargs)

        if name not in self._registry:
            raise AttributeError(f"No command named {name!r}")
        return _next

    async def _resolve(self) -> Any:
        subject = await self._parent if self._parent is not None else self._subject
        if self._step is not None:
            subject = await self._step(subject)
        return subject

    async def run(self) -> Any:
        """Resolve the chain once and return its final subject."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._resolve())
        return await self._task

    def __await__(self):
        return self.run().__await__()

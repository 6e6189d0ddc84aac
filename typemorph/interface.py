# interface.py

import asyncio
from contextlib import contextmanager
from functools import partial
from typing import Any, Awaitable, Callable, Optional, Set, Union

from .animations import SessionAnimations
from .config import TypeMorphConfig
from .content import build_content
from .display import NodeId, RenderSurface
from .errors import ConfigurationError, ContentError, LifecycleError
from .helpers import fire_callback, safe_callback
from .logger import Logger
from .scheduling import CancellationToken, OperationScheduler, TimerRegistry

Target = Union[NodeId, str]


class TypeMorph:
    """
    Typewriter session bound to one render surface.

    Operations (``start_typing``, ``start_loop``, ``backspace``) validate
    their arguments immediately and return an already running
    ``asyncio.Task``. Only one operation runs at a time: starting a new one
    cancels the previous one, which then resolves quietly.
    """

    def __init__(self, surface: RenderSurface, config: Optional[TypeMorphConfig] = None, *,
                 logging_enabled: bool = False, log_file: Optional[str] = None,
                 logger: Optional[Logger] = None, **options: Any):
        """
        Initialize the session.

        Args:
            surface: Render surface the session draws into.
            config: Instance defaults; ``options`` are applied on top of it.
            logging_enabled: Enable debug logging.
            log_file: Path to log file. Use "-" for stdout.
            logger: Pre-built logger, overrides the two logging arguments.
        """
        self._init_components(surface, config, logging_enabled, log_file, logger, options)

    def _init_components(self, surface, config, logging_enabled, log_file, logger, options) -> None:
        try:
            # Per-session logger name
            self._owns_logger = logger is None
            self.logger = logger or Logger(f"{__name__}.{id(self):x}", logging_enabled, log_file)
            self.surface = surface
            self.config = (config or TypeMorphConfig()).merged(**options)

            self.timers = TimerRegistry()
            self.scheduler = OperationScheduler(self.timers, logger=self.logger)
            self.animations = SessionAnimations(surface, self.timers, logger=self.logger)

            self._destroyed = False
            self._callback_tasks: Set[asyncio.Task] = set()
            self.parent: Optional[NodeId] = None
            self.text: Optional[str] = None
            if self.config.parent is not None:
                self.parent = self._resolve_target(self.config.parent)
            if self.config.text is not None:
                self.text = self._resolve_text(self.config.text)
            self.logger.debug("Session initialized")
        except Exception as e:
            if hasattr(self, 'logger'):
                self.logger.error(f"Init error: {e}")
            raise

    # Public operations

    def start_typing(self, text: Any, target: Optional[Target] = None, **options: Any) -> asyncio.Task:
        """
        Type ``text`` into ``target`` (or the session parent).

        Args:
            text: Source text; markup or markdown depending on the options
            target: Node id or element id, defaults to the session parent
            **options: Per-call overrides of any ``TypeMorphConfig`` field

        Returns:
            Running task resolving when typing ends or is superseded

        Raises:
            ConfigurationError: Invalid option
            LifecycleError: Session already destroyed
        """
        self._check_lifetime()
        config = self.config.merged(**options)
        return self._launch(partial(self._type, text, target, config), "type")

    def start_loop(self, text: Any = None, target: Optional[Target] = None, **options: Any) -> asyncio.Task:
        """
        Type ``text`` repeatedly, clearing between passes.

        Args:
            text: Source text, defaults to the session text
            target: Node id or element id, defaults to the session parent
            **options: Per-call overrides, typically the ``loop_*`` fields

        Returns:
            Running task resolving after the last pass or on cancellation
        """
        self._check_lifetime()
        config = self.config.merged(**options)
        return self._launch(partial(self._loop, text, target, config), "loop")

    def backspace(self, count: Optional[int] = None, target: Optional[Target] = None,
                  **options: Any) -> asyncio.Task:
        """
        Remove ``count`` trailing characters, or everything when ``count`` is None.

        Args:
            count: Characters to remove, a whole number >= 0 or None
            target: Node id or element id, defaults to the session parent
            **options: Per-call overrides such as ``backspace_speed``

        Returns:
            Running task resolving when backspacing ends
        """
        self._check_lifetime()
        if count is not None and (isinstance(count, bool) or not isinstance(count, int) or count < 0):
            raise ConfigurationError(f"count has to be a whole number >= 0, got {count!r}")
        config = self.config.merged(**options)
        return self._launch(partial(self._backspace, count, target, config), "backspace")

    def stop(self) -> asyncio.Task:
        """
        Stop the running operation.

        Its timers are cleared before this returns; await the task to wait
        until the operation has fully settled.
        """
        self._check_lifetime()
        loop = asyncio.get_running_loop()
        self.scheduler.cancel_current()
        return loop.create_task(self._stop())

    def destroy(self) -> None:
        """Stop everything, release the caret and disable the session. Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True
        try:
            self.scheduler.close()
            self.timers.clear()
            self.animations.release()
        except Exception as e:
            self.logger.error(f"Destroy cleanup error: {e}", exc_info=True)
        fire_callback(self.config.on_stop, self, tasks=self._callback_tasks, logger=self.logger)
        fire_callback(self.config.on_destroy, self, tasks=self._callback_tasks, logger=self.logger)
        self.logger.debug("Session destroyed")
        if self._owns_logger:
            self.logger.close()

    # Queries

    def is_typing(self) -> bool:
        return self.scheduler.typing

    def is_destroyed(self) -> bool:
        return self._destroyed

    def current_iteration(self) -> int:
        return self.animations.looper.iteration

    @property
    def pending_timers(self) -> int:
        return len(self.timers)

    @property
    def cursor_node(self) -> Optional[NodeId]:
        return self.animations.cursor.node

    # Operations

    def _launch(self, operation: Callable[[CancellationToken], Awaitable[None]], label: str) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        return loop.create_task(self.scheduler.submit(operation, label))

    async def _stop(self) -> None:
        await self.scheduler.settle()
        self.animations.cursor.hide_if(self.config.hide_cursor_on_finish)
        await safe_callback(self.config.on_stop, self, logger=self.logger)

    async def _type(self, text: Any, target: Optional[Target], config: TypeMorphConfig,
                    token: CancellationToken) -> None:
        root = self._resolve_target(target)
        text = self._resolve_text(text)
        self.animations.cursor.ensure(config.show_cursor, config.cursor_char)
        if config.clear_before_typing and not token.cancelled:
            self.animations.looper.clear(root)

        nodes = await build_content(text, config, self.logger)
        with self._following(root, config):
            flushes = await self.animations.typer.type_nodes(root, nodes, config, token)
        self.logger.debug(f"Typing ended after {flushes} flush(es)")

        await self._finish(root, config, token)

    async def _loop(self, text: Any, target: Optional[Target], config: TypeMorphConfig,
                    token: CancellationToken) -> None:
        root = self._resolve_target(target)
        text = self._resolve_text(text)
        self.animations.cursor.ensure(config.show_cursor, config.cursor_char)
        self.animations.looper.iteration = 0
        if config.clear_before_typing and not token.cancelled:
            self.animations.looper.clear(root)

        nodes = await build_content(text, config, self.logger)
        if not nodes:
            self.logger.debug("Nothing to loop over")
            completed = True
        else:
            with self._following(root, config):
                completed = await self.animations.looper.run(root, nodes, config, token)

        if completed:
            await self._finish(root, config, token)

    async def _backspace(self, count: Optional[int], target: Optional[Target], config: TypeMorphConfig,
                         token: CancellationToken) -> None:
        root = self._resolve_target(target)
        self.animations.cursor.ensure(config.show_cursor, config.cursor_char)
        with self._following(root, config):
            await self.animations.backspacer.backspace(root, count, config, token)
        await self._finish(root, config, token)

    async def _finish(self, root: NodeId, config: TypeMorphConfig, token: CancellationToken) -> None:
        if token.cancelled:
            return
        if not self.surface.is_connected(root):
            self.logger.debug("Target detached, operation halted")
            return
        self.animations.cursor.hide_if(config.hide_cursor_on_finish)
        await safe_callback(config.on_finish, self, logger=self.logger)

    @contextmanager
    def _following(self, root: NodeId, config: TypeMorphConfig):
        scroller = self.animations.scroller
        container = config.scroll_container
        scroll_target = root if container is None else self._resolve_target(container)
        scroller.begin(scroll_target, config.auto_scroll, config.scroll_interval)
        try:
            yield scroller
        finally:
            scroller.end()

    # Validation

    def _check_lifetime(self) -> None:
        if self._destroyed:
            raise LifecycleError("Cannot call method on destroyed instance")

    def _resolve_target(self, target: Optional[Target]) -> NodeId:
        if target is None:
            target = self.parent
        if target is None:
            raise ContentError("Parent element not found")
        if isinstance(target, str):
            node = self.surface.get_element_by_id(target)
            if node is None:
                raise ContentError(f"Parent element not found for id #{target}")
            return node
        if isinstance(target, bool) or not isinstance(target, int):
            raise ContentError(f"Parent is not a valid node or element id: {target!r}")
        try:
            is_text = self.surface.is_text(target)
        except ValueError as e:
            raise ContentError(f"Parent element not found: {e}") from e
        if is_text:
            raise ContentError("Parent has to be an element, not a text node")
        return target

    def _resolve_text(self, text: Any) -> str:
        if text is None:
            text = self.text
        if text is None:
            raise ContentError("Please provide a valid text")
        if not isinstance(text, str):
            self.logger.warning(f"Non-string input ({type(text).__name__}) auto-converted to string.")
            text = str(text)
        return text

"""Detection orchestrator: the panel state machine.

``ContourEngine`` owns the :class:`PanelState`. Every keystroke goes through
:meth:`ContourEngine.analyze`, which replaces the state wholesale (or, in
focused mode, only the active module), then schedules async resolution for
network-backed results. Each resolvable intent has its own generation
counter; a resolution commits only while its generation is current, the
active module still shows that intent, and the module still holds a result
equal to the placeholder that was resolved.
"""

from __future__ import annotations

import asyncio
import dataclasses
import re
import time
import uuid
from collections import defaultdict
from contextlib import contextmanager
from typing import Awaitable, Callable, Iterator, Optional

from contour_engine.core.intents import RESOLVABLE_INTENTS, IntentId, PanelMode
from contour_engine.core.logging import correlation_id_context, get_logger, truncate_for_log
from contour_engine.core.models import (
    HIDDEN_PANEL,
    Base64Result,
    CalculatorResult,
    ClipboardAction,
    ColorResult,
    Command,
    CurrencyResult,
    DateResult,
    DictionaryResult,
    ExternalAction,
    HashResult,
    InlineAction,
    IntentResult,
    JsonFormatResult,
    LoremResult,
    ModeAction,
    ModuleData,
    NavigateAction,
    PanelState,
    RandomResult,
    RegexResult,
    TimerState,
    TimezoneResult,
    TranslationResult,
    UnitResult,
    UrlEncodeResult,
    WordCountResult,
)
from contour_engine.core.ports import (
    ActionSink,
    ClipboardSink,
    IntervalHandle,
    NotificationSink,
    Scheduler,
)
from contour_engine.services.commands import (
    RecentCommands,
    flatten_groups,
    group_by_category,
    search_commands,
)
from contour_engine.services.detectors.pipeline import DetectorPipeline
from contour_engine.services.detectors.registry import FocusedRegistry, module_for_handler
from contour_engine.services.detectors.timer import (
    reset_timer_state,
    tick_timer,
    timer_for_seconds,
)
from contour_engine.services.resolvers import ResolutionService

logger = get_logger(__name__)

TIMER_NOTIFICATION_TITLE = "Contour Timer"
TICK_SECONDS = 1.0

Listener = Callable[[PanelState], None]
Resolver = Callable[[IntentResult], Awaitable[IntentResult]]

_TRAILING_ZEROS = re.compile(r"\.?0+$")


def _number_text(value: float) -> str:
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))


def get_module_copy_value(module: Optional[ModuleData]) -> Optional[str]:
    """Text copied when Enter is pressed on a module, or ``None`` if nothing is ready."""
    # pylint: disable=too-many-return-statements,too-many-branches
    if module is None or module.result is None:
        return None
    result = module.result
    if isinstance(result, CalculatorResult):
        return None if result.is_partial else _number_text(result.result)
    if isinstance(result, UnitResult):
        return None if result.is_partial else _TRAILING_ZEROS.sub("", f"{result.to_value:.4f}")
    if isinstance(result, CurrencyResult):
        if result.to_value is None or result.is_partial or result.is_loading:
            return None
        return f"{result.to_value:.2f}"
    if isinstance(result, ColorResult):
        return result.hex
    if isinstance(result, TimezoneResult):
        return None if result.is_partial else result.to_time
    if isinstance(result, DateResult):
        return None if result.is_partial else result.display
    if isinstance(result, RandomResult):
        return result.value
    if isinstance(result, TranslationResult):
        return result.translated_text if result.translated_text and not result.is_loading else None
    if isinstance(result, DictionaryResult):
        if not result.meanings or result.is_loading:
            return None
        definitions = result.meanings[0].definitions
        return f"{result.word}: {definitions[0].definition}" if definitions else None
    if isinstance(result, WordCountResult):
        return f"{result.words} words, {result.characters} characters"
    if isinstance(result, LoremResult):
        return None if result.is_partial else result.text
    if isinstance(result, JsonFormatResult):
        return result.formatted if result.is_valid and not result.is_partial else None
    if isinstance(result, (Base64Result, UrlEncodeResult)):
        return None if result.is_partial or result.error else result.output
    if isinstance(result, HashResult):
        return result.sha256
    if isinstance(result, RegexResult):
        return f"/{result.pattern}/{result.flags}" if result.is_valid and result.pattern else None
    return None


def _needs_resolution(result: IntentResult) -> bool:
    if isinstance(result, DictionaryResult):
        return True
    return isinstance(result, (CurrencyResult, TranslationResult)) and not result.is_partial


class ContourEngine:
    """Panel state machine driven by keystrokes, commands and timer ticks."""

    # pylint: disable=too-many-instance-attributes,too-many-public-methods

    def __init__(
        self,
        *,
        pipeline: DetectorPipeline,
        registry: FocusedRegistry,
        scheduler: Scheduler,
        resolution: Optional[ResolutionService] = None,
        recents: Optional[RecentCommands] = None,
        clipboard: Optional[ClipboardSink] = None,
        notifications: Optional[NotificationSink] = None,
        actions: Optional[ActionSink] = None,
        notifications_enabled: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._pipeline = pipeline
        self._registry = registry
        self._scheduler = scheduler
        self._recents = recents or RecentCommands()
        self._clipboard = clipboard
        self._notifications = notifications
        self._actions = actions
        self._notifications_enabled = notifications_enabled
        self._clock = clock

        self._state: PanelState = HIDDEN_PANEL
        self._listeners: list[Listener] = []
        self._timer_handle: Optional[IntervalHandle] = None
        self._generations: defaultdict[IntentId, int] = defaultdict(int)
        self._pending: set[asyncio.Task[None]] = set()
        self._resolvers: dict[IntentId, Resolver] = {}
        if resolution is not None:
            self._resolvers = {
                IntentId.CURRENCY: resolution.resolve_currency,  # type: ignore[dict-item]
                IntentId.TRANSLATOR: resolution.resolve_translation,  # type: ignore[dict-item]
                IntentId.DICTIONARY: resolution.resolve_dictionary,  # type: ignore[dict-item]
            }

    # --- state --------------------------------------------------------------

    @property
    def state(self) -> PanelState:
        return self._state

    @property
    def is_visible(self) -> bool:
        return self._state.is_visible

    @property
    def is_focused(self) -> bool:
        return self._state.is_focused

    def generation(self, intent: IntentId) -> int:
        return self._generations[intent]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: PanelState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _replace_module(self, module: ModuleData) -> None:
        self._set_state(dataclasses.replace(self._state, active_module=module))

    # --- keystrokes ---------------------------------------------------------

    @contextmanager
    def analysis_context(self) -> Iterator[str]:
        """Bind a fresh correlation id for one keystroke."""
        correlation_id = uuid.uuid4().hex[:12]
        with correlation_id_context(correlation_id):
            yield correlation_id

    def analyze(self, text: str) -> PanelState:
        """Process the full input text after a keystroke and return the new state."""
        with self.analysis_context():
            module = self._state.active_module
            if self._state.mode is PanelMode.MODULE and module is not None and module.focused:
                self._analyze_focused(module, text)
                return self._state

            trimmed = text.strip()
            if not trimmed:
                self._set_state(HIDDEN_PANEL)
                return self._state

            if trimmed.startswith("/"):
                query = trimmed[1:]
                commands = tuple(search_commands(query, self._recents))
                logger.debug("[commands] query='%s' results=%d", truncate_for_log(query), len(commands))
                self._set_state(
                    PanelState(mode=PanelMode.COMMANDS, commands=commands, command_query=query)
                )
                return self._state

            result = self._pipeline.detect(trimmed)
            if result is None:
                self._set_state(HIDDEN_PANEL)
                return self._state

            self._set_state(
                PanelState(mode=PanelMode.MODULE, active_module=ModuleData(intent=result.intent, result=result))
            )
            self._schedule_resolution(result)
            return self._state

    def _analyze_focused(self, module: ModuleData, text: str) -> None:
        """Re-run the pinned module's detector on the raw text.

        Focused results are never scheduled for resolution. A focused currency,
        translator or dictionary module keeps its ``is_loading=True`` placeholder
        until the caller resolves it through :class:`ResolutionService` and
        applies the result with :meth:`commit_resolution`.
        """
        if isinstance(module.result, TimerState) and module.result.is_running:
            return
        result = self._registry.detect(module.intent, text)
        self._replace_module(ModuleData(intent=module.intent, focused=True, result=result))

    # --- async resolution ---------------------------------------------------

    def _schedule_resolution(self, result: IntentResult) -> None:
        intent = result.intent
        if intent not in RESOLVABLE_INTENTS or intent not in self._resolvers:
            return
        if not _needs_resolution(result):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("[resolve] no running loop; %s left unresolved", intent.value)
            return
        self._generations[intent] += 1
        generation = self._generations[intent]
        task = loop.create_task(self._resolve(intent, result, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _resolve(self, intent: IntentId, placeholder: IntentResult, generation: int) -> None:
        resolved = await self._resolvers[intent](placeholder)
        self.commit_resolution(intent, placeholder, resolved, generation)

    def commit_resolution(
        self,
        intent: IntentId,
        placeholder: IntentResult,
        resolved: IntentResult,
        generation: int,
    ) -> bool:
        """Apply ``resolved`` if it is still wanted; returns whether it was applied."""
        if self._generations[intent] != generation:
            logger.info("[resolve] stale %s generation=%d discarded", intent.value, generation)
            return False
        module = self._state.active_module
        if module is None or module.intent is not intent or module.result != placeholder:
            logger.info("[resolve] %s no longer active; result discarded", intent.value)
            return False
        self._replace_module(dataclasses.replace(module, result=resolved))
        return True

    async def wait_for_resolution(self) -> None:
        """Await every in-flight resolution (used by the CLI and tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # --- commands -----------------------------------------------------------

    def focus_on_module(self, handler: str) -> IntentId:
        """Pin the panel to the module behind ``handler`` with empty input.

        Raises:
            UnknownHandlerError: if ``handler`` maps to no module.
        """
        intent = module_for_handler(handler)
        logger.info("[contour] focus handler=%s module=%s", handler, intent.value)
        self._set_state(PanelState(mode=PanelMode.MODULE, active_module=ModuleData(intent=intent, focused=True)))
        return intent

    def _rendered_commands(self) -> list[Command]:
        return flatten_groups(group_by_category(self._state.commands))

    def select_up(self) -> None:
        count = len(self._state.commands)
        if self._state.mode is not PanelMode.COMMANDS or count == 0:
            return
        index = self._state.selected_index
        self._set_state(dataclasses.replace(self._state, selected_index=count - 1 if index <= 0 else index - 1))

    def select_down(self) -> None:
        count = len(self._state.commands)
        if self._state.mode is not PanelMode.COMMANDS or count == 0:
            return
        index = self._state.selected_index
        self._set_state(dataclasses.replace(self._state, selected_index=0 if index >= count - 1 else index + 1))

    def selected_command(self) -> Optional[Command]:
        """Command under the cursor in the category-grouped order that is rendered."""
        if self._state.mode is not PanelMode.COMMANDS or not self._state.commands:
            return None
        rendered = self._rendered_commands()
        index = self._state.selected_index
        return rendered[index] if 0 <= index < len(rendered) else None

    def run_command(self, command: Command) -> None:
        self._recents.record(command.id)
        action = command.action
        logger.info("[commands] run id=%s type=%s", command.id, action.type)
        if isinstance(action, InlineAction):
            self.focus_on_module(action.handler)
            return
        if isinstance(action, NavigateAction):
            if self._actions is not None:
                self._actions.navigate(action.path)
        elif isinstance(action, ModeAction):
            if self._actions is not None:
                self._actions.switch_mode(action.mode)
        elif isinstance(action, ExternalAction):
            if self._actions is not None:
                self._actions.open_external(action.url)
        elif isinstance(action, ClipboardAction):
            value = self._clipboard_value(action.handler)
            if value:
                self._copy(value)
        self.dismiss()

    def _clipboard_value(self, handler: str) -> Optional[str]:
        if handler == "uuid":
            return str(uuid.uuid4())
        if handler == "timestamp":
            return str(int(self._clock()))
        return None

    def _copy(self, value: str) -> None:
        if self._clipboard is not None:
            self._clipboard.copy(value)

    def enter(self) -> Optional[str]:
        """Handle Enter; returns the copied text when a value was copied."""
        if self._state.mode is PanelMode.COMMANDS:
            command = self.selected_command()
            if command is not None:
                self.run_command(command)
            return None

        module = self._state.active_module
        if self._state.mode is not PanelMode.MODULE or module is None:
            return None

        timer = module.result
        if isinstance(timer, TimerState) and not timer.is_running and not timer.is_complete:
            self.start_timer()
            return None

        value = get_module_copy_value(module)
        if value:
            self._copy(value)
            if not module.focused:
                self.dismiss()
        return value

    def dismiss(self) -> None:
        self._clear_timer()
        self._set_state(HIDDEN_PANEL)

    # --- timer --------------------------------------------------------------

    def _timer(self) -> Optional[TimerState]:
        module = self._state.active_module
        if module is None or not isinstance(module.result, TimerState):
            return None
        return module.result

    def _set_timer(self, timer: TimerState) -> None:
        module = self._state.active_module
        if module is not None:
            self._replace_module(dataclasses.replace(module, result=timer))

    def _clear_timer(self) -> None:
        if self._timer_handle is not None:
            self._scheduler.clear_interval(self._timer_handle)
            self._timer_handle = None

    def _start_interval(self) -> None:
        self._clear_timer()
        self._timer_handle = self._scheduler.set_interval(self._tick, TICK_SECONDS)

    def start_timer(self) -> None:
        timer = self._timer()
        module = self._state.active_module
        if timer is None or module is None or module.intent is not IntentId.TIMER:
            return
        logger.info("[timer] start %s", timer.label)
        self._set_timer(dataclasses.replace(timer, is_running=True))
        self._start_interval()

    def toggle_timer(self) -> None:
        timer = self._timer()
        if timer is None:
            return
        if timer.is_running:
            self._clear_timer()
            logger.info("[timer] pause remaining=%ds", timer.remaining_seconds)
            self._set_timer(dataclasses.replace(timer, is_running=False))
            return
        if timer.is_complete:
            return
        logger.info("[timer] resume remaining=%ds", timer.remaining_seconds)
        self._set_timer(dataclasses.replace(timer, is_running=True))
        self._start_interval()

    def reset_timer(self) -> None:
        self._clear_timer()
        timer = self._timer()
        if timer is not None:
            self._set_timer(reset_timer_state(timer))

    def set_timer_duration(self, seconds: int) -> None:
        if seconds <= 0:
            return
        self._clear_timer()
        module = self._state.active_module
        if self._state.mode is not PanelMode.MODULE or module is None or module.intent is not IntentId.TIMER:
            return
        self._set_timer(timer_for_seconds(seconds))

    def _tick(self) -> None:
        timer = self._timer()
        if timer is None or not timer.is_running:
            self._clear_timer()
            return
        updated = tick_timer(timer)
        if updated.is_complete:
            self._clear_timer()
            logger.info("[timer] complete %s", timer.label)
            self._notify_complete(timer.label)
        self._set_timer(updated)

    def _notify_complete(self, label: str) -> None:
        if not self._notifications_enabled or self._notifications is None:
            return
        self._notifications.notify(TIMER_NOTIFICATION_TITLE, f"{label} timer complete!")


__all__ = ["ContourEngine", "TIMER_NOTIFICATION_TITLE", "get_module_copy_value"]

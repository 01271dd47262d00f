"""Interactive pomodoro runner."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.prompt import Confirm

from pomoclock.core.controller import PhaseController
from pomoclock.core.factory import get_phase_controller
from pomoclock.ui.display import TimerDisplay, show_exit_message
from pomoclock.ui.keyboard import get_keyboard_handler
from pomoclock.utils.console import get_console

from .decorators import command_wrapper

logger = logging.getLogger("pomoclock.run")

KEYS_INVOKE = (" ", "t")
KEY_PAUSE = "p"
KEY_KILL = "k"
KEY_QUIT = "q"
POLL_SECONDS = 0.1


class InteractiveRunner:
    """Maps keypresses onto controller commands and keeps the panel live.

    Runs entirely on the event loop thread that also services the tick
    trigger, so controller state is never touched concurrently.
    """

    def __init__(self, controller: PhaseController, keyboard, console: Console):
        self.controller = controller
        self.keyboard = keyboard
        self.console = console
        self.display = TimerDisplay(console)
        self._live: Live | None = None

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question with the live panel and cbreak mode suspended."""
        # Blocks the loop: a deadline that passes while the prompt is open is
        # applied by the first tick after it closes.
        if self._live is not None:
            self._live.stop()
        self.keyboard.stop()
        try:
            return Confirm.ask(question, default=False, console=self.console)
        finally:
            self.keyboard.start()
            if self._live is not None:
                self._live.start()

    def handle_key(self, key: str, task: str | None) -> bool:
        """Apply ``key``; returns False when the user asked to quit."""
        if key in KEYS_INVOKE:
            self.controller.invoke(task)
        elif key == KEY_PAUSE:
            self.controller.toggle_pause()
        elif key == KEY_KILL:
            if self.controller.is_active:
                self.controller.kill()
        elif key == KEY_QUIT:
            return False
        return True

    def render(self):
        return self.display.render(
            self.controller.snapshot(),
            self.controller.config.durations,
            self.controller.status_text,
        )

    async def run(self, task: str | None, autostart: bool = True) -> None:
        try:
            with Live(self.render(), console=self.console, refresh_per_second=4) as live:
                self._live = live
                if autostart:
                    self.controller.invoke(task)
                while True:
                    key = self.keyboard.get_key()
                    if key and not self.handle_key(key, task):
                        break
                    live.update(self.render())
                    await asyncio.sleep(POLL_SECONDS)
        finally:
            self._live = None
            self.keyboard.stop()
            if self.controller.is_active and not self.controller.state.paused:
                # Keep the clocked time but stop the clock before the process exits
                logger.info("runner exiting with an active timer; pausing it")
                self.controller.pause()


@command_wrapper
async def run_timer(
    task: Optional[str] = typer.Argument(
        None, help="Task to clock in on; defaults to the last clocked task"
    ),
    no_start: bool = typer.Option(
        False, "--no-start", help="Open the timer without starting a pomodoro"
    ),
) -> None:
    """Run the pomodoro timer interactively.

    Keys: space/t start, stop or take a break; p pause/resume; k kill; q quit.
    """
    task = (task or "").strip() or None
    console = get_console()
    controller = get_phase_controller()
    runner = InteractiveRunner(controller, get_keyboard_handler(), console)
    controller.confirm = runner.confirm

    await runner.run(task, autostart=not no_start)
    show_exit_message(controller.snapshot(), console)

"""Global modifier-key listener (works when the overlay does not have focus).

Uses the 'keyboard' library with a low-level hook (keyboard.hook) so the
modifier is seen even while the game window is focused. Emits only on
transitions: one signal when the modifier goes down, one when it comes up.
Left and right variants of a modifier count as the same key.
"""
from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from raid_squares.input.keys import normalize_key_token

logger = logging.getLogger(__name__)


class _ModifierHookThread(QThread):
    """Runs keyboard.hook and reports down/up transitions of one modifier."""

    changed = pyqtSignal(bool)

    def __init__(self, modifier: str, parent: QObject | None = None):
        super().__init__(parent)
        self._modifier = normalize_key_token(modifier)
        self._running = True
        self._hook = None
        self._down = False

    def run(self) -> None:
        try:
            import keyboard
        except ImportError:
            logger.warning(
                "keyboard library not installed; drag modifier disabled. "
                "Install with: pip install keyboard"
            )
            return

        # Both physical keys (left/right) can be held; released only when both are up.
        held_names: set[str] = set()

        def on_event(event):
            if not self._running:
                return
            name = getattr(event, "name", None)
            if not name or normalize_key_token(name) != self._modifier:
                return
            raw = str(name).strip().lower()
            if event.event_type == keyboard.KEY_DOWN:
                held_names.add(raw)
            elif event.event_type == keyboard.KEY_UP:
                held_names.discard(raw)
            else:
                return
            down = bool(held_names)
            if down != self._down:
                self._down = down
                self.changed.emit(down)

        try:
            self._hook = keyboard.hook(on_event)
        except Exception as e:
            logger.warning("keyboard hook failed; drag modifier disabled: %s", e)
            return

        while self._running:
            self.msleep(200)

        if self._hook is not None:
            try:
                keyboard.unhook(self._hook)
            except Exception as e:
                logger.debug("keyboard unhook failed: %s", e)
            self._hook = None

    def stop(self) -> None:
        self._running = False


class ModifierListener(QObject):
    """Starts a background thread that emits modifier_changed(bool) on each press/release."""

    modifier_changed = pyqtSignal(bool)

    def __init__(self, modifier: str, parent: QObject | None = None):
        super().__init__(parent)
        self._modifier = modifier
        self._thread: _ModifierHookThread | None = None

    def start(self) -> None:
        if self._thread is not None and self._thread.isRunning():
            return
        self._thread = _ModifierHookThread(self._modifier, self)
        self._thread.changed.connect(self.modifier_changed.emit)
        self._thread.start()
        logger.info("Listening for drag modifier %r", normalize_key_token(self._modifier))

    def stop(self) -> None:
        if self._thread is not None:
            self._thread.stop()
            self._thread.wait(2000)
            self._thread = None

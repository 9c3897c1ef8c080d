"""Raid Squares — Main entry point.

Wires together: game state → refresh pipeline → squares overlay.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from PyQt6.QtCore import QElapsedTimer, QTimer
from PyQt6.QtWidgets import QApplication

from raid_squares.engine import RefreshPipeline
from raid_squares.input.keys import format_modifier_for_display
from raid_squares.input.modifier_listener import ModifierListener
from raid_squares.models import AppConfig, GameEvent, GroupMode
from raid_squares.overlay import SquaresOverlay
from raid_squares.provider import DemoRaidSimulator, InMemoryGameState

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent / "config" / "default_config.json"

DEMO_STEP_MS = 200


def load_config(path: Path = CONFIG_PATH) -> AppConfig:
    """Load config from JSON, falling back to defaults."""
    if path.exists():
        with open(path) as f:
            data = json.load(f)
        logger.info(f"Loaded config from {path}")
        return AppConfig.from_dict(data)
    logger.warning(f"Config not found at {path}, using defaults")
    return AppConfig()


def main() -> None:
    config = load_config()

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    # --- Game state ---
    state = InMemoryGameState()
    simulator = None
    if config.demo_enabled:
        simulator = DemoRaidSimulator(
            state,
            group_mode=GroupMode(config.demo_group_mode),
            member_count=config.demo_member_count,
            seed=config.demo_seed,
        )
    else:
        logger.warning("Demo disabled and no game client connected; grid will stay empty")

    # --- Overlay and pipeline ---
    overlay = SquaresOverlay(config)
    screen = app.primaryScreen()
    if screen is not None:
        overlay.center_on(screen.availableGeometry())

    pipeline = RefreshPipeline(config, state, overlay)
    overlay.slot_clicked.connect(pipeline.target_slot)
    pipeline.start()
    overlay.show()

    if simulator is not None:
        pipeline.post(simulator.populate())

        def demo_step() -> None:
            for event in simulator.step():
                pipeline.post(event)

        demo_timer = QTimer()
        demo_timer.timeout.connect(demo_step)
        demo_timer.start(DEMO_STEP_MS)

    # --- Drag modifier ---
    modifier_listener = ModifierListener(config.drag_modifier)
    modifier_listener.modifier_changed.connect(
        lambda down: pipeline.post(GameEvent.modifier_state(down))
    )
    modifier_listener.start()
    logger.info(
        "Hold %s and drag with the left mouse button to move the grid",
        format_modifier_for_display(config.drag_modifier),
    )

    # --- Frame timer: variable deltas feed the throttled tick ---
    clock = QElapsedTimer()
    clock.start()

    def on_frame() -> None:
        try:
            elapsed = clock.restart() / 1000.0
            pipeline.advance(elapsed)
        except Exception as e:
            logger.error(f"Frame update error: {e}", exc_info=True)

    frame_timer = QTimer()
    frame_timer.timeout.connect(on_frame)
    frame_timer.start(config.frame_interval_ms)

    # --- Run ---
    exit_code = app.exec()

    # Cleanup
    frame_timer.stop()
    modifier_listener.stop()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

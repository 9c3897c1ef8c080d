from raid_squares.engine.damage_memory import DamageMemory
from raid_squares.engine.health_scale import HealthScaler, health_fraction
from raid_squares.engine.pipeline import RefreshPipeline, SlotRenderer
from raid_squares.engine.slot_assigner import SlotAssigner
from raid_squares.engine.tick import TickThrottle
from raid_squares.engine.visual_state import VisualStateComputer

__all__ = [
    "DamageMemory",
    "HealthScaler",
    "RefreshPipeline",
    "SlotAssigner",
    "SlotRenderer",
    "TickThrottle",
    "VisualStateComputer",
    "health_fraction",
]

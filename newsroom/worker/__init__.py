from .sweep import ScheduleSweep, SweepReport
from .scheduler import SweepScheduler

__all__ = ["ScheduleSweep", "SweepReport", "SweepScheduler"]

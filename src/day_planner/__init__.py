"""Console day planner: tasks, notes, weather and productivity stats."""

__version__ = "0.1.0"

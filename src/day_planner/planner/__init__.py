"""
Planner subsystem.

Components:
- models.py: data structures (Task, Category, Priority, PlannerSettings)
- store.py: SQLite key-value store + tasks/settings/notes slots
- controller.py: owns the in-memory state, mutations persist immediately
- views.py: pure schedule/statistics derivation
- transfer.py: JSON export/import of the task list
- timers.py: clock tick + weather refresh loops
"""

"""HR portal client: REST services and the weekly timesheet register."""

__version__ = "1.0.0"

# Rev 0.1.0
"""ganttZ: project timeline dashboard with meeting-driven task proposals."""

__version__ = "0.1.0"

# Rev 0.1.0
# ganttz/ui/themes.py: design themes (stylesheet + badge colours)
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

# (foreground, background)
Colors = Tuple[str, str]


@dataclass(frozen=True)
class Theme:
    key: str
    name: str
    description: str
    window_bg: str
    card_bg: str
    text: str
    border: str
    accent: str
    bar: str
    priority: Dict[str, str] = field(default_factory=dict)
    status: Dict[str, Colors] = field(default_factory=dict)

    def stylesheet(self) -> str:
        return (
            f"QMainWindow, QDialog {{ background-color: {self.window_bg}; }}"
            f"QWidget {{ color: {self.text}; }}"
            f"QFrame#Card {{ background-color: {self.card_bg}; border: 1px solid {self.border}; border-radius: 8px; }}"
            f"QLabel#CardTitle {{ font-size: 15px; font-weight: 600; color: {self.accent}; }}"
            f"QLabel[dim=\"true\"] {{ color: {self.border}; }}"
            f"QTabBar::tab:selected {{ color: {self.accent}; }}"
        )

    def priority_color(self, priority: str) -> str:
        return self.priority.get(priority, "#6b7280")

    def status_colors(self, status: str) -> Colors:
        return self.status.get(status, ("#1f2937", "#f3f4f6"))


_DEFAULT_STATUS: Dict[str, Colors] = {
    "Completed": ("#166534", "#dcfce7"),
    "In Progress": ("#1e40af", "#dbeafe"),
    "Not Started": ("#1f2937", "#f3f4f6"),
    "Delayed": ("#9a3412", "#ffedd5"),
    "Blocked": ("#991b1b", "#fee2e2"),
}

THEMES: Dict[str, Theme] = {
    "default": Theme(
        "default", "Default", "Clean and professional",
        window_bg="#ffffff", card_bg="#ffffff", text="#111827", border="#e5e7eb",
        accent="#111827", bar="#2563eb",
        priority={"High": "#ef4444", "Medium": "#eab308", "Low": "#22c55e"},
        status=_DEFAULT_STATUS,
    ),
    "modern": Theme(
        "modern", "Modern", "Gradients and glass effects",
        window_bg="#eef2ff", card_bg="#ffffff", text="#0f172a", border="#c7d2fe",
        accent="#2563eb", bar="#7c3aed",
        priority={"High": "#ec4899", "Medium": "#f97316", "Low": "#10b981"},
        status=_DEFAULT_STATUS,
    ),
    "minimal": Theme(
        "minimal", "Minimal", "Simple and focused",
        window_bg="#f9fafb", card_bg="#ffffff", text="#111827", border="#e5e7eb",
        accent="#111827", bar="#4b5563",
        priority={"High": "#1f2937", "Medium": "#4b5563", "Low": "#9ca3af"},
        status={k: ("#374151", "#f3f4f6") for k in _DEFAULT_STATUS},
    ),
    "corporate": Theme(
        "corporate", "Corporate", "Professional business style",
        window_bg="#f1f5f9", card_bg="#ffffff", text="#1e293b", border="#cbd5e1",
        accent="#334155", bar="#1e40af",
        priority={"High": "#dc2626", "Medium": "#d97706", "Low": "#16a34a"},
        status={
            "Completed": ("#15803d", "#f0fdf4"),
            "In Progress": ("#1d4ed8", "#eff6ff"),
            "Not Started": ("#334155", "#f8fafc"),
            "Delayed": ("#b45309", "#fffbeb"),
            "Blocked": ("#b91c1c", "#fef2f2"),
        },
    ),
    "dark": Theme(
        "dark", "Dark", "Easy on the eyes",
        window_bg="#111827", card_bg="#1f2937", text="#f9fafb", border="#374151",
        accent="#60a5fa", bar="#2563eb",
        priority={"High": "#f87171", "Medium": "#facc15", "Low": "#4ade80"},
        status={
            "Completed": ("#86efac", "#14532d"),
            "In Progress": ("#93c5fd", "#1e3a8a"),
            "Not Started": ("#d1d5db", "#1f2937"),
            "Delayed": ("#fdba74", "#7c2d12"),
            "Blocked": ("#fca5a5", "#7f1d1d"),
        },
    ),
}


def get_theme(key: str) -> Theme:
    return THEMES.get(key, THEMES["default"])

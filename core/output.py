"""
Styled Output System - Prefixed console messages with severity colors.
"""

from rich.console import Console
from rich.style import Style

# Color palette
COLORS = {
    "green": "#22c55e",
    "blue": "#3b82f6",
    "yellow": "#eab308",
    "red": "#ef4444",
    "gray": "#6b7280",
    "white": "#f3f4f6",
    "orange": "#f97316",
    "cyan": "#06b6d4",
}

# Severity styles
SEVERITY_STYLES = {
    "critical": Style(color=COLORS["red"], bold=True),
    "high": Style(color=COLORS["orange"]),
    "medium": Style(color=COLORS["yellow"]),
    "low": Style(color=COLORS["green"]),
    "info": Style(color=COLORS["blue"]),
}

# Global console
_console: Console | None = None


def get_console() -> Console:
    """Get the global console instance"""
    global _console
    if _console is None:
        _console = Console()
    return _console


def severity_style(severity: str) -> Style:
    """Get Rich style for severity level"""
    return SEVERITY_STYLES.get(severity.lower(), SEVERITY_STYLES["info"])


def info(message: str, *args) -> None:
    """Print info message with [*] prefix"""
    msg = message % args if args else message
    get_console().print(f"[bold {COLORS['blue']}][*][/] {msg}")


def success(message: str, *args) -> None:
    """Print success message with [+] prefix"""
    msg = message % args if args else message
    get_console().print(f"[bold {COLORS['green']}][+][/] {msg}")


def warn(message: str, *args) -> None:
    """Print warning message with [!] prefix"""
    msg = message % args if args else message
    get_console().print(f"[bold {COLORS['yellow']}][!][/] {msg}")


def error(message: str, *args) -> None:
    """Print error message with [-] prefix"""
    msg = message % args if args else message
    get_console().print(f"[bold {COLORS['red']}][-][/] {msg}")


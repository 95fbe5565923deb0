"""
Curses front end: renderer, input source and the dashboard main loop.
"""

# Lazy imports to avoid RuntimeWarning when running as python -m futureterm.tui.dashboard


def __getattr__(name):
    """Lazy import handler for module attributes."""
    if name == 'Dashboard':
        from .dashboard import Dashboard
        return Dashboard
    elif name == 'run_dashboard':
        from .dashboard import run_dashboard
        return run_dashboard
    elif name == 'Renderer':
        from .renderer import Renderer
        return Renderer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ['Dashboard', 'run_dashboard', 'Renderer']

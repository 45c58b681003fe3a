"""
CraftyCook client - API client and client-side state for the recipe & DIY sharing service.

Note: Lazily import heavy modules so the pure helpers (splitter, models) load without langgraph.
"""


def build_app(*args, **kwargs):
    from .app import build_app as _build_app
    return _build_app(*args, **kwargs)


def run_quick_create(*args, **kwargs):
    from .workflow import run_quick_create as _run_quick_create
    return _run_quick_create(*args, **kwargs)


__all__ = ["build_app", "run_quick_create"]

from __future__ import annotations

from .loop import UCIEngine, run_uci

__all__ = ["UCIEngine", "run_uci"]

"""Results - exibição do resultado pontuado."""

from .renderer import ResultRenderer, ResultSummary, format_time, load_result

__all__ = ["ResultRenderer", "ResultSummary", "format_time", "load_result"]

"""Static-analysis engines."""

from .base import AnalysisEngine
from .perlcritic import PerlCriticEngine, parse_output

__all__ = ["AnalysisEngine", "PerlCriticEngine", "parse_output"]

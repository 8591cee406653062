from .interval import IntervalReporter, ReportConfig

__all__ = ["IntervalReporter", "ReportConfig"]

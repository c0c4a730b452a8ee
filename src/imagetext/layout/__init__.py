"""Text layout: measurement, wrapping, headline fitting."""

from imagetext.layout.engine import Layout, Placement, Segment, build_layout, line_x
from imagetext.layout.headline import HeadlineResult, fit_headline
from imagetext.layout.linebreak import LineRecord, WrapResult, break_lines, tokenize
from imagetext.layout.metrics import BoundingBox, MetricsProbe, measurement_canvas

__all__ = [
    "BoundingBox",
    "HeadlineResult",
    "Layout",
    "LineRecord",
    "MetricsProbe",
    "Placement",
    "Segment",
    "WrapResult",
    "break_lines",
    "build_layout",
    "fit_headline",
    "line_x",
    "measurement_canvas",
    "tokenize",
]

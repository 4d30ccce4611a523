"""celtic_knots: Generate random Celtic knots as closed, alternating ribbons."""

from celtic_knots.pipeline import generate_knot, Knot
from celtic_knots.knot.tracer import create_art
from celtic_knots.knot.models import Art, Stroke, StrokeType, Vec2

__all__ = ["generate_knot", "Knot", "create_art", "Art", "Stroke", "StrokeType", "Vec2"]

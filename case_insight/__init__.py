"""Case Insight Studio: legal pain-point extraction and marketing content generation."""

__version__ = "0.1.0"

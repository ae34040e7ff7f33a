"""Personal weight tracking with BMI and goal progress."""

__version__ = "0.1.0"

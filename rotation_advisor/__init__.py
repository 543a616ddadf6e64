"""Crop-rotation advisor: soil estimate, family blocking and planting recommendations."""

from rotation_advisor.rotation.advisor import calculate_rotation_advice

__version__ = "0.1.0"

__all__ = ["calculate_rotation_advice", "__version__"]

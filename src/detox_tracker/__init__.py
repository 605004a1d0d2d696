"""CyberDetox Tracker - symptom logging and clearance estimates."""

__version__ = "0.1.0"

"""Static component manifest builder for file-routed React applications."""

__version__ = "0.1.0"

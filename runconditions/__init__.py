"""Ant-style run conditions: file length and operating system checks."""

__version__ = "1.0.0"

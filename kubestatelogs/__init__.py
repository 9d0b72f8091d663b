"""Structured log entries describing the state of Kubernetes objects."""

__version__ = "0.1.0"
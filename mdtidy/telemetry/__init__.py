"""Telemetry and observability helpers.

This package emits phase-level run events for deterministic auditing.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]

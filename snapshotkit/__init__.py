"""Snapshot models, wire messages, conversions and a request wrapper for container snapshotters."""

__version__ = "0.1.0"
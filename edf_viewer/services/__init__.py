"""
Service layer for the EDF viewer.

This package contains service classes that encapsulate loading and windowing
logic, separating it from the command-line and rendering front ends.

Services:
- RecordingService: Recording loading, channel summaries and render windows
"""

from edf_viewer.services.recording_service import RecordingService

__all__ = ['RecordingService']

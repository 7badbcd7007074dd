"""
Feature modules for the race results engine.

Each feature is a self-contained module with:
- models.py - Dataclass models (no I/O)
- schemas.py - Pydantic schemas for reading/writing files
- service.py - Business logic entry points
- report.py - Human-readable text reports (optional)
"""

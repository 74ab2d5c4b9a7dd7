"""Hiring analytics service for the applicant tracking system."""

__version__ = "0.1.0"

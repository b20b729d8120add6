"""Pydantic models for the audit, report, purchase and chat domains."""

"""Snowflake repositories."""

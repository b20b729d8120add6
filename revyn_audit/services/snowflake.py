"""
Snowflake Connection - Revyn Audit Platform
revyn_audit/services/snowflake.py

Connection factory used by the repositories.
"""

import snowflake.connector

from revyn_audit.config import get_settings


def get_snowflake_connection():
    """Open a new Snowflake connection from the configured credentials."""
    return snowflake.connector.connect(**get_settings().snowflake_params)

"""
Revyn Marketing Audit Platform.

Questionnaire scoring, report purchases, AI-written audit reports and the
report chat assistant.
"""

__version__ = "1.0.0"

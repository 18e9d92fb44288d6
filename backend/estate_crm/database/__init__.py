"""
SQLAlchemy models and connection management.
"""

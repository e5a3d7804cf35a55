"""Database Layer — SQLAlchemy declarative Base shared by models and migrations."""

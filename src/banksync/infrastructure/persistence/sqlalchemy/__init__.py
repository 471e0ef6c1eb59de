"""SQLAlchemy persistence: models, repositories, engine and schema setup."""

"""Infrastructure: SQLAlchemy persistence, resource adapters, audit log sinks."""

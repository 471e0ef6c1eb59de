"""Infrastructure layer: adapters for the aggregator and the database."""

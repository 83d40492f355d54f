"""Configuration, logging, errors, field mapping and the database handle."""

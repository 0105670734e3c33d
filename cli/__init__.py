"""CLI package for running and querying the CEP weather services."""

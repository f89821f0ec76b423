"""Core: domain, contracts, configuration and the aggregation service."""

"""Service layer: search, resource catalog and configuration."""

"""Frontend layer: public pages and liveness checks."""

"""Backend layer: administration pages and business modules."""

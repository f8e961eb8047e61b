"""Book catalog API."""

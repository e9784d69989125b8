"""HTTP surface over the script engine."""

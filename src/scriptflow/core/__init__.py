"""Core building blocks shared across Scriptflow modules."""

"""Business logic for contributions app."""

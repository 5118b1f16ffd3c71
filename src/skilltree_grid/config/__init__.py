"""Grid sizing and styling configuration."""

"""Desktop terminal application."""

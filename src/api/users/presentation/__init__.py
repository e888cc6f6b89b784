"""HTTP presentation layer of the users context."""

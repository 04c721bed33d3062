"""IndexNode API package."""

"""Circuit builder, client and exception types."""

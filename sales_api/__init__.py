"""Monthly sales dashboard API."""

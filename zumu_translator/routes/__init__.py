"""UI bridge routes."""

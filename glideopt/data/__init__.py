"""Track and task data types plus synthetic track generation."""

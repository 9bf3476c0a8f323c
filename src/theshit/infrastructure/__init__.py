"""Infrastructure layer — subprocess access for capturing command output."""

"""lab_tools package."""

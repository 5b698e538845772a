"""lab_tools/config package."""

"""lab_tools/storage package."""

"""lab_tools/cli package."""

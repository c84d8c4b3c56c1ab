"""Administrator-defined zoning rules."""

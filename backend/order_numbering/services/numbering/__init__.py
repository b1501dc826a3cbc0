"""Order number generation: formatting, allocation, uniqueness and routing."""

"""Column access resolution."""

"""Detection rules, one module per category."""

"""Cross-study alignment, p-value combination and significance calls."""

"""Study table loading and validation."""

"""Grid generation, coordinate mapping and agent stepping."""

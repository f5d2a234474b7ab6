"""Commands of the wt CLI."""

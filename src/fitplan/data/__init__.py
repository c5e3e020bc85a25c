"""Goal vocabulary and catalog loading."""

"""Strategic piece values for chess positions."""

"""Foundation layer: task contracts, errors, configuration and test doubles."""

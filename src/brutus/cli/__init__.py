"""brutus command line interface."""

"""pmsync command-line interface."""

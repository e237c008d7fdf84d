"""KennelDesk operations dashboard: slideout navigation core."""

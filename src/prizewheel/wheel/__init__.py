"""Prize wheel component and targeting math."""

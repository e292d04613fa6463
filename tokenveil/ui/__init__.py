"""Terminal rendering for tokenveil."""

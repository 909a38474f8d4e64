"""Four Pillars (BaZi) chart engine."""

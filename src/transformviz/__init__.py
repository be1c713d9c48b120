"""Interactive 2D linear/projective transformation visualizer."""

"""Query engine core: document sources, traversal, matchers, and response shaping."""

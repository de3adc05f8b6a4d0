"""Distance, clustering, scaling and reordering transforms."""

"""Simulated annealing search for high-scoring point placements over a track."""

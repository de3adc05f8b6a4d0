"""Coordinate layout for dendrograms."""

"""Boundary adapters: database, object storage and the remote image model."""

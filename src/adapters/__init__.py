"""Concrete collaborators and exporters."""

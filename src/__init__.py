"""Lorebook builder."""

"""Audit agents and their reporters."""

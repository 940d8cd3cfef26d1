"""Utility modules for run conditions."""

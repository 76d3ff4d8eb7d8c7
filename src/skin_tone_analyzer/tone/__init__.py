"""Skin tone labels: low-light correction and recommendation lookup."""

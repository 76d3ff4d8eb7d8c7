"""Wrappers around the face detection and tone classification models."""

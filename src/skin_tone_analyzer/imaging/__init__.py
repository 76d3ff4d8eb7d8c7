"""Decoding, cropping and luminance of uploaded photos."""

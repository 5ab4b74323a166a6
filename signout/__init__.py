"""Signout census engine: segmentation and field extraction for hospitalist signout notes."""

__version__ = "0.1.0"

"""Utility helpers for nnlite."""

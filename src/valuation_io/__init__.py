"""Assumption file readers and bundle writers."""

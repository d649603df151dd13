"""Utility helpers for valueparams."""

"""Streamlit adapter package."""

__all__ = []

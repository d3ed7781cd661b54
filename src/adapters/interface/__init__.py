"""Interface adapters (Streamlit)."""

__all__ = []

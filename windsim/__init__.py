"""Wind velocity time histories by the Wittig & Sinha discrete frequency method."""

__version__ = "0.1.0"
__all__ = ["wittig_sinha"]
"""Console bank for accounts, personal and home loans, and EMI payments."""

__version__ = "0.1.0"
__all__ = ["__version__"]
"""Dense matrix algebra, matrix expressions, vector helpers and string utilities."""

__version__ = "0.1.0"

__all__ = ["matrix", "vectors", "linalg", "matexpr", "textutil"]
"""Craftly marketplace: FastAPI service over Firestore plus a Python client SDK."""

__version__ = "1.0.0"

# catalog/errors.py
"""
Taxonomia de erori a catalogului.

Serviciile doar clasifică și ridică; maparea pe coduri HTTP (și logarea)
se face într-un singur exception handler în `catalog.main`.
"""
from __future__ import annotations


class CatalogError(Exception):
    """Baza pentru toate erorile de domeniu."""
    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(CatalogError):
    """Input lipsă sau invalid; detectat înainte de orice tranzacție."""
    status_code = 400
    default_message = "Missing required fields"


class ConflictError(CatalogError):
    """SKU duplicat (după criptare deterministă)."""
    status_code = 409
    default_message = "Duplicate SKU is not allowed"


class NotFoundError(CatalogError):
    """Produs/categorie/material inexistent."""
    status_code = 404
    default_message = "Not found"


class CipherError(CatalogError):
    """Ciphertext corupt sau cheie invalidă."""
    status_code = 500
    default_message = "Cipher failure"


class PersistenceError(CatalogError):
    """Orice eșec la nivel de DB (conexiune, constrângere, abort tranzacție)."""
    status_code = 500
    default_message = "Server error"


__all__ = [
    "CatalogError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "CipherError",
    "PersistenceError",
]

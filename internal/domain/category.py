"""
Domain model for product categories.

Categories are referenced (not owned) by products and must exist before a
product can point at them.
"""
from dataclasses import dataclass
from typing import Optional

from .errors import DomainValidationError


@dataclass
class Category:
    """
    Category entity.

    Attributes:
        id: Store-assigned identifier (0 until persisted).
        name: Display name.
        description: Optional free text.
    """
    id: int = 0
    name: str = ""
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise DomainValidationError("El nombre de la categoría es obligatorio")
        if len(self.name) > 255:
            raise DomainValidationError("El nombre de la categoría debe tener como máximo 255 caracteres")

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }

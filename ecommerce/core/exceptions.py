"""Exceptions communes à tous les domaines."""
from typing import Any


class DomainException(Exception):
    """Classe de base pour les exceptions du domaine."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class EntityNotFoundException(DomainException):
    """Levée lorsqu'une entité n'existe pas dans le stockage."""
    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(f"{entity_name} avec ID {entity_id} non trouvé(e).")
        self.entity_name = entity_name
        self.entity_id = entity_id


class ConstraintViolationException(DomainException):
    """Levée lorsqu'une écriture viole une contrainte (clé étrangère, unicité...)."""
    def __init__(self, entity_name: str, entity_id: Any, detail: str = ""):
        message = f"Contrainte violée pour {entity_name} ID {entity_id}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.entity_name = entity_name
        self.entity_id = entity_id

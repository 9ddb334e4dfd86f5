"""Exceptions spécifiques au domaine Customer."""
from ecommerce.core.exceptions import (
    DomainException, EntityNotFoundException, ConstraintViolationException
)


class CustomerDomainException(DomainException):
    """Classe de base pour les exceptions du domaine Customer."""
    pass


class CustomerNotFoundException(EntityNotFoundException):
    """Levée lorsqu'un client spécifique n'est pas trouvé."""
    def __init__(self, customer_id: str):
        super().__init__("Client", customer_id)
        self.customer_id = customer_id


class CustomerConstraintViolationException(ConstraintViolationException):
    """Levée lorsque l'écriture d'un client viole une contrainte (ID dupliqué...)."""
    def __init__(self, customer_id: str, detail: str = ""):
        super().__init__("Client", customer_id, detail)
        self.customer_id = customer_id


class CustomerAddressRequiredException(CustomerDomainException):
    """Levée lors de l'activation d'un client sans adresse."""
    def __init__(self, customer_id: str):
        super().__init__(f"Le client {customer_id} doit avoir une adresse pour être activé.")
        self.customer_id = customer_id

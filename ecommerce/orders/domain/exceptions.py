"""Exceptions spécifiques au domaine Order."""
from ecommerce.core.exceptions import (
    DomainException, EntityNotFoundException, ConstraintViolationException
)


class OrderDomainException(DomainException):
    """Classe de base pour les exceptions du domaine Order."""
    pass


class OrderNotFoundException(EntityNotFoundException):
    """Levée lorsqu'une commande spécifique n'est pas trouvée."""
    def __init__(self, order_id: str):
        super().__init__("Commande", order_id)
        self.order_id = order_id


class OrderConstraintViolationException(ConstraintViolationException):
    """Levée lorsqu'une commande référence un client/produit inexistant ou un ID déjà pris."""
    def __init__(self, order_id: str, detail: str = ""):
        super().__init__("Commande", order_id, detail)
        self.order_id = order_id


class EmptyOrderException(OrderDomainException):
    """Levée lorsqu'une commande est passée sans aucun article."""
    def __init__(self, customer_id: str):
        super().__init__(f"Impossible de passer une commande vide pour le client {customer_id}.")
        self.customer_id = customer_id

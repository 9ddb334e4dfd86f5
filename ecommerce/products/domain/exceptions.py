"""Exceptions spécifiques au domaine Product."""
from ecommerce.core.exceptions import EntityNotFoundException, ConstraintViolationException


class ProductNotFoundException(EntityNotFoundException):
    """Levée lorsqu'un produit spécifique n'est pas trouvé."""
    def __init__(self, product_id: str):
        super().__init__("Produit", product_id)
        self.product_id = product_id


class ProductConstraintViolationException(ConstraintViolationException):
    """Levée lorsque l'écriture d'un produit viole une contrainte (ID dupliqué...)."""
    def __init__(self, product_id: str, detail: str = ""):
        super().__init__("Produit", product_id, detail)
        self.product_id = product_id

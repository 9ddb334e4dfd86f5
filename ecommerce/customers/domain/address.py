from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Objet valeur: adresse postale, définie uniquement par ses attributs."""
    model_config = ConfigDict(frozen=True)

    street: str = Field(..., min_length=1, max_length=255)
    number: int = Field(..., ge=0)
    zipcode: str = Field(..., min_length=1, max_length=20)
    city: str = Field(..., min_length=1, max_length=100)

    def __str__(self) -> str:
        return f"{self.street}, {self.number}, {self.zipcode} {self.city}"

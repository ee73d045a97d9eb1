from pydantic import BaseModel, Field
from uuid import UUID

class Customer(BaseModel):
    id: UUID = Field(
        ...,
        examples=["3958dc9e-712f-4377-85e9-fec4b6a6442a"],
        description="Customer UUID"
    )
    name: str = Field(
        ...,
        examples=["Delba de Oliveira"],
        description="Display name shown in the invoice form's customer picker"
    )

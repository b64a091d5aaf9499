# taskboard/models/user.py
from typing import Dict

from pydantic import BaseModel, Field


class User(BaseModel):
    id: str
    email: str
    name: str
    password_hash: str = Field(alias="passwordHash")

    class Config:
        populate_by_name = True

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)

    def public(self) -> Dict[str, str]:
        """Fields safe to return to a client (and to put in a token)."""
        return {"id": self.id, "email": self.email, "name": self.name}

# taskboard/models/project.py
from pydantic import BaseModel, Field


class Project(BaseModel):
    id: str
    name: str
    description: str = ""
    owner_id: str = Field(alias="ownerId")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    class Config:
        populate_by_name = True

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)

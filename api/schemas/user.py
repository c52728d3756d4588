# api/schemas/user.py
from uuid import UUID
from pydantic import BaseModel, ConfigDict

class UserBase(BaseModel):
    name: str

class User(UserBase):
    id: UUID
    public_ongoing: bool
    
    model_config = ConfigDict(from_attributes=True)

class ProfileUpdate(BaseModel):
    public_ongoing: bool

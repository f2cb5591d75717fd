from pydantic import BaseModel, Field


class ProfileView(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


class ProfileUpdate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., max_length=120)
    phone: str | None = None
    address: str | None = None


class ProfilePage(BaseModel):
    profile: ProfileView
    messages: list[dict] = []

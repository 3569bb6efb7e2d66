"""Pydantic DTOs for account signup."""

from pydantic import BaseModel


class SignupRequest(BaseModel):
    """Fields default to "" so a missing one is reported with a readable 400."""

    email: str = ""
    password: str = ""
    name: str = ""


class SignupUser(BaseModel):
    id: str
    email: str
    name: str


class SignupResponse(BaseModel):
    message: str
    user: SignupUser

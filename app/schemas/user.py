from pydantic import ConfigDict
from sqlmodel import SQLModel


class LoginRequest(SQLModel):
    """
    Payload for POST /login.

    Absent fields are empty strings and fail the credential check.
    """

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    password: str = ""

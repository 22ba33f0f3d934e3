from pydantic import BaseModel


class Credentials(BaseModel):
    """Body of the register and login endpoints. Emptiness is checked by the service."""
    username: str = ""
    password: str = ""


class Token(BaseModel):
    token: str


class Message(BaseModel):
    message: str

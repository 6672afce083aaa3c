from enum import Enum

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    USER = "USER"
    TRAINER = "TRAINER"
    ADMIN = "ADMIN"


class UserBase(SQLModel):
    email: str = Field(unique=True, index=True)
    first_name: str
    last_name: str
    role: UserRole = Field(default=UserRole.USER, index=True)
    # Trainer profile fields
    specialization: str | None = None
    description: str | None = None
    price_per_session: float | None = None


class User(UserBase, table=True):
    __tablename__ = "users"
    id: int | None = Field(default=None, primary_key=True)
    hashed_password: str | None = None  # managed by the identity service

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Shopper account used by /login.

    Rows are created outside this service. The password is stored and
    compared verbatim; there is no hashing scheme.
    """

    __tablename__ = "order_app_api_user"

    user_name: str = Field(
        primary_key=True,
        description="Unique login name",
    )

    user_password: str = Field(
        description="Stored as-is",
    )

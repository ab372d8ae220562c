# myflix/schemas/user.py
from datetime import date
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from myflix.models.user import User

USERNAME_MIN_LENGTH = 5


class UserSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


def username_violations(value: Optional[str]) -> List[str]:
    """
    Every username rule the value breaks, in the order they are reported.
    """
    value = value or ""
    violations = []
    if len(value) < USERNAME_MIN_LENGTH:
        violations.append(
            f"Username requires a minimum length of {USERNAME_MIN_LENGTH} characters."
        )
    if not value:
        violations.append("Username is required.")
    if not (value.isascii() and value.isalnum()):
        violations.append("Username contains non alphanumeric characters - not allowed.")
    return violations


def password_violations(value: Optional[str]) -> List[str]:
    return [] if value else ["Password is required."]


def normalize_email(value: Optional[str]) -> Optional[str]:
    """Normalized address, or None when the value is not a valid e-mail."""
    try:
        return validate_email(value or "", check_deliverability=False).normalized
    except EmailNotValidError:
        return None


def email_violations(value: Optional[str]) -> List[str]:
    return [] if normalize_email(value) else ["Email does not appear to be valid."]


RULES = {
    "username": username_violations,
    "password": password_violations,
    "email": email_violations,
}


class UserInput(UserSchema):
    # fields stay optional here so a missing one is reported by its rule
    # message rather than a generic "Field required"
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    birthday: Optional[date] = None

    def checked_fields(self) -> List[str]:
        return list(RULES)

    def rule_violations(self) -> List[dict]:
        """
        One error per broken rule, shaped like pydantic's own errors so the
        422 handler renders both the same way.
        """
        errors = []
        for name in self.checked_fields():
            alias = type(self).model_fields[name].alias
            for msg in RULES[name](getattr(self, name)):
                errors.append({"loc": ("body", alias), "msg": msg, "type": "value_error"})
        if not errors and self.email is not None:
            self.email = normalize_email(self.email)
        return errors


class UserCreate(UserInput):
    pass


class UserUpdate(UserInput):
    """
    Partial profile update: only the fields present in the body are changed
    and only those are checked.
    """

    def checked_fields(self) -> List[str]:
        return [name for name in RULES if getattr(self, name) is not None]


class UserRead(UserSchema):
    id: str = Field(alias="_id")
    username: str
    email: str
    birthday: Optional[date] = None
    favorite_movies: List[str] = []

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            birthday=user.birthday,
            favorite_movies=user.favorite_movie_ids,
        )


class LoginRequest(UserSchema):
    username: str
    password: str


class LoginResponse(BaseModel):
    user: UserRead
    token: str

"""Authentication domain types."""

from dataclasses import dataclass, field

from domain.user import Location


@dataclass
class LoginInput:
    email: str
    password: str
    location: Location = field(default_factory=Location)

    def validate(self) -> None:
        if not self.email:
            raise ValueError("email is a required field")
        if not self.password:
            raise ValueError("password is a required field")
        self.location.validate()

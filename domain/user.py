"""User domain types and their validation rules."""

import re
from dataclasses import dataclass, field
from enum import Enum

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email_address

MINIMUM_AGE = 18
MAXIMUM_AGE = 120
# Ids are stored in int4 columns
MAXIMUM_ID = 2**31 - 1
MINIMUM_PASSWORD_LENGTH = 8
MAXIMUM_PASSWORD_BYTES = 72  # bcrypt ignores anything past this
MINIMUM_LAT, MAXIMUM_LAT = -90.0, 90.0
MINIMUM_LON, MAXIMUM_LON = -180.0, 180.0

_WHITESPACE = re.compile(r"\s")


class Gender(str, Enum):
    """A person's gender. ``UNDEFINED`` marks a missing or unknown value."""

    UNDEFINED = "undefined"
    UNSPECIFIED = "unspecified"
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: str | None) -> "Gender":
        """Parse a gender string, unknown values become ``UNDEFINED``."""
        try:
            gender = cls(value)
        except ValueError:
            return cls.UNDEFINED
        return gender

    @classmethod
    def defined(cls) -> list["Gender"]:
        return [g for g in cls if g is not cls.UNDEFINED]

    def validate(self) -> None:
        if self is Gender.UNDEFINED:
            names = ", ".join(g.value for g in Gender.defined())
            raise ValueError(f"invalid gender, valid values are: {names}")


class SortType(str, Enum):
    """Ordering applied to discover results."""

    DISTANCE = "distance"
    ATTRACTIVENESS = "attractiveness"

    @classmethod
    def parse(cls, value: str | None) -> "SortType":
        """Parse a sort query value, empty means distance."""
        if not value:
            return cls.DISTANCE
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"invalid sort type, valid values are: {names}") from None


@dataclass(frozen=True)
class Location:
    """A WGS-84 point, longitude first."""

    lon: float = 0.0
    lat: float = 0.0

    def validate(self) -> None:
        if not MINIMUM_LAT <= self.lat <= MAXIMUM_LAT:
            raise ValueError("location latitude is out of range")
        if not MINIMUM_LON <= self.lon <= MAXIMUM_LON:
            raise ValueError("location longitude is out of range")

    def to_wkt(self) -> str:
        return f"SRID=4326;POINT({self.lon} {self.lat})"


@dataclass
class User:
    """All of a user's stored details. ``password`` holds the bcrypt hash."""

    id: int
    email: str
    password: str
    name: str
    gender: Gender
    age: int
    location: Location = field(default_factory=Location)


@dataclass
class UserDetails:
    """Public user details returned from discover. Distance is in kilometres."""

    id: int
    name: str
    gender: Gender
    age: int
    distance_from_me: float


@dataclass
class CreateUserInput:
    email: str
    password: str
    name: str
    gender: str
    age: int
    location: Location = field(default_factory=Location)

    def validate(self) -> None:
        if not self.email:
            raise ValueError("email is a required field")
        validate_email(self.email)

        if not self.password:
            raise ValueError("password is a required field")
        validate_password(self.password)

        if not self.name:
            raise ValueError("name is a required field")

        Gender.parse(self.gender).validate()

        if self.age < MINIMUM_AGE:
            raise ValueError(f"the minimum age is {MINIMUM_AGE}")
        if self.age > MAXIMUM_AGE:
            raise ValueError(f"the maximum age is {MAXIMUM_AGE}")

        self.location.validate()


@dataclass
class UserFilters:
    """Discover filters. An age bound of 0 means unbounded."""

    max_age: int = 0
    min_age: int = 0
    genders: list[Gender] = field(default_factory=list)

    def validate(self) -> None:
        if self.max_age != 0 and self.max_age < MINIMUM_AGE:
            raise ValueError(f"max age cannot be less than {MINIMUM_AGE}")
        if self.min_age != 0 and self.min_age < MINIMUM_AGE:
            raise ValueError(f"min age cannot be less than {MINIMUM_AGE}")
        if self.max_age > MAXIMUM_AGE:
            raise ValueError(f"max age cannot be greater than {MAXIMUM_AGE}")
        if self.min_age > MAXIMUM_AGE:
            raise ValueError(f"min age cannot be greater than {MAXIMUM_AGE}")
        if self.max_age != 0 and self.min_age != 0 and self.max_age < self.min_age:
            raise ValueError("max age cannot be less than min age")
        for gender in self.genders:
            gender.validate()

    @classmethod
    def from_params(cls, max_age: str | None, min_age: str | None, genders: str | None) -> "UserFilters":
        """Build filters from raw query string values."""
        max_age_int = min_age_int = 0
        if max_age:
            try:
                max_age_int = int(max_age)
            except ValueError:
                raise ValueError("max age must be an integer") from None
        if min_age:
            try:
                min_age_int = int(min_age)
            except ValueError:
                raise ValueError("min age must be an integer") from None

        parsed: list[Gender] = []
        if genders:
            parsed = [Gender.parse(g.strip()) for g in genders.split(",")]

        return cls(max_age=max_age_int, min_age=min_age_int, genders=parsed)


@dataclass
class GetUsersInput:
    user_id: int
    location: Location
    sort_type: SortType = SortType.DISTANCE
    filters: UserFilters | None = None

    def validate(self) -> None:
        if self.user_id == 0:
            raise ValueError("user id is a required field")
        self.location.validate()
        if self.filters is not None:
            self.filters.validate()


def validate_email(email: str) -> None:
    """Check the address is well formed. It is stored exactly as given."""
    if _WHITESPACE.search(email):
        raise ValueError("email cannot contain spaces")

    _, at, domain = email.rpartition("@")
    if at and domain and "." not in domain:
        raise ValueError("invalid email address: missing '.' in email domain")

    try:
        check_email_address(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"invalid email address: {e}") from e


def validate_password(password: str) -> None:
    number = upper = lower = special = False
    for char in password:
        if char.isdigit():
            number = True
        elif char.isupper():
            upper = True
        elif char.isalpha():
            lower = True
        elif char.isprintable() and not char.isspace():
            special = True
        else:
            raise ValueError(f"invalid character: {char!r}")

    if not number:
        raise ValueError("password must contain at least 1 number")
    if not upper:
        raise ValueError("password must contain at least 1 uppercase letter")
    if not lower:
        raise ValueError("password must contain at least 1 lowercase letter")
    if not special:
        raise ValueError("password must contain at least 1 special character")
    if len(password) < MINIMUM_PASSWORD_LENGTH:
        raise ValueError(f"password must contain at least {MINIMUM_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAXIMUM_PASSWORD_BYTES:
        raise ValueError(f"password cannot exceed {MAXIMUM_PASSWORD_BYTES} bytes")

"""Form definitions shared by the test modules."""

from dataclasses import dataclass

from formtree import Failure, Success, email, leaf, record, required, rule, text, validate


@dataclass(frozen=True, slots=True)
class User:
    name: str
    mail: str


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    version: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Release:
    author: User
    package: Package


def parse_version(raw: str):
    try:
        parts = tuple(int(part) for part in raw.split("."))
    except ValueError:
        return Failure("Not a valid version number")
    return Success(parts)


def make_user_form():
    return record(
        User,
        name=validate(rule(required), text()),
        mail=validate(rule(email), text()),
    )


def make_package_form():
    return record(
        Package,
        name=validate(rule(required), text()),
        version=leaf("0.1", parse_version),
    )

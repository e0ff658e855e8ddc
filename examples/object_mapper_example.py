"""Map a user record to a DTO, hiding permissions from non-admin requesters."""

from dataclasses import dataclass
from typing import NotRequired, TypedDict

from exhaustive_mapper import ObjectMapper, OmitProperty, Schema, compose, map_from


@dataclass
class Address:
    street: str
    city: str


@dataclass
class User:
    email: str
    first_name: str
    last_name: str
    permissions: list[str]
    addresses: list[Address]


class AddressDto(TypedDict):
    line: str


class UserDto(TypedDict):
    kind: str
    email: str
    full_name: str
    permissions: NotRequired[list[str]]
    addresses: list[AddressDto]


@dataclass
class Requester:
    is_admin: bool


address_mapper = ObjectMapper(
    Schema({"line": lambda address: f"{address.street}, {address.city}"}, output=AddressDto, input=Address)
)

user_mapper = ObjectMapper(
    Schema(
        {
            "kind": map_from.constant("user"),
            "email": "email",
            "full_name": lambda user: f"{user.first_name} {user.last_name}",
            "permissions": lambda user, requester: user.permissions if requester.is_admin else OmitProperty,
            "addresses": compose.nested_array(address_mapper, lambda user: user.addresses),
        },
        output=UserDto,
        input=User,
        context=Requester,
    )
)


def main() -> None:
    """Map one user for an admin and for a regular requester."""
    user = User(
        email="bobt@pinafore.cruise",
        first_name="Bob",
        last_name="Terwilliger",
        permissions=["delete"],
        addresses=[Address(street="742 Evergreen Terrace", city="Springfield")],
    )
    print("admin view:", user_mapper.map(user, Requester(is_admin=True)))
    print("user view:", user_mapper.map(user, Requester(is_admin=False)))
    print("batch:", user_mapper.array([user, user], Requester(is_admin=False)))


if __name__ == "__main__":
    main()

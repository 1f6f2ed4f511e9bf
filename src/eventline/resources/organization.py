"""
Organization resources.
"""

from __future__ import annotations

from typing import NotRequired, TypedDict, cast

from pydantic import BaseModel, ConfigDict

from eventline.resources.base import ClientFn, Id


class Organization(TypedDict):
    """An organization.

    Attributes:
        id: Identifier of the organization
        name: Name of the organization
        address: Registered address
        postal_code: Postal code of the registered address
        city: City of the registered address
        country: Country of the registered address
        contact_email_address: Primary contact email address
        non_essential_mail_opt_in: Whether non-essential emails are accepted
        vat_id_number: VAT identification number, if any
    """

    id: Id
    name: str
    address: str
    postal_code: str
    city: str
    country: str
    contact_email_address: str
    non_essential_mail_opt_in: bool
    vat_id_number: NotRequired[str]


class GetOrganizationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)


GetOrganizationResponse = Organization


async def get_organization(
    client: ClientFn, request: GetOrganizationRequest | None = None
) -> GetOrganizationResponse:
    """Fetch the organization associated with the credentials in use."""
    return cast(GetOrganizationResponse, await client("GET", "/v0/org"))

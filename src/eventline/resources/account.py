"""
Account resources.
"""

from __future__ import annotations

from typing import Literal, TypedDict, cast

from pydantic import BaseModel, ConfigDict

from eventline.resources.base import ClientFn, Id, ListResponse, Pagination, path_segment, with_query


class AccountSettings(TypedDict):
    date_format: Literal["relative", "absolute"]


class Account(TypedDict):
    id: Id
    org_id: Id
    name: str
    email_address: str
    disabled: bool
    creation_time: str
    last_login_time: str
    role: str
    last_project_id: Id
    settings: AccountSettings


class ListAccountsRequest(Pagination):
    pass


ListAccountsResponse = ListResponse[Account]


class GetAccountRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


GetAccountResponse = Account


class GetCurrentAccountRequest(BaseModel):
    model_config = ConfigDict(frozen=True)


GetCurrentAccountResponse = Account


async def list_accounts(client: ClientFn, request: ListAccountsRequest) -> ListAccountsResponse:
    """List the accounts of the organization."""
    path = with_query("/v0/accounts", request.to_query())
    return cast(ListAccountsResponse, await client("GET", path))


async def get_account(client: ClientFn, request: GetAccountRequest) -> GetAccountResponse:
    """Fetch an account by id."""
    return cast(GetAccountResponse, await client("GET", f"/v0/accounts/id/{path_segment(request.id)}"))


async def get_current_account(
    client: ClientFn, request: GetCurrentAccountRequest | None = None
) -> GetCurrentAccountResponse:
    """Fetch the account associated with the credentials in use."""
    return cast(GetCurrentAccountResponse, await client("GET", "/v0/account"))

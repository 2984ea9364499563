"""Pydantic models for the sponsors query.

Each edge node of the ``sponsors`` connection is either a `UserAccount` or an
`OrganizationAccount`, told apart by ``__typename``. Both collapse into the
same `Sponsor` record.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class Sponsor(BaseModel):
    """An account sponsoring the queried user."""

    model_config = ConfigDict(frozen=True)

    login: str
    name: str = ""


class _Account(BaseModel):
    login: str = ""
    name: str = ""

    @field_validator("login", "name", mode="before")
    @classmethod
    def _null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_sponsor(self) -> Sponsor:
        return Sponsor(login=self.login, name=self.name)


class UserAccount(_Account):
    """A personal account node (``... on User``)."""


class OrganizationAccount(_Account):
    """An organization account node (``... on Organization``)."""


Account = Union[UserAccount, OrganizationAccount]

# checked in this order
ACCOUNT_TYPES = {
    "User": UserAccount,
    "Organization": OrganizationAccount,
}


def decode_account(node: Optional[Dict[str, Any]]) -> Optional[Account]:
    """Decode an edge node into its account variant.

    Returns None when the node is missing or its ``__typename`` is not a
    known account type.
    """
    if not node:
        return None
    model = ACCOUNT_TYPES.get(node.get("__typename", ""))
    if model is None:
        return None
    return model.model_validate(node)


class SponsorEdge(BaseModel):
    node: Optional[Dict[str, Any]] = None

    def account(self) -> Optional[Account]:
        return decode_account(self.node)


class SponsorConnection(BaseModel):
    """The ``sponsors`` connection of a user."""

    edges: List[SponsorEdge] = Field(default_factory=list)

    def sponsors(self) -> List[Sponsor]:
        """Normalize edges into sponsors, keeping server order.

        Edges with an unknown account type or an empty login are dropped.
        """
        result: List[Sponsor] = []
        for edge in self.edges:
            account = edge.account()
            if account is None or not account.login:
                logger.debug("dropping sponsor node %r", edge.node)
                continue
            result.append(account.to_sponsor())
        return result

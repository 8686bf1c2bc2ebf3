"""
Operation Types

Closed set of operations tezforge can build and submit. Each variant carries
only the fields valid for its kind; ``kind`` is the discriminator used on the
wire and when parsing raw dictionaries.

Numeric fields (fee, amount, counter, limits) are decimal strings, which is
the representation the node RPC expects.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Mutez amounts and counters are unbounded naturals on chain
DecimalString = Annotated[str, Field(pattern=r"^\d+$")]


class _OperationBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_rpc(self) -> Dict[str, Any]:
        """Return the JSON object sent to the node; absent optionals are omitted."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class ManagerOperation(_OperationBase):
    """Fields shared by every operation that consumes an account counter."""

    source: str
    fee: DecimalString
    counter: DecimalString
    gas_limit: DecimalString
    storage_limit: DecimalString

    def with_counter(self, counter: int) -> ManagerOperation:
        """Return a copy of this operation with a new counter."""
        return self.model_copy(update={"counter": str(counter)})


class Reveal(ManagerOperation):
    """Publishes the account's public key."""

    kind: Literal["reveal"] = "reveal"
    public_key: str


class Transaction(ManagerOperation):
    """Transfer to an implicit account, or a smart contract invocation."""

    kind: Literal["transaction"] = "transaction"
    amount: DecimalString
    destination: str
    parameters: Optional[Any] = None


class Delegation(ManagerOperation):
    """Sets the account's delegate; no delegate withdraws the delegation."""

    kind: Literal["delegation"] = "delegation"
    delegate: Optional[str] = None


class Origination(ManagerOperation):
    """Creates a new originated account, optionally with contract code."""

    kind: Literal["origination"] = "origination"
    manager_pubkey: str
    balance: DecimalString
    spendable: bool
    delegatable: bool
    delegate: Optional[str] = None
    script: Optional[Dict[str, Any]] = None


class Activation(_OperationBase):
    """Activates a fundraiser account. Does not consume a counter."""

    kind: Literal["activate_account"] = "activate_account"
    pkh: str
    secret: str


StackableOperation = Union[Reveal, Transaction, Delegation, Origination]
"""Operations that can be grouped behind a reveal."""

Operation = Annotated[
    Union[Reveal, Transaction, Delegation, Origination, Activation],
    Field(discriminator="kind"),
]
"""Any operation tezforge can submit."""

_OPERATION_ADAPTER: TypeAdapter = TypeAdapter(Operation)


def parse_operation(data: Dict[str, Any]) -> Operation:
    """
    Validate a raw operation dictionary into its typed variant.

    Args:
        data: Operation as sent to or returned by the node

    Returns:
        The matching operation model

    Raises:
        pydantic.ValidationError: If ``kind`` is unknown or a field is invalid
    """
    return _OPERATION_ADAPTER.validate_python(data)

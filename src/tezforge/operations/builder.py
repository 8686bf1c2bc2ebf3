"""
Operation builders.

One constructor per operation kind. Builders take Python integers, apply the
default fees and limits from ``tezforge.constants`` and return immutable
operation models with every numeric field rendered as a decimal string.
"""

from __future__ import annotations

from typing import Any, Optional

from tezforge.constants import (
    DEFAULT_ACCOUNT_ORIGINATION_FEE,
    DEFAULT_ACCOUNT_ORIGINATION_GAS_LIMIT,
    DEFAULT_ACCOUNT_ORIGINATION_STORAGE_LIMIT,
    DEFAULT_DELEGATION_FEE,
    DEFAULT_DELEGATION_GAS_LIMIT,
    DEFAULT_DELEGATION_STORAGE_LIMIT,
    DEFAULT_KEY_REVEAL_FEE,
    DEFAULT_KEY_REVEAL_GAS_LIMIT,
    DEFAULT_KEY_REVEAL_STORAGE_LIMIT,
    DEFAULT_TRANSACTION_GAS_LIMIT,
    DEFAULT_TRANSACTION_STORAGE_LIMIT,
)
from tezforge.errors import ValidationError
from tezforge.michelson import MichelsonTranslator, TezosParameterFormat, to_micheline
from tezforge.types import Activation, Delegation, Origination, Reveal, Transaction
from tezforge.utils.logging import get_logger

_logger = get_logger(__name__)

__all__ = [
    "build_transaction",
    "build_contract_invocation",
    "build_delegation",
    "build_origination",
    "build_account_origination",
    "build_contract_origination",
    "build_reveal",
    "build_activation",
]


def _natural(value: int, field: str) -> str:
    """Render a non-negative integer as the decimal string the RPC expects.

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field)
    if value < 0:
        raise ValidationError(f"{field} must be non-negative", field=field)
    return str(value)


def build_transaction(
    source: str,
    destination: str,
    amount: int,
    fee: int,
    counter: int,
    gas_limit: int = DEFAULT_TRANSACTION_GAS_LIMIT,
    storage_limit: int = DEFAULT_TRANSACTION_STORAGE_LIMIT,
    parameters: Optional[Any] = None,
) -> Transaction:
    """Build a transfer (or, with Micheline ``parameters``, a contract call).

    Args:
        source: Sending account
        destination: Receiving account or contract
        amount: Amount in mutez
        fee: Fee in mutez
        counter: Counter for this operation
        gas_limit: Gas limit
        storage_limit: Storage limit
        parameters: Already normalized Micheline parameters

    Returns:
        Transaction
    """
    return Transaction(
        source=source,
        destination=destination,
        amount=_natural(amount, "amount"),
        fee=_natural(fee, "fee"),
        counter=_natural(counter, "counter"),
        gas_limit=_natural(gas_limit, "gas_limit"),
        storage_limit=_natural(storage_limit, "storage_limit"),
        parameters=parameters,
    )


def build_contract_invocation(
    source: str,
    destination: str,
    amount: int,
    fee: int,
    counter: int,
    storage_limit: int,
    gas_limit: int,
    parameters: Optional[str] = None,
    parameter_format: TezosParameterFormat = TezosParameterFormat.MICHELINE,
    translator: Optional[MichelsonTranslator] = None,
) -> Transaction:
    """Build a smart contract invocation.

    Blank ``parameters`` are left out of the operation entirely.

    Raises:
        ValidationError: If Michelson parameters are given without a translator
        ParameterParseError: If the parameters are not valid Micheline
    """
    parsed = None
    if parameters is not None and parameters.strip():
        parsed = to_micheline(parameters, parameter_format, "parameters", translator)

    return build_transaction(
        source,
        destination,
        amount,
        fee,
        counter,
        gas_limit=gas_limit,
        storage_limit=storage_limit,
        parameters=parsed,
    )


def build_delegation(
    source: str,
    delegate: Optional[str],
    counter: int,
    fee: int = DEFAULT_DELEGATION_FEE,
    gas_limit: int = DEFAULT_DELEGATION_GAS_LIMIT,
    storage_limit: int = DEFAULT_DELEGATION_STORAGE_LIMIT,
) -> Delegation:
    """Build a delegation. ``delegate=None`` withdraws the current delegation."""
    return Delegation(
        source=source,
        delegate=delegate or None,
        fee=_natural(fee, "fee"),
        counter=_natural(counter, "counter"),
        gas_limit=_natural(gas_limit, "gas_limit"),
        storage_limit=_natural(storage_limit, "storage_limit"),
    )


def build_origination(
    source: str,
    counter: int,
    amount: int,
    delegate: Optional[str],
    spendable: bool,
    delegatable: bool,
    fee: int,
    gas_limit: int,
    storage_limit: int,
    code: Optional[Any] = None,
    storage: Optional[Any] = None,
) -> Origination:
    """Build an origination from already normalized Micheline code and storage.

    The source is also the manager of the new account. An origination can
    only be delegatable when a delegate is given.

    Returns:
        Origination, with a script only when ``code`` is given
    """
    return Origination(
        source=source,
        manager_pubkey=source,
        fee=_natural(fee, "fee"),
        counter=_natural(counter, "counter"),
        gas_limit=_natural(gas_limit, "gas_limit"),
        storage_limit=_natural(storage_limit, "storage_limit"),
        balance=_natural(amount, "amount"),
        spendable=spendable,
        delegatable=delegatable and bool(delegate),
        delegate=delegate or None,
        script={"code": code, "storage": storage} if code else None,
    )


def build_account_origination(
    source: str,
    counter: int,
    amount: int,
    delegate: Optional[str],
    spendable: bool,
    delegatable: bool,
    fee: int = DEFAULT_ACCOUNT_ORIGINATION_FEE,
) -> Origination:
    """Build an origination of a plain (code-less) account."""
    return build_origination(
        source,
        counter,
        amount,
        delegate,
        spendable,
        delegatable,
        fee,
        DEFAULT_ACCOUNT_ORIGINATION_GAS_LIMIT,
        DEFAULT_ACCOUNT_ORIGINATION_STORAGE_LIMIT,
    )


def build_contract_origination(
    source: str,
    counter: int,
    amount: int,
    delegate: Optional[str],
    spendable: bool,
    delegatable: bool,
    fee: int,
    storage_limit: int,
    gas_limit: int,
    code: str,
    storage: str,
    code_format: TezosParameterFormat = TezosParameterFormat.MICHELINE,
    translator: Optional[MichelsonTranslator] = None,
) -> Origination:
    """Build a smart contract origination.

    Contracts with code cannot be spendable on current protocols. Asking for
    one only logs a warning; the node is left to reject it.

    Raises:
        ValidationError: If Michelson is given without a translator
        ParameterParseError: If code or storage is not valid Micheline
    """
    if spendable:
        _logger.warning(
            "Contracts with code cannot be spendable on current protocols",
            extra={"source": source},
        )

    parsed_code = to_micheline(code, code_format, "code", translator)
    parsed_storage = to_micheline(storage, code_format, "storage", translator)

    return build_origination(
        source,
        counter,
        amount,
        delegate,
        spendable,
        delegatable,
        fee,
        gas_limit,
        storage_limit,
        code=parsed_code,
        storage=parsed_storage,
    )


def build_reveal(
    source: str,
    public_key: str,
    counter: int,
    fee: int = DEFAULT_KEY_REVEAL_FEE,
    gas_limit: int = DEFAULT_KEY_REVEAL_GAS_LIMIT,
    storage_limit: int = DEFAULT_KEY_REVEAL_STORAGE_LIMIT,
) -> Reveal:
    """Build a reveal of the public key that controls ``source``.

    Usually added by ``append_reveal_operation`` rather than called directly.

    Args:
        source: Account whose key is revealed
        public_key: Base58 public key (``edpk...``)
        counter: Counter for this operation
        fee: Fee in mutez
        gas_limit: Gas limit
        storage_limit: Storage limit

    Returns:
        Reveal

    Raises:
        ValidationError: If fee, counter or a limit is negative
    """
    return Reveal(
        source=source,
        public_key=public_key,
        fee=_natural(fee, "fee"),
        counter=_natural(counter, "counter"),
        gas_limit=_natural(gas_limit, "gas_limit"),
        storage_limit=_natural(storage_limit, "storage_limit"),
    )


def build_activation(pkh: str, secret: str) -> Activation:
    """Build a fundraiser account activation. It takes no fee or counter.

    Args:
        pkh: Fundraiser account address (``tz1...``)
        secret: Activation secret, hex encoded

    Returns:
        Activation

    Raises:
        ValidationError: If ``secret`` is empty
    """
    if not secret:
        raise ValidationError("activation secret must not be empty", field="secret")
    return Activation(pkh=pkh, secret=secret)

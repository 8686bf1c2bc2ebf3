"""Tezos operation client.

This module provides the TezosOperationsClient class, the public entry
point for building and submitting operations to a Tezos node.

The client supports:
- Transfers and smart contract invocations
- Delegation and undelegation
- Account and smart contract originations
- Manager key reveals (explicit, or bundled automatically)
- Fundraiser account activation

Every ``send_*`` call reads the account counter afresh, prepends a reveal
if the account's key is not on chain yet, and runs the submission pipeline
once. Concurrent submissions for the same account are not serialized: they
may read the same counter, and the node will then reject all but one of
them. Callers that need ordering must keep one submission in flight per
account.

Example:
    >>> from tezforge import KeyStore, NodeConfig, TezosOperationsClient
    >>> client = TezosOperationsClient(
    ...     NodeConfig(url="https://rpc.ghostnet.teztnets.com"),
    ...     codec=my_codec,
    ... )
    >>> result = await client.send_transaction_operation(
    ...     key_store,
    ...     to="tz1...",
    ...     amount=1_000_000,  # 1 tez
    ...     fee=1_500,
    ... )
    >>> print(result.operation_group_id)
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from tezforge.chain.reader import ChainReader, TezosNodeReader
from tezforge.chain.rpc import NodeRpcClient
from tezforge.config import NodeConfig
from tezforge.constants import (
    DEFAULT_ACCOUNT_ORIGINATION_FEE,
    DEFAULT_DELEGATION_FEE,
    DEFAULT_KEY_REVEAL_FEE,
)
from tezforge.errors import ValidationError
from tezforge.forging.codec import OperationCodec
from tezforge.forging.forger import Forger, LocalForger, RemoteValidatingForger
from tezforge.michelson import MichelsonTranslator, TezosParameterFormat
from tezforge.operations import (
    append_reveal_operation,
    build_account_origination,
    build_activation,
    build_contract_invocation,
    build_contract_origination,
    build_delegation,
    build_reveal,
    build_transaction,
    next_counter,
)
from tezforge.pipeline.submitter import OperationSubmitter
from tezforge.signing.base import signer_for_key_store
from tezforge.signing.hardware import HardwareDevice
from tezforge.types import KeyStore, Operation, OperationResult, StackableOperation


class TezosOperationsClient:
    """Builds, signs and submits Tezos operations through one node."""

    def __init__(
        self,
        config: NodeConfig,
        *,
        codec: Optional[OperationCodec] = None,
        forger: Optional[Forger] = None,
        reader: Optional[ChainReader] = None,
        translator: Optional[MichelsonTranslator] = None,
        hardware_device: Optional[HardwareDevice] = None,
    ):
        """
        Args:
            config: Node connection settings
            codec: Operation codec; required unless ``forger`` is given
            forger: Explicit forging strategy (overrides ``config.use_remote_forge``)
            reader: Chain accessor (defaults to reading from the configured node)
            translator: Michelson translator, for Michelson code or parameters
            hardware_device: Device transport, for hardware key stores

        Raises:
            ValidationError: If neither a codec nor a forger is given
        """
        self.config = config
        self.rpc = NodeRpcClient(config)
        self.reader: ChainReader = reader or TezosNodeReader(self.rpc)
        self.translator = translator
        self.hardware_device = hardware_device

        if forger is None:
            if codec is None:
                raise ValidationError("An operation codec or a forger is required", field="codec")
            if config.use_remote_forge:
                forger = RemoteValidatingForger(self.rpc, codec)
            else:
                forger = LocalForger(codec)
        self.submitter = OperationSubmitter(self.reader, self.rpc, forger)

    # ------------------------------------------------------------------
    # Pipeline entry points
    # ------------------------------------------------------------------
    async def send_operation(
        self,
        operations: Sequence[Operation],
        key_store: KeyStore,
        derivation_path: str = "",
    ) -> OperationResult:
        """Submit already built operations as one group, as they are."""
        signer = signer_for_key_store(key_store, self.hardware_device)
        return await self.submitter.send_operation(operations, signer, derivation_path)

    async def _send_stackable(
        self,
        key_store: KeyStore,
        account: str,
        build: Callable[[int], StackableOperation],
        derivation_path: str,
    ) -> OperationResult:
        counter = await next_counter(self.reader, account)
        operation = build(counter)
        operations: List[StackableOperation] = await append_reveal_operation(
            self.reader, key_store, account, counter - 1, [operation]
        )
        return await self.send_operation(operations, key_store, derivation_path)

    # ------------------------------------------------------------------
    # Transfers and contract calls
    # ------------------------------------------------------------------
    async def send_transaction_operation(
        self,
        key_store: KeyStore,
        to: str,
        amount: int,
        fee: int,
        derivation_path: str = "",
    ) -> OperationResult:
        """Send ``amount`` mutez from the key store's account to ``to``.

        Args:
            key_store: Keys of the sending account
            to: Destination address
            amount: Amount in mutez
            fee: Fee in mutez
            derivation_path: BIP44 path for hardware key stores

        Returns:
            OperationResult
        """
        source = key_store.public_key_hash
        return await self._send_stackable(
            key_store,
            source,
            lambda counter: build_transaction(source, to, amount, fee, counter),
            derivation_path,
        )

    async def send_contract_invocation_operation(
        self,
        key_store: KeyStore,
        to: str,
        amount: int,
        fee: int,
        storage_limit: int,
        gas_limit: int,
        parameters: Optional[str] = None,
        parameter_format: TezosParameterFormat = TezosParameterFormat.MICHELINE,
        derivation_path: str = "",
    ) -> OperationResult:
        """Invoke a contract, with Michelson or Micheline parameters.

        Raises:
            ParameterParseError: If the parameters are not valid Micheline
        """
        source = key_store.public_key_hash
        return await self._send_stackable(
            key_store,
            source,
            lambda counter: build_contract_invocation(
                source,
                to,
                amount,
                fee,
                counter,
                storage_limit,
                gas_limit,
                parameters=parameters,
                parameter_format=parameter_format,
                translator=self.translator,
            ),
            derivation_path,
        )

    async def send_contract_ping(
        self,
        key_store: KeyStore,
        to: str,
        fee: int,
        storage_limit: int,
        gas_limit: int,
        derivation_path: str = "",
    ) -> OperationResult:
        """Invoke a contract with no parameters and a zero amount."""
        return await self.send_contract_invocation_operation(
            key_store,
            to,
            0,
            fee,
            storage_limit,
            gas_limit,
            parameters="",
            derivation_path=derivation_path,
        )

    # ------------------------------------------------------------------
    # Delegation
    # ------------------------------------------------------------------
    async def send_delegation_operation(
        self,
        key_store: KeyStore,
        delegator: str,
        delegate: Optional[str],
        fee: int = DEFAULT_DELEGATION_FEE,
        derivation_path: str = "",
    ) -> OperationResult:
        """Delegate ``delegator``'s balance to ``delegate``.

        Args:
            key_store: Keys of the account managing ``delegator``
            delegator: Account whose delegate changes
            delegate: New delegate, or None to withdraw the delegation
            fee: Fee in mutez
            derivation_path: BIP44 path for hardware key stores
        """
        return await self._send_stackable(
            key_store,
            delegator,
            lambda counter: build_delegation(delegator, delegate, counter, fee=fee),
            derivation_path,
        )

    async def send_undelegation_operation(
        self,
        key_store: KeyStore,
        delegator: str,
        fee: int = DEFAULT_DELEGATION_FEE,
        derivation_path: str = "",
    ) -> OperationResult:
        return await self.send_delegation_operation(
            key_store, delegator, None, fee=fee, derivation_path=derivation_path
        )

    # ------------------------------------------------------------------
    # Origination
    # ------------------------------------------------------------------
    async def send_account_origination_operation(
        self,
        key_store: KeyStore,
        amount: int,
        delegate: Optional[str],
        spendable: bool,
        delegatable: bool,
        fee: int = DEFAULT_ACCOUNT_ORIGINATION_FEE,
        derivation_path: str = "",
    ) -> OperationResult:
        """Originate a code-less account funded with ``amount`` mutez."""
        source = key_store.public_key_hash
        return await self._send_stackable(
            key_store,
            source,
            lambda counter: build_account_origination(
                source, counter, amount, delegate, spendable, delegatable, fee=fee
            ),
            derivation_path,
        )

    async def send_contract_origination_operation(
        self,
        key_store: KeyStore,
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
        derivation_path: str = "",
    ) -> OperationResult:
        """Originate a smart contract.

        Args:
            key_store: Keys of the originating account
            amount: Initial balance in mutez
            delegate: Delegate of the new contract, or None
            spendable: Logged as a warning when True; contracts cannot be spendable
            delegatable: Whether the delegate may be changed later
            fee: Fee in mutez
            storage_limit: Storage limit
            gas_limit: Gas limit
            code: Contract code
            storage: Initial storage
            code_format: Format of ``code`` and ``storage``
            derivation_path: BIP44 path for hardware key stores

        Raises:
            ParameterParseError: If code or storage is not valid Micheline
        """
        source = key_store.public_key_hash
        return await self._send_stackable(
            key_store,
            source,
            lambda counter: build_contract_origination(
                source,
                counter,
                amount,
                delegate,
                spendable,
                delegatable,
                fee,
                storage_limit,
                gas_limit,
                code,
                storage,
                code_format=code_format,
                translator=self.translator,
            ),
            derivation_path,
        )

    # ------------------------------------------------------------------
    # Reveal and activation
    # ------------------------------------------------------------------
    async def send_key_reveal_operation(
        self,
        key_store: KeyStore,
        fee: int = DEFAULT_KEY_REVEAL_FEE,
        derivation_path: str = "",
    ) -> OperationResult:
        """Publish the key store's public key on its own. Never bundled."""
        source = key_store.public_key_hash
        counter = await next_counter(self.reader, source)
        reveal = build_reveal(source, key_store.public_key, counter, fee=fee)
        return await self.send_operation([reveal], key_store, derivation_path)

    async def send_identity_activation_operation(
        self,
        key_store: KeyStore,
        activation_code: str,
        derivation_path: str = "",
    ) -> OperationResult:
        """Activate a fundraiser account. Uses no counter and no reveal."""
        activation = build_activation(key_store.public_key_hash, activation_code)
        return await self.send_operation([activation], key_store, derivation_path)

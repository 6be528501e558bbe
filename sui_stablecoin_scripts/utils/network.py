"""
The single boundary between the scripts and a Sui full node.

Reads go straight to the JSON-RPC API over httpx. Transactions are assembled
with pysui from the typed commands in ``ledger.calls`` and signed locally, so
the private key never leaves the process.
"""
import base64
import logging
import time
from typing import List, Optional, Tuple

import httpx

from . import config
from .keys import Ed25519Keypair
from ..ledger.calls import (
    Command,
    MoveCall,
    ObjectArg,
    PureArg,
    Publish,
    ResultArg,
    TransferObjects,
    Upgrade,
    ZERO_ADDRESS,
)
from ..ledger.errors import RpcError, TransactionFailedError

_LOGGER = logging.getLogger(__name__)

RESPONSE_OPTIONS = {
    "showBalanceChanges": True,
    "showEffects": True,
    "showEvents": True,
    "showInput": True,
    "showObjectChanges": True,
    "showRawInput": False,
}


def transaction_status(receipt: dict) -> Tuple[str, Optional[str]]:
    status = (receipt.get("effects") or {}).get("status") or {}
    return status.get("status"), status.get("error")


def check_receipt(receipt: dict) -> dict:
    status, error = transaction_status(receipt)
    if status == "failure":
        raise TransactionFailedError(receipt, error)
    return receipt


def show_tx(receipt: dict):
    digest = receipt.get("digest")
    if not digest:
        return
    _LOGGER.info(f"Transaction digest: {digest}")
    if config.EXPLORER_URL:
        _LOGGER.info(f"{config.EXPLORER_URL.rstrip('/')}/tx/{digest}")


class SuiRpcClient:
    def __init__(self, rpc_url: Optional[str] = None, timeout: Optional[float] = None):
        self.rpc_url = rpc_url or config.RPC_URL
        self.timeout = timeout if timeout is not None else config.TX_WAIT_TIMEOUT
        self._http = httpx.Client(timeout=30)
        self._request_id = 0

    def call(self, method: str, params: list):
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        response = self._http.post(self.rpc_url, json=payload)
        response.raise_for_status()
        result = response.json()
        if result.get("error"):
            raise RpcError(method, result["error"])
        return result.get("result")

    # Reads

    def get_object(self, object_id: str) -> dict:
        return self.call(
            "sui_getObject",
            [object_id, {"showType": True, "showOwner": True, "showContent": True}],
        )

    def get_dynamic_field_object(self, parent_id: str, name_type: str, name_value) -> dict:
        return self.call(
            "suix_getDynamicFieldObject",
            [parent_id, {"type": name_type, "value": name_value}],
        )

    def get_dynamic_fields(self, parent_id: str) -> List[dict]:
        entries = []
        cursor = None
        while True:
            page = self.call("suix_getDynamicFields", [parent_id, cursor, None])
            entries.extend(page["data"])
            if not page.get("hasNextPage"):
                return entries
            cursor = page["nextCursor"]

    def query_events(self, event_type: str) -> List[dict]:
        """All events of the given Move type, oldest first, across every page."""
        events = []
        cursor = None
        pages = 0
        while True:
            page = self.call(
                "suix_queryEvents", [{"MoveEventType": event_type}, cursor, None, False]
            )
            pages += 1
            events.extend(page["data"])
            if not page.get("hasNextPage"):
                break
            cursor = page["nextCursor"]
        _LOGGER.debug(f"Read {len(events)} {event_type} events in {pages} pages")
        return events

    def get_coin_metadata(self, coin_type: str) -> Optional[dict]:
        return self.call("suix_getCoinMetadata", [coin_type])

    def get_transaction_block(self, digest: str) -> dict:
        return self.call("sui_getTransactionBlock", [digest, RESPONSE_OPTIONS])

    # Transactions

    def _new_transaction(self, sender: str):
        from pysui import SuiConfig, SyncClient
        from pysui.sui.sui_txn.sync_transaction import SuiTransaction
        from pysui.sui.sui_types.address import SuiAddress

        client = SyncClient(SuiConfig.user_config(rpc_url=self.rpc_url))
        return SuiTransaction(client=client, initial_sender=SuiAddress(sender))

    @staticmethod
    def _to_pysui_argument(arg, results: list):
        from pysui.sui.sui_types.address import SuiAddress
        from pysui.sui.sui_types.scalars import (
            ObjectID,
            SuiBoolean,
            SuiString,
            SuiU8,
            SuiU64,
        )

        if isinstance(arg, ObjectArg):
            return ObjectID(arg.object_id)
        if isinstance(arg, ResultArg):
            return results[arg.index]
        if isinstance(arg, PureArg):
            if arg.type in ("address", "id"):
                return SuiAddress(arg.value)
            if arg.type == "u8":
                return SuiU8(arg.value)
            if arg.type == "u64":
                return SuiU64(arg.value)
            if arg.type == "bool":
                return SuiBoolean(arg.value)
            if arg.type == "string":
                return SuiString(arg.value)
        raise ValueError(f"Unsupported transaction argument {arg!r}")

    def _build(self, commands: List[Command], sender: str):
        from pysui.sui.sui_types.address import SuiAddress
        from pysui.sui.sui_types.scalars import ObjectID, SuiU8

        txn = self._new_transaction(sender)
        results = []
        for command in commands:
            if isinstance(command, MoveCall):
                result = txn.move_call(
                    target=command.target,
                    arguments=[
                        self._to_pysui_argument(a, results) for a in command.arguments
                    ],
                    type_arguments=list(command.type_arguments),
                )
            elif isinstance(command, Publish):
                result = txn.publish(
                    project_path=command.project_path,
                    with_unpublished_dependencies=command.with_unpublished_dependencies,
                )
            elif isinstance(command, TransferObjects):
                result = txn.transfer_objects(
                    transfers=[
                        self._to_pysui_argument(a, results) for a in command.objects
                    ],
                    recipient=SuiAddress(command.recipient),
                )
            elif isinstance(command, Upgrade):
                result = txn.custom_upgrade(
                    project_path=command.project_path,
                    package_id=ObjectID(command.package_id),
                    upgrade_cap=ObjectID(command.upgrade_service_id),
                    authorize_upgrade_fn=lambda t, service, digest, c=command: t.move_call(
                        target=c.authorize_target,
                        arguments=[service, SuiU8(c.policy), digest],
                        type_arguments=list(c.type_arguments),
                    ),
                    commit_upgrade_fn=lambda t, service, receipt, c=command: t.move_call(
                        target=c.commit_target,
                        arguments=[service, receipt],
                        type_arguments=list(c.type_arguments),
                    ),
                    with_unpublished_dependencies=command.with_unpublished_dependencies,
                )
            else:
                raise ValueError(f"Unsupported command {command!r}")
            results.append(result)
        return txn

    def dev_inspect(self, calls: List[MoveCall], sender: str = ZERO_ADDRESS) -> dict:
        txn = self._build(calls, sender)
        kind = base64.b64encode(txn.raw_kind().serialize()).decode()
        return self.call("sui_devInspectTransactionBlock", [sender, kind, None, None])

    def execute(
        self,
        commands: List[Command],
        signer: Ed25519Keypair,
        gas_budget: Optional[int] = None,
        dry_run: bool = False,
    ) -> dict:
        txn = self._build(commands, signer.address)
        tx_bytes = txn.deferred_execution(gas_budget=str(gas_budget or config.GAS_BUDGET))
        if dry_run:
            return check_receipt(self.dry_run_transaction_block(tx_bytes))
        signature = signer.sign_transaction(tx_bytes)
        return self.execute_transaction_block(tx_bytes, [signature])

    def dry_run_transaction_block(self, tx_bytes: str) -> dict:
        return self.call("sui_dryRunTransactionBlock", [tx_bytes])

    def execute_transaction_block(self, tx_bytes: str, signatures: List[str]) -> dict:
        submitted = self.call(
            "sui_executeTransactionBlock", [tx_bytes, signatures, {}, None]
        )
        return check_receipt(self.wait_for_transaction(submitted["digest"]))

    def wait_for_transaction(self, digest: str) -> dict:
        deadline = time.monotonic() + self.timeout
        while True:
            try:
                return self.get_transaction_block(digest)
            except RpcError:
                if time.monotonic() > deadline:
                    raise
            _LOGGER.debug("Waiting for transaction to be indexed")
            time.sleep(1)

    def request_faucet(self, address: str, faucet_url: Optional[str] = None) -> dict:
        url = (faucet_url or config.FAUCET_URL).rstrip("/") + "/gas"
        response = self._http.post(
            url, json={"FixedAmountRequest": {"recipient": address}}
        )
        response.raise_for_status()
        return response.json()

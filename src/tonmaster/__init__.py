__all__ = [
    # Master wrapper
    "Master",
    "MasterConfig",
    "master_config_to_cell",
    "StateInit",
    # Opcodes
    "opcodes",
    # Content
    "build_onchain_metadata",
    "metadata_to_cell",
    "parse_metadata",
    "parse_onchain_metadata",
    # Bodies
    "parse_body",
    # Transport
    "ContractProvider",
    "InternalMessage",
    "Sender",
    "SenderArguments",
    "SendMode",
    "ToncenterProvider",
    "WalletSender",
    # HTTP client
    "RPCError",
    "ToncenterClient",
    # Code loading
    "load_code",
    # Wallet
    "generate_wallet",
    "get_wallet",
    "load_mnemonic",
]

from .chain.code import load_code
from .chain.rpc import RPCError, ToncenterClient
from .chain.transport import (
    ContractProvider,
    InternalMessage,
    Sender,
    SenderArguments,
    SendMode,
    ToncenterProvider,
    WalletSender,
)
from .keys.wallet import generate_wallet, get_wallet, load_mnemonic
from .wrappers import opcodes
from .wrappers.bodies import parse_body
from .wrappers.cells import StateInit
from .wrappers.content import (
    build_onchain_metadata,
    metadata_to_cell,
    parse_metadata,
    parse_onchain_metadata,
)
from .wrappers.master import Master, MasterConfig, master_config_to_cell

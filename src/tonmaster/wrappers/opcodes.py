"""
Opcodes - 32-bit operation tags understood by the Master contract.

These must match the constants compiled into the contract code.
"""

DEPLOY_COLLECTION = 0x00000001
DEPLOY_NFT_ITEM = 0x00000002
TRANSFER_ITEM = 0x00000003
EDIT_ITEM_CONTENT = 0x00000004
DESTROY_SBT_ITEM = 0x00000005
WITHDRAW_FUNDS = 0x00000006
EDIT_DAPP_CODE = 0x00000007

ALL: dict[str, int] = {
    "deploy_collection": DEPLOY_COLLECTION,
    "deploy_nft_item": DEPLOY_NFT_ITEM,
    "transfer_item": TRANSFER_ITEM,
    "edit_item_content": EDIT_ITEM_CONTENT,
    "destroy_sbt_item": DESTROY_SBT_ITEM,
    "withdraw_funds": WITHDRAW_FUNDS,
    "edit_dapp_code": EDIT_DAPP_CODE,
}

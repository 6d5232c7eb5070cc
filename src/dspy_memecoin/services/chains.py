"""Supported networks for coin deployment."""

BASE_MAINNET = 8453
BASE_SEPOLIA = 84532

SUPPORTED_CHAINS = {
    BASE_MAINNET: "Base",
    BASE_SEPOLIA: "Base Sepolia",
}


def is_supported_chain(chain_id: int) -> bool:
    return chain_id in SUPPORTED_CHAINS


def default_currency(chain_id: int) -> str:
    """ZORA is only available on Base mainnet; every other network deploys against ETH."""
    return "ZORA" if chain_id == BASE_MAINNET else "ETH"


def coin_viewer_url(contract_address: str, chain_id: int) -> str:
    """Page on zora.co (or its testnet) showing the coin."""
    if chain_id == BASE_SEPOLIA:
        return f"https://testnet.zora.co/coin/bsep:{contract_address}"
    if chain_id == BASE_MAINNET:
        return f"https://zora.co/coin/base:{contract_address}"
    return f"https://testnet.zora.co/coin/{chain_id}:{contract_address}"

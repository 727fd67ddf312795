"""Protocol constants and minimal contract ABIs."""

from typing import Any, Dict, List

DEFAULT_SLIPPAGE_BPS = 50  # 0.50%
BPS_DENOMINATOR = 10_000
DEFAULT_DEADLINE_SECONDS = 20 * 60

# Maximum uint256 for unlimited approval
MAX_UINT256 = 2**256 - 1

Abi = List[Dict[str, Any]]


def _fn(name: str, inputs: List[tuple], outputs: List[tuple], mutability: str) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
    }


_AMOUNTS = [("amounts", "uint256[]")]

ERC20_ABI: Abi = [
    _fn("approve", [("spender", "address"), ("amount", "uint256")], [("", "bool")], "nonpayable"),
    _fn("decimals", [], [("", "uint8")], "view"),
    _fn("symbol", [], [("", "string")], "view"),
]

UNISWAP_V2_ROUTER_ABI: Abi = [
    _fn("getAmountsOut", [("amountIn", "uint256"), ("path", "address[]")], _AMOUNTS, "view"),
    _fn("getAmountsIn", [("amountOut", "uint256"), ("path", "address[]")], _AMOUNTS, "view"),
    _fn(
        "swapExactTokensForTokens",
        [("amountIn", "uint256"), ("amountOutMin", "uint256"), ("path", "address[]"),
         ("to", "address"), ("deadline", "uint256")],
        _AMOUNTS,
        "nonpayable",
    ),
    _fn(
        "swapExactETHForTokens",
        [("amountOutMin", "uint256"), ("path", "address[]"), ("to", "address"), ("deadline", "uint256")],
        _AMOUNTS,
        "payable",
    ),
    _fn(
        "swapExactTokensForETH",
        [("amountIn", "uint256"), ("amountOutMin", "uint256"), ("path", "address[]"),
         ("to", "address"), ("deadline", "uint256")],
        _AMOUNTS,
        "nonpayable",
    ),
    _fn(
        "swapTokensForExactTokens",
        [("amountOut", "uint256"), ("amountInMax", "uint256"), ("path", "address[]"),
         ("to", "address"), ("deadline", "uint256")],
        _AMOUNTS,
        "nonpayable",
    ),
    _fn(
        "swapETHForExactTokens",
        [("amountOut", "uint256"), ("path", "address[]"), ("to", "address"), ("deadline", "uint256")],
        _AMOUNTS,
        "payable",
    ),
    _fn(
        "swapTokensForExactETH",
        [("amountOut", "uint256"), ("amountInMax", "uint256"), ("path", "address[]"),
         ("to", "address"), ("deadline", "uint256")],
        _AMOUNTS,
        "nonpayable",
    ),
]

# Router-manager contract: exposes the Uniswap V2 router it routes through
GTE_ROUTER_MIN_ABI: Abi = [
    _fn("uniV2Router", [], [("router", "address")], "view"),
    _fn("weth", [], [("token", "address")], "view"),
]

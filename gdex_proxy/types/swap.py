"""
Request-scoped swap value objects
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from .evm_tokens import is_hex_address, is_native_token


@dataclass
class SwapRequest:
    """
    Validated swap parameters

    Attributes:
        sell_token: Token address or native sentinel
        buy_token: Token address or native sentinel
        sell_amount: Base-10 wei amount, canonical (no leading zeros)
        taker: Wallet that will sign the transaction (required for execution)
        slippage: Slippage tolerance as a fraction (0.02 = 2%), unclamped
        chain_id: EVM chain ID
    """
    sell_token: str
    buy_token: str
    sell_amount: str
    taker: Optional[str] = None
    slippage: float = 0.02
    chain_id: int = 1

    @property
    def sells_native(self) -> bool:
        return is_native_token(self.sell_token)

    @property
    def sell_amount_wei(self) -> int:
        return int(self.sell_amount)


@dataclass
class FeeSuggestion:
    """EIP-1559 fee suggestion in wei"""
    max_fee_per_gas: int
    max_priority_fee_per_gas: int


@dataclass
class OutboundTransaction:
    """
    Wallet-ready transaction

    All numeric fields are 0x-prefixed hex quantities.
    """
    to: str
    data: str
    value: str
    gas: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire format (camelCase, unset optional fields omitted)"""
        tx: Dict[str, Any] = {
            "to": self.to,
            "data": self.data,
            "value": self.value,
        }
        if self.gas is not None:
            tx["gas"] = self.gas
        if self.max_fee_per_gas is not None:
            tx["maxFeePerGas"] = self.max_fee_per_gas
        if self.max_priority_fee_per_gas is not None:
            tx["maxPriorityFeePerGas"] = self.max_priority_fee_per_gas
        return tx


@dataclass(frozen=True)
class IntegratorFee:
    """
    Fee taken on the bought token, paid to recipient

    Attributes:
        recipient: Fee recipient address
        percentage: Fraction of the bought amount ("0.01" = 1%)
    """
    recipient: str
    percentage: str

    @classmethod
    def from_settings(cls, recipient: str, percentage: str) -> Optional["IntegratorFee"]:
        """
        Build the fee from configuration values

        Returns:
            IntegratorFee, or None when the fee is disabled (percentage zero)

        Raises:
            ValueError: If the recipient or percentage is invalid
        """
        try:
            pct = Decimal(str(percentage).strip() or "0")
        except InvalidOperation:
            raise ValueError(f"fee percentage is not a number: {percentage!r}")
        if not pct.is_finite() or pct < 0 or pct > 1:
            raise ValueError(f"fee percentage must be within [0, 1]: {percentage!r}")
        if pct == 0:
            return None
        if not is_hex_address(recipient):
            raise ValueError(f"fee recipient is not an address: {recipient!r}")
        return cls(recipient=recipient, percentage=str(pct))

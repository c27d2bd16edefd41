# services/formatting.py

from decimal import Context, Decimal, ROUND_DOWN
from typing import Any, Optional

import config

# uint256 amounts need up to 78 significant digits
_CONTEXT = Context(prec=78, rounding=ROUND_DOWN)

# Smallest representable ETH amount (1 wei)
_WEI_QUANTUM = Decimal(1).scaleb(-config.CURRENCY_DECIMALS)


def format_eth(value: Any) -> Optional[float]:
    """
    Converts an amount in wei to ETH.

    Fractions below 1 wei are truncated. None (no data) stays None,
    zero stays 0.0.
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    eth = value.scaleb(-config.CURRENCY_DECIMALS, context=_CONTEXT)
    return float(eth.quantize(_WEI_QUANTUM, context=_CONTEXT))

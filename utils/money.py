"""Money formatting. Amounts are integer minor units (paise, cents)."""


def _group_indian(digits: str) -> str:
    """Group digits the Indian way: last three, then pairs (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_money(amount_cents: int, symbol: str = "₹") -> str:
    """
    Format minor units for display.

    Whole amounts drop the fractional part: 35000000 -> '₹3,50,000',
    12350 -> '₹123.50', -500 -> '-₹5'.
    """
    sign = "-" if amount_cents < 0 else ""
    major, minor = divmod(abs(amount_cents), 100)
    text = f"{sign}{symbol}{_group_indian(str(major))}"
    if minor:
        text += f".{minor:02d}"
    return text

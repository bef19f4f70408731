"""Display formatting for money and percentages (id-ID conventions)."""


def format_rupiah(amount) -> str:
    """Format an amount as Indonesian Rupiah: no fractional digits, '.' thousands separator.

    >>> format_rupiah(774000)
    'Rp 774.000'
    """
    value = int(round(amount or 0))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_percent(value) -> str:
    """Render a percentage with one decimal, e.g. 12.5 -> '12.5%'."""
    return f"{float(value or 0):.1f}%"


__all__ = ["format_rupiah", "format_percent"]

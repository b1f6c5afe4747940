"""
Helper functions for formatting daemon values into human-readable strings.
"""

from typing import Optional

SIZE_UNITS = (
    (1_000_000_000, "Go"),
    (1_000_000, "Mo"),
    (1_000, "Ko"),
)


def pretty_size(size_in_octets: int, decimals: int = 2) -> str:
    """Formats a byte count on a decimal ladder (e.g., '1.50 Ko', '2.00 Mo')."""
    for factor, unit in SIZE_UNITS:
        if size_in_octets >= factor:
            return f"{size_in_octets / factor:.{decimals}f} {unit}"
    return f"{size_in_octets} o"


def pretty_rate(octets_per_second: int, decimals: int = 1) -> str:
    """Formats a transfer rate (e.g., '1.5 Mo/s')."""
    return f"{pretty_size(octets_per_second, decimals=decimals)}/s"


def fraction_to_percent(fraction: Optional[float]) -> Optional[float]:
    """Scales a 0.0-1.0 fraction reported by the daemon to 0-100."""
    if fraction is None:
        return None
    return fraction * 100.0

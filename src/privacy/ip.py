"""
IP address masking.

Addresses are stored in the log tables as packed binary (4 bytes for IPv4,
16 bytes for IPv6). Masking zeroes the trailing bytes of an IPv4 address;
IPv6 addresses are cut to a network prefix that grows coarser with the mask.
"""

import ipaddress
from typing import Optional, Union


__all__ = [
    'MAX_MASK_LENGTH',
    'MIN_MASK_LENGTH',
    'anonymize_ip',
    'effective_mask_length',
    'ip_to_string',
]


# Raw data anonymization never masks less than two bytes.
MIN_MASK_LENGTH = 2

# Three bytes is the coarsest mask with an IPv6 counterpart.
MAX_MASK_LENGTH = 3

# Mask length -> IPv6 prefix kept.
IPV6_PREFIXES = {
    0: 128,
    1: 64,
    2: 48,
    3: 24,
}


def effective_mask_length(configured: int) -> int:
    """Return the mask length actually applied for a configured value."""
    return min(max(MIN_MASK_LENGTH, int(configured)), MAX_MASK_LENGTH)


def _mask_ipv4(address: ipaddress.IPv4Address, byte_count: int) -> ipaddress.IPv4Address:
    packed = address.packed
    return ipaddress.IPv4Address(packed[:4 - byte_count] + b'\x00' * byte_count)


def _mask_ipv6(address: ipaddress.IPv6Address, byte_count: int) -> ipaddress.IPv6Address:
    prefix = IPV6_PREFIXES[byte_count]
    network = ipaddress.IPv6Network(f"{address}/{prefix}", strict=False)
    return network.network_address


def _parse(value: Union[bytes, str]) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ipaddress.ip_address(bytes(value))
    return ipaddress.ip_address(value)


def anonymize_ip(value: Optional[Union[bytes, str]], mask_length: int = MIN_MASK_LENGTH) -> Optional[bytes]:
    """
    Mask an IP address.

    Args:
        value: Packed (4 or 16 bytes) or textual address
        mask_length: Bytes to mask; clamped to MIN_MASK_LENGTH..MAX_MASK_LENGTH

    Returns:
        Packed masked address, in the same family as the input. IPv4-mapped
        IPv6 addresses are masked as IPv4 and returned mapped. None when the
        input is empty.

    Raises:
        ValueError: If the value is not an IP address
    """
    if value is None or len(value) == 0:
        return None

    byte_count = effective_mask_length(mask_length)
    address = _parse(value)

    if address.version == 6 and address.ipv4_mapped is not None:
        masked = _mask_ipv4(address.ipv4_mapped, byte_count)
        return ipaddress.IPv6Address(b'\x00' * 10 + b'\xff\xff' + masked.packed).packed

    if address.version == 4:
        return _mask_ipv4(address, byte_count).packed

    return _mask_ipv6(address, byte_count).packed


def ip_to_string(value: Optional[bytes]) -> Optional[str]:
    """Render a packed address as text, None for empty values."""
    if value is None or len(value) == 0:
        return None
    return str(_parse(value))

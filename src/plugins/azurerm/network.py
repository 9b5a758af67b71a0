"""
IP restriction address translation.

The user-facing ``ip_restriction`` block carries an address and a dotted-quad
subnet mask, while the 2018-02-01 Web Apps API expects the address in CIDR
notation (``a.b.c.d/x``) and a blank ``subnetMask``. The helpers here convert
between the two representations and reject literals that are not IPv4.
"""

import ipaddress
import logging

from .exceptions import InvalidNetworkLiteral, InvalidSubnetMask

logger = logging.getLogger(__name__)

DEFAULT_SUBNET_MASK = "255.255.255.255"
_ALL_ONES = 0xFFFFFFFF


def _parse_address(ip_address: str) -> ipaddress.IPv4Address:
    try:
        return ipaddress.IPv4Address(ip_address)
    except ValueError as e:
        raise InvalidNetworkLiteral(
            f"'{ip_address}' is not a valid IPv4 address", ip_address
        ) from e


def _parse_cidr(cidr: str) -> ipaddress.IPv4Interface:
    _, _, prefix = cidr.partition("/")
    if not prefix.isdigit():
        raise InvalidNetworkLiteral(
            f"'{cidr}' is not a valid IPv4 CIDR block", cidr
        )
    try:
        return ipaddress.IPv4Interface(cidr)
    except ValueError as e:
        raise InvalidNetworkLiteral(
            f"'{cidr}' is not a valid IPv4 CIDR block", cidr
        ) from e


def mask_to_prefix_length(subnet_mask: str) -> int:
    """
    Count the leading 1-bits of a dotted-quad subnet mask.

    Args:
        subnet_mask: Mask such as "255.255.255.0"

    Returns:
        The prefix length (e.g. 24)

    Raises:
        InvalidSubnetMask: If the mask is not IPv4 or its 1-bits are not
            contiguous (e.g. "255.0.255.0")
    """
    try:
        value = int(ipaddress.IPv4Address(subnet_mask))
    except ValueError as e:
        raise InvalidSubnetMask(
            f"'{subnet_mask}' is not a valid IPv4 subnet mask", subnet_mask
        ) from e

    host_bits = ~value & _ALL_ONES
    # host part must look like 0b0..01..1
    if host_bits & (host_bits + 1):
        raise InvalidSubnetMask(
            f"'{subnet_mask}' is not a contiguous subnet mask", subnet_mask
        )
    return 32 - host_bits.bit_length()


def prefix_length_to_mask(prefix_length: int) -> str:
    """Return the dotted-quad mask for a prefix length between 0 and 32."""
    if not 0 <= prefix_length <= 32:
        raise InvalidSubnetMask(
            f"Prefix length {prefix_length} is out of range", str(prefix_length)
        )
    return str(ipaddress.IPv4Network(f"0.0.0.0/{prefix_length}").netmask)


def encode_ip_restriction(ip_address: str, subnet_mask: str = "") -> str:
    """
    Combine an address and a subnet mask into the CIDR string sent on the wire.

    - With a mask, the result is ``address/prefix``; host bits of the address
      are kept as given.
    - Without a mask, an address already in CIDR form passes through
      unchanged and a bare address becomes a single-host ``/32`` block.

    Args:
        ip_address: IPv4 address, or an IPv4 CIDR block when no mask is given
        subnet_mask: Dotted-quad mask, or "" when the address carries its own

    Returns:
        CIDR notation string, e.g. "10.0.0.0/24"

    Raises:
        InvalidNetworkLiteral: If the address cannot be parsed
        InvalidSubnetMask: If the mask cannot be parsed or is not contiguous
    """
    if subnet_mask:
        address = _parse_address(ip_address)
        prefix_length = mask_to_prefix_length(subnet_mask)
        cidr = f"{address}/{prefix_length}"
    elif "/" in ip_address:
        _parse_cidr(ip_address)
        cidr = ip_address
    else:
        cidr = f"{_parse_address(ip_address)}/32"

    logger.debug(f"Encoded ip_restriction {ip_address!r}/{subnet_mask!r} -> {cidr}")
    return cidr


def decode_ip_restriction(
    ip_address: str, subnet_mask: str | None = None
) -> tuple[str, str]:
    """
    Split a wire CIDR string back into the user-facing address and mask.

    A bare address (no "/") has no derivable mask and decodes to an empty
    mask; "/32" is not re-derived. A non-empty ``subnet_mask`` taken from the
    wire record overrides the decoded mask, which keeps records written with
    separate address/mask fields readable.

    Args:
        ip_address: The wire ``ipAddress`` value
        subnet_mask: The wire ``subnetMask`` value, if any

    Returns:
        Tuple of (ip_address, subnet_mask)

    Raises:
        InvalidNetworkLiteral: If a CIDR string cannot be parsed
    """
    address, mask = ip_address, ""
    if "/" in ip_address:
        interface = _parse_cidr(ip_address)
        address = str(interface.ip)
        mask = prefix_length_to_mask(interface.network.prefixlen)

    if subnet_mask:
        mask = subnet_mask

    return address, mask

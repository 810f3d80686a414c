#!/usr/bin/env python3

# The prefix types used everywhere the blocker deals with addresses.
#
# A V4Prefix is four octets and a length, a V6Prefix is eight 16-bit
# segments and a length, and an IpPrefix wraps exactly one of the two so
# callers have a single type to pass around.  Parsing uses netaddr for the
# address literal itself, the length is handled here.
#
# Note: the length is only required to fit in 8 bits; it is not checked
# against 32 or 128 unless strict=True is passed, so "10.0.0.0/99" parses.

from netaddr import IPAddress, IPNetwork, AddrFormatError, ipv6_full
import re

from errors import MissingComponent, MalformedAddress, MalformedLength

_LENGTH_RE = re.compile(r"\+?[0-9]+", re.ASCII)
MAX_LENGTH = 255

def split_cidr(text):
    # Break "addr/len" into its two parts, only the first '/' counts, anything
    # after a second '/' ends up in the length and fails there
    if not isinstance(text, str):
        raise MalformedAddress(f"expected a string in CIDR form, got {type(text).__name__}", text)
    if "/" not in text:
        raise MissingComponent(f"missing prefix length in '{text}'", text)
    addr, length = text.split("/", 1)
    return addr, length

def parse_length(text, length, max_prefix, strict=False):
    if not _LENGTH_RE.fullmatch(length):
        raise MalformedLength(f"invalid prefix length '{length}' in '{text}'", text)
    value = int(length)
    if value > MAX_LENGTH:
        raise MalformedLength(f"prefix length {value} is out of range in '{text}'", text)
    if strict and value > max_prefix:
        raise MalformedLength(f"prefix length {value} exceeds {max_prefix} in '{text}'", text)
    return value

def parse_address(text, addr, version):
    try:
        return IPAddress(addr, version)
    except (AddrFormatError, ValueError, TypeError) as e:
        raise MalformedAddress(f"failed to parse address '{addr}': {e}", text) from e

class _Prefix:
    __slots__ = ('ip', 'prefix')
    version = None
    max_prefix = None
    width = None
    words = None

    def __init__(self, ip, prefix):
        ip = tuple(ip)
        if len(ip) != self.words:
            raise ValueError(f"IPv{self.version} address needs {self.words} parts, got {len(ip)}")
        top = (1 << self.width) - 1
        for x in ip:
            if not isinstance(x, int) or isinstance(x, bool) or not 0 <= x <= top:
                raise ValueError(f"invalid IPv{self.version} address part {x!r}")
        if not isinstance(prefix, int) or isinstance(prefix, bool) or not 0 <= prefix <= MAX_LENGTH:
            raise ValueError(f"invalid prefix length {prefix!r}")
        object.__setattr__(self, 'ip', ip)
        object.__setattr__(self, 'prefix', prefix)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self.ip, self.prefix))

    @classmethod
    def parse(cls, text, strict=False):
        addr, length = split_cidr(text)
        ip = parse_address(text, addr, cls.version)
        return cls(ip.words, parse_length(text, length, cls.max_prefix, strict))

    def address(self):
        value = 0
        for x in self.ip:
            value = (value << self.width) | x
        return IPAddress(value, self.version)

    @property
    def network(self):
        # Only meaningful for lengths inside the family's width
        if self.prefix > self.max_prefix:
            raise MalformedLength(f"prefix length {self.prefix} exceeds {self.max_prefix}", str(self))
        return IPNetwork(f"{self.address()}/{self.prefix}", version=self.version)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.ip == other.ip and self.prefix == other.prefix

    def __hash__(self):
        return hash((self.version, self.ip, self.prefix))

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"

class V4Prefix(_Prefix):
    __slots__ = ()
    version = 4
    max_prefix = 32
    width = 8
    words = 4

    def __str__(self):
        return f"{self.ip[0]}.{self.ip[1]}.{self.ip[2]}.{self.ip[3]}/{self.prefix}"

class V6Prefix(_Prefix):
    __slots__ = ()
    version = 6
    max_prefix = 128
    width = 16
    words = 8

    def __str__(self):
        # Always the full eight segment form, never "::" compressed, the
        # firewall rules get built from this text
        return f"{self.address().format(dialect=ipv6_full)}/{self.prefix}"

class IpPrefix:
    """
    Either a V4 or a V6 prefix, nothing else.  Build one with IpPrefix.V4(...)
    or IpPrefix.V6(...), or parse one with IpPrefix.parse(...).
    """
    __slots__ = ('family', 'value')
    _families = {"V4": V4Prefix, "V6": V6Prefix}

    def __init__(self, family, value):
        if family not in self._families:
            raise ValueError(f"unknown prefix family {family!r}")
        if not isinstance(value, self._families[family]):
            raise TypeError(f"{family} needs a {self._families[family].__name__}, got {type(value).__name__}")
        object.__setattr__(self, 'family', family)
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name, value):
        raise AttributeError("IpPrefix is immutable")

    def __reduce__(self):
        return (IpPrefix, (self.family, self.value))

    @classmethod
    def V4(cls, value):
        return cls("V4", value)

    @classmethod
    def V6(cls, value):
        return cls("V6", value)

    @classmethod
    def parse(cls, text, strict=False):
        addr, _ = split_cidr(text)
        if ":" in addr:
            return cls.V6(V6Prefix.parse(text, strict))
        return cls.V4(V4Prefix.parse(text, strict))

    @classmethod
    def from_json(cls, text):
        return cls.parse(text)

    def to_json(self):
        return str(self)

    @property
    def is_v4(self):
        return self.family == "V4"

    @property
    def is_v6(self):
        return self.family == "V6"

    def __eq__(self, other):
        if not isinstance(other, IpPrefix):
            return NotImplemented
        return self.family == other.family and self.value == other.value

    def __hash__(self):
        return hash((self.family, self.value))

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f"IpPrefix.{self.family}({self.value!r})"

if __name__ == "__main__":
    print("This module is not meant to be run directly")

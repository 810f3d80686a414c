#!/usr/bin/env python3

# Models for the IP range documents the providers publish.
#
# Each provider gets its own document and entry shape, using the field
# names exactly as they appear in the feed.  The only thing they share is
# the Range protocol: anything that can say how many entries it has, and
# turn those entries into a list of IpPrefix values.

from typing import List, Protocol, runtime_checkable
import json

from errors import AmbiguousPrefix, DocumentError, MissingPrefix
from prefixes import IpPrefix, V4Prefix, V6Prefix

@runtime_checkable
class Range(Protocol):
    def entry_count(self) -> int:
        ...

    def into_prefixes(self) -> List[IpPrefix]:
        ...

def _field(data, name, kind=str, required=True, where="document"):
    # Pull out one field, making sure it's the right type
    if not isinstance(data, dict):
        raise DocumentError(f"expected an object for the {where}, got {type(data).__name__}", name)
    if name not in data or data[name] is None:
        if required:
            raise DocumentError(f"missing field '{name}' in the {where}", name)
        return None
    value = data[name]
    if not isinstance(value, kind):
        raise DocumentError(f"field '{name}' in the {where} should be a {kind.__name__}, got {type(value).__name__}", name)
    return value

def _prefix_field(data, name, cls, where, strict=False):
    value = _field(data, name, required=False, where=where)
    if value is None:
        return None
    return cls.parse(value, strict)

def _load_json(text):
    try:
        return json.loads(text)
    except ValueError as e:
        raise DocumentError(f"json parsing error: {e}") from e

def resolve_entry(index, v4, v6):
    # Exactly one of the two has to be there
    if v4 is not None and v6 is not None:
        raise AmbiguousPrefix(index)
    if v4 is not None:
        return IpPrefix.V4(v4)
    if v6 is not None:
        return IpPrefix.V6(v6)
    raise MissingPrefix(index)

class AwsEntry:
    __slots__ = ('ip_prefix', 'ipv6_prefix', 'region', 'service', 'network_border_group')

    def __init__(self, ip_prefix=None, ipv6_prefix=None, region="", service="", network_border_group=""):
        self.ip_prefix = ip_prefix
        self.ipv6_prefix = ipv6_prefix
        self.region = region
        self.service = service
        self.network_border_group = network_border_group

    @classmethod
    def from_json(cls, data, strict=False):
        where = "AWS prefix entry"
        return cls(
            ip_prefix=_prefix_field(data, "ip_prefix", V4Prefix, where, strict),
            ipv6_prefix=_prefix_field(data, "ipv6_prefix", V6Prefix, where, strict),
            region=_field(data, "region", where=where),
            service=_field(data, "service", where=where),
            network_border_group=_field(data, "network_border_group", where=where),
        )

    def to_json(self):
        ret = {}
        if self.ip_prefix is not None:
            ret["ip_prefix"] = str(self.ip_prefix)
        if self.ipv6_prefix is not None:
            ret["ipv6_prefix"] = str(self.ipv6_prefix)
        ret["region"] = self.region
        ret["service"] = self.service
        ret["network_border_group"] = self.network_border_group
        return ret

    def try_to_prefix(self, index=None):
        return resolve_entry(index, self.ip_prefix, self.ipv6_prefix)

class AwsRange:
    """
    The document from https://ip-ranges.amazonaws.com/ip-ranges.json

    AWS splits its feed into "prefixes" and "ipv6_prefixes", the second list
    is optional here and its entries come after the first list's.
    """
    def __init__(self, sync_token, create_date, prefixes, ipv6_prefixes=None):
        self.sync_token = sync_token
        self.create_date = create_date
        self.prefixes = list(prefixes)
        self.ipv6_prefixes = list(ipv6_prefixes or [])

    @classmethod
    def from_json(cls, data, strict=False):
        where = "AWS document"
        prefixes = _field(data, "prefixes", list, where=where)
        ipv6_prefixes = _field(data, "ipv6_prefixes", list, required=False, where=where) or []
        return cls(
            sync_token=_field(data, "syncToken", where=where),
            create_date=_field(data, "createDate", where=where),
            prefixes=[AwsEntry.from_json(x, strict) for x in prefixes],
            ipv6_prefixes=[AwsEntry.from_json(x, strict) for x in ipv6_prefixes],
        )

    def to_json(self):
        ret = {
            "syncToken": self.sync_token,
            "createDate": self.create_date,
            "prefixes": [x.to_json() for x in self.prefixes],
        }
        if len(self.ipv6_prefixes):
            ret["ipv6_prefixes"] = [x.to_json() for x in self.ipv6_prefixes]
        return ret

    def entries(self):
        return self.prefixes + self.ipv6_prefixes

    def entry_count(self):
        return len(self.prefixes) + len(self.ipv6_prefixes)

    def into_prefixes(self):
        ret = []
        for i, entry in enumerate(self.entries()):
            ret.append(entry.try_to_prefix(i))
        return ret

class GoogleEntry:
    __slots__ = ('ipv4_prefix', 'ipv6_prefix', 'service', 'scope')

    def __init__(self, ipv4_prefix=None, ipv6_prefix=None, service=None, scope=None):
        self.ipv4_prefix = ipv4_prefix
        self.ipv6_prefix = ipv6_prefix
        self.service = service
        self.scope = scope

    @classmethod
    def from_json(cls, data, strict=False):
        where = "Google prefix entry"
        return cls(
            ipv4_prefix=_prefix_field(data, "ipv4Prefix", V4Prefix, where, strict),
            ipv6_prefix=_prefix_field(data, "ipv6Prefix", V6Prefix, where, strict),
            service=_field(data, "service", required=False, where=where),
            scope=_field(data, "scope", required=False, where=where),
        )

    def to_json(self):
        ret = {}
        if self.ipv4_prefix is not None:
            ret["ipv4Prefix"] = str(self.ipv4_prefix)
        if self.ipv6_prefix is not None:
            ret["ipv6Prefix"] = str(self.ipv6_prefix)
        if self.service is not None:
            ret["service"] = self.service
        if self.scope is not None:
            ret["scope"] = self.scope
        return ret

    def try_to_prefix(self, index=None):
        return resolve_entry(index, self.ipv4_prefix, self.ipv6_prefix)

class GoogleRange:
    """
    The document from https://www.gstatic.com/ipranges/goog.json, and
    the Google Cloud one at https://www.gstatic.com/ipranges/cloud.json
    """
    def __init__(self, sync_token, creation_time, prefixes):
        self.sync_token = sync_token
        self.creation_time = creation_time
        self.prefixes = list(prefixes)

    @classmethod
    def from_json(cls, data, strict=False):
        where = "Google document"
        prefixes = _field(data, "prefixes", list, where=where)
        return cls(
            sync_token=_field(data, "syncToken", where=where),
            creation_time=_field(data, "creationTime", where=where),
            prefixes=[GoogleEntry.from_json(x, strict) for x in prefixes],
        )

    def to_json(self):
        return {
            "syncToken": self.sync_token,
            "creationTime": self.creation_time,
            "prefixes": [x.to_json() for x in self.prefixes],
        }

    def entry_count(self):
        return len(self.prefixes)

    def into_prefixes(self):
        ret = []
        for i, entry in enumerate(self.prefixes):
            ret.append(entry.try_to_prefix(i))
        return ret

def load_aws_range(text, strict=False):
    return AwsRange.from_json(_load_json(text), strict)

def load_google_range(text, strict=False):
    return GoogleRange.from_json(_load_json(text), strict)

if __name__ == "__main__":
    print("This module is not meant to be run directly")

#!/usr/bin/env python3

from fetch import fetch_text
from ranges import load_aws_range

URL = "https://ip-ranges.amazonaws.com/ip-ranges.json"
# Other names this provider can be picked by on the command line
ALIASES = {"amazon"}

def get_and_parse(strict=False):
    # AWS publishes one document, with the IPv4 and IPv6 entries in two lists
    doc = load_aws_range(fetch_text(URL), strict)

    return {
        "name": "aws",
        "pretty": "AWS",
        "ranges": [doc],
    }

def test():
    data = get_and_parse()
    print(f"Results for {data['pretty']}:")
    for doc in data['ranges']:
        prefixes = doc.into_prefixes()
        print(f"  Entries: {doc.entry_count():,}")
        print(f"  IPv4: {len([x for x in prefixes if x.is_v4]):,}")
        print(f"  IPv6: {len([x for x in prefixes if x.is_v6]):,}")

if __name__ == "__main__":
    test()

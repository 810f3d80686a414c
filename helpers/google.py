#!/usr/bin/env python3

from fetch import fetch_text
from ranges import load_google_range

# Google publishes the Google Cloud customer ranges and its own ranges in
# two documents with the same layout, block both
URLS = [
    "https://www.gstatic.com/ipranges/cloud.json",
    "https://www.gstatic.com/ipranges/goog.json",
]
ALIASES = {"gcp"}

def get_and_parse(strict=False):
    return {
        "name": "google",
        "pretty": "Google",
        "ranges": [load_google_range(fetch_text(url), strict) for url in URLS],
    }

def test():
    data = get_and_parse()
    print(f"Results for {data['pretty']}:")
    for url, doc in zip(URLS, data['ranges']):
        prefixes = doc.into_prefixes()
        print(f"  {url}")
        print(f"    Entries: {doc.entry_count():,}, created {doc.creation_time}")
        print(f"    IPv4: {len([x for x in prefixes if x.is_v4]):,}")
        print(f"    IPv6: {len([x for x in prefixes if x.is_v6]):,}")

if __name__ == "__main__":
    test()

#!/usr/bin/env python3

from requests import get
import os

from errors import BlockerError

# How long to wait on any one provider before giving up, in seconds
FETCH_TIMEOUT = 30
USER_AGENT = "cloud_blocker/1.0"

def get_timeout():
    value = os.getenv("CLOUD_BLOCKER_TIMEOUT")
    if value is None:
        return FETCH_TIMEOUT
    try:
        return float(value)
    except ValueError as e:
        raise BlockerError(f"Invalid CLOUD_BLOCKER_TIMEOUT value '{value}'") from e

def fetch_text(url, timeout=None):
    # Pull down a provider's document as text, the caller decides how to parse it
    resp = get(url, headers={"User-Agent": USER_AGENT}, timeout=get_timeout() if timeout is None else timeout)
    resp.raise_for_status()
    return resp.text

if __name__ == "__main__":
    print("This module is not meant to be run directly")

#!/usr/bin/env python3

# Turns a list of prefixes into firewall rules.  This is the only place
# that knows anything about iptables or netsh; the prefix list it gets is
# applied in order, one rule per prefix.

import os
import subprocess
import sys

from errors import BlockerError, CommandFailed
from status import DelayMsg, show

# The chain to add DROP rules to, use FORWARD instead to block NAT traffic
CHAIN = os.getenv("CLOUD_BLOCKER_CHAIN", "OUTPUT")
# The name Windows Firewall rules are created under
RULE_NAME = "CloudBlocker"

def _family(platform):
    platform = sys.platform if platform is None else platform
    if platform.startswith("linux") or platform == "darwin":
        return "iptables"
    elif platform == "win32":
        return "netsh"
    raise BlockerError(f"Unsupported platform: {platform}")

def block_commands(ip, platform=None):
    if _family(platform) == "iptables":
        tool = "ip6tables" if ip.is_v6 else "iptables"
        return [[tool, "-A", CHAIN, "-d", str(ip), "-j", "DROP"]]
    else:
        return [[
            "netsh", "advfirewall", "firewall", "add", "rule",
            f"name={RULE_NAME}",
            "dir=out",
            "action=deny",
            "enable=yes",
            f"remoteip={ip}",
            "profile=public",
        ]]

def reset_commands(platform=None):
    if _family(platform) == "iptables":
        return [["iptables", "-F", CHAIN], ["ip6tables", "-F", CHAIN]]
    else:
        return [["netsh", "advfirewall", "reset"]]

def run(cmd, dry_run=False, echo=True):
    # Run a command, raise CommandFailed if it doesn't work
    if echo:
        show("$ " + " ".join([f'"{x}"' if " " in x else x for x in cmd]))
    if dry_run:
        return
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        # Most likely the tool isn't installed, or we can't run it
        raise BlockerError(f"failed to execute command '{cmd[0]}': {e}") from e
    if result.returncode != 0:
        # iptables complains on stderr, netsh on stdout
        raise CommandFailed(cmd, result.returncode, result.stderr or result.stdout or "")

class Blocker:
    def __init__(self, ips, dry_run=False, platform=None):
        self.ips = list(ips)
        self.dry_run = dry_run
        self.platform = platform

    def block(self):
        # Add a rule for each prefix, stopping at the first failure
        total = len(self.ips)
        with DelayMsg(single_line=not self.dry_run) as msg:
            for i, ip in enumerate(self.ips):
                msg(f"Blocking {i + 1:,} of {total:,}: {ip}")
                for cmd in block_commands(ip, self.platform):
                    run(cmd, dry_run=self.dry_run, echo=self.dry_run)
            msg.force(f"Blocked {total:,} prefixes")
        return total

    @staticmethod
    def unblock_all(dry_run=False, platform=None):
        # Resets the firewall rules
        for cmd in reset_commands(platform):
            run(cmd, dry_run=dry_run)

if __name__ == "__main__":
    print("This module is not meant to be run directly")

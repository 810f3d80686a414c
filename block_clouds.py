#!/usr/bin/env python3

# Block (or just list) all of the IP ranges a cloud provider publishes.
#
# Each file in the helpers dir knows how to pull down the documents for one
# provider.  The documents get turned into one ordered list of prefixes,
# which is then handed to the Blocker.

from importlib.util import spec_from_file_location, module_from_spec
import os
import sys

from blocker import Blocker
from errors import BlockerError
from status import show

BASE_DIR = os.path.split(os.path.abspath(__file__))[0]
HELPERS_DIR = os.path.join(BASE_DIR, "helpers")

def load_helpers(helpers_dir=HELPERS_DIR):
    # Load every helper, keyed by its file name
    ret = {}
    for cur in sorted(os.listdir(helpers_dir)):
        if cur.endswith(".py"):
            spec = spec_from_file_location(f"helpers_{cur[:-3]}", os.path.join(helpers_dir, cur))
            mod = module_from_spec(spec)
            spec.loader.exec_module(mod)
            ret[cur[:-3]] = mod
    return ret

def get_prefixes(helper, strict=False):
    # Pull down a provider's documents and turn them into one list of prefixes
    data = helper.get_and_parse(strict=strict)
    if not isinstance(data, dict) or 'name' not in data or 'ranges' not in data:
        raise BlockerError("Invalid return")

    prefixes = []
    entries = 0
    for doc in data['ranges']:
        entries += doc.entry_count()
        prefixes.extend(doc.into_prefixes())
    return data, entries, prefixes

def show_usage(names):
    print("Usage: block_clouds.py [reset] [show] [dryrun] [strict] <provider> [<provider> ...]")
    print("<provider> - Block the ranges of a provider, one of: " + ", ".join(sorted(names)))
    print("reset      - Reset all firewall rules first")
    print("show       - Only show the prefixes, don't block anything")
    print("dryrun     - Show the firewall commands, don't run them")
    print("strict     - Reject prefix lengths over 32 for IPv4 or 128 for IPv6")

def main(argv=None, helpers=None):
    args = sys.argv[1:] if argv is None else argv
    helpers = load_helpers() if helpers is None else helpers

    names = {}
    for name, helper in helpers.items():
        names[name] = name
        for alias in getattr(helper, "ALIASES", ()):
            names[alias] = name

    selected = []
    reset, show_only, dry_run, strict = False, False, False, False
    show_help = False

    for arg in args:
        arg = arg.lower()
        if arg == "reset":
            reset = True
        elif arg == "show":
            show_only = True
        elif arg == "dryrun":
            dry_run = True
        elif arg == "strict":
            strict = True
        elif arg in names:
            if names[arg] not in selected:
                selected.append(names[arg])
        else:
            show_help = True
            break

    if show_help or (len(selected) == 0 and not reset):
        show_usage(names)
        return 1

    # When only showing the prefixes, keep stdout clean for them
    out = sys.stderr if show_only else sys.stdout

    if reset and not show_only:
        try:
            Blocker.unblock_all(dry_run=dry_run)
        except BlockerError as e:
            print("ERROR: " + str(e), file=out)
            return 1

    failed = False
    for name in selected:
        show(f"Working on {name}", file=out)
        try:
            data, entries, prefixes = get_prefixes(helpers[name], strict=strict)
            show(f"{data.get('pretty', name)}: {entries:,} entries, {len(prefixes):,} prefixes", file=out)
            if show_only:
                for prefix in prefixes:
                    print(prefix)
            else:
                Blocker(prefixes, dry_run=dry_run).block()
        except Exception as e:
            print("ERROR: " + str(e), file=out)
            failed = True

    return 1 if failed else 0

if __name__ == "__main__":
    sys.exit(main())

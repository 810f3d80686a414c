#!/usr/bin/env python3

# Everything raised by the blocker derives from BlockerError, so callers
# that only care about "did this provider work" can catch one thing.

class BlockerError(Exception):
    pass

class PrefixError(BlockerError, ValueError):
    # A CIDR string couldn't be turned into a prefix
    def __init__(self, message, text=None):
        super().__init__(message)
        self.text = text

class MissingComponent(PrefixError):
    pass

class MalformedAddress(PrefixError):
    pass

class MalformedLength(PrefixError):
    pass

class DocumentError(BlockerError):
    # The provider document doesn't have the shape we expect
    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field

class NormalizationError(BlockerError):
    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index

class MissingPrefix(NormalizationError):
    def __init__(self, index=None):
        msg = "neither an ipv6 nor ipv4 prefix exists"
        if index is not None:
            msg += f" (entry {index})"
        super().__init__(msg, index)

class AmbiguousPrefix(NormalizationError):
    def __init__(self, index=None):
        msg = "both an ipv4 and an ipv6 prefix exist"
        if index is not None:
            msg += f" (entry {index})"
        super().__init__(msg, index)

class CommandFailed(BlockerError):
    def __init__(self, cmd, code, output):
        super().__init__(f"failed to execute command '{' '.join(cmd)}' (exit code {code}): {output.strip()}")
        self.cmd = cmd
        self.code = code
        self.output = output

if __name__ == "__main__":
    print("This module is not meant to be run directly")

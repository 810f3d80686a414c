#!/usr/bin/env python3

# Status messages for the command line side of things.  Nothing in the
# prefix or range modules prints, only the blocker and the main script do.

from datetime import datetime, timedelta
import sys
if sys.version_info >= (3, 11): from datetime import UTC
else: import datetime as datetime_fix; UTC=datetime_fix.timezone.utc

def _now():
    return datetime.now(UTC).replace(tzinfo=None)

class DelayMsg:
    # Only show a message every so often, useful when blocking a few
    # thousand prefixes one command at a time
    def __init__(self, delay=5, single_line=False, file=None):
        self.file = sys.stdout if file is None else file
        self.next_msg = _now()
        self.delay = delay
        self.single_line = single_line
        self.last_msg = ""

    def __call__(self, value):
        self.show(value)

    def __enter__(self):
        return self

    def __exit__(self, *args, **kargs):
        self.finalize()

    def _clear(self):
        begin = ""
        if self.single_line and len(self.last_msg):
            begin = "\r" + " " * len(self.last_msg) + "\r"
        self.last_msg = ""
        return begin

    def _advance(self, now):
        while now >= self.next_msg:
            self.next_msg += timedelta(seconds=self.delay)

    def show(self, value):
        now = _now()
        if now >= self.next_msg:
            if self.single_line:
                begin = self._clear()
                self.last_msg = show(value, end="", flush=True, begin=begin, file=self.file)
            else:
                show(value, file=self.file)
            self._advance(now)

    def force(self, value):
        show(value, begin=self._clear(), file=self.file)
        self._advance(_now())

    def finalize(self):
        begin = self._clear()
        if len(begin):
            print(begin, end="", flush=True, file=self.file)

def show(value, end="\n", flush=False, begin="", file=None):
    msg = f'{_now().strftime("%d %H:%M:%S")}: {value}'
    print(begin + msg, end=end, flush=flush, file=sys.stdout if file is None else file)
    return msg

if __name__ == '__main__':
    print("This module is not meant to be run directly")

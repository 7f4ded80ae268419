"""Human-readable status messages."""

import time


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


class StatusLog:
    """Prints timestamped status lines and keeps the latest for the overlay."""

    def __init__(self, echo: bool = True):
        self.echo = echo
        self.last: str = ""

    def __call__(self, text: str) -> None:
        self.last = text
        if self.echo:
            print(f"[{_timestamp()}] STATUS: {text}")

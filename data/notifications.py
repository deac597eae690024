"""
Toast Notifications
===================
Process-local, auto-expiring user notifications
"""

import itertools
import time
from dataclasses import dataclass
from typing import Callable, List

import config

TOAST_TYPES = ('success', 'error', 'warning', 'info')


@dataclass
class Toast:
    id: int
    message: str
    type: str
    created_at: float


class ToastQueue:
    """Toasts that disappear ``duration`` seconds after they were shown"""

    def __init__(self, duration: float = config.TOAST_DURATION_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self.clock = clock
        self._ids = itertools.count()
        self._toasts: List[Toast] = []

    def show(self, message: str, type: str = 'info') -> Toast:
        if type not in TOAST_TYPES:
            raise ValueError(f"Unknown toast type: {type}")
        toast = Toast(id=next(self._ids), message=message, type=type, created_at=self.clock())
        self._toasts = self._toasts + [toast]
        return toast

    def active(self) -> List[Toast]:
        """Toasts still visible now; expired ones are dropped"""
        now = self.clock()
        self._toasts = [t for t in self._toasts if now - t.created_at < self.duration]
        return list(self._toasts)

    def __len__(self):
        return len(self.active())

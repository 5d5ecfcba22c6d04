"""
Core — Keyed Transaction Locks

``locked_atomic(*parts)`` opens a transaction and serialises it against
every other transaction that uses the same composite key. Unrelated keys
never contend.

On PostgreSQL the lock is a transaction-scoped advisory lock, released
by the server on COMMIT or ROLLBACK. On other vendors an outermost block
takes an in-process lock per key, held until the block has committed or
rolled back; a nested block runs inside a transaction that already owns
the store's write lock, so callers pair it with ``select_for_update`` on
the rows they mutate.

@file core/locks.py
"""

import hashlib
import threading
from contextlib import contextmanager

from django.db import connection, transaction

_registry_guard = threading.Lock()
# key -> [lock, holders and waiters]; an entry leaves once nobody uses it.
_process_locks: dict[int, list] = {}


def advisory_lock_key(*parts) -> int:
    """Stable bigint key for PostgreSQL advisory lock (same parts = same key)."""
    raw = ':'.join(str(part) for part in parts).encode()
    h = hashlib.sha256(raw).digest()[:8]
    return int.from_bytes(h, 'big') % (2**63)


@contextmanager
def _process_lock(key: int):
    with _registry_guard:
        entry = _process_locks.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _registry_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _process_locks[key]


@contextmanager
def locked_atomic(*parts):
    """Run the enclosed block in a transaction holding an exclusive lock on ``parts``."""
    key = advisory_lock_key(*parts)

    if connection.vendor == 'postgresql':
        with transaction.atomic():
            with connection.cursor() as cursor:
                cursor.execute('SELECT pg_advisory_xact_lock(%s)', [key])
            yield
        return

    if connection.in_atomic_block:
        # Taking the process lock here would invert the order against an
        # outermost holder that is waiting for this transaction to finish.
        with transaction.atomic():
            yield
        return

    with _process_lock(key):
        with transaction.atomic():
            yield

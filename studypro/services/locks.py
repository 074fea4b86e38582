import threading

# Sync handlers run on a thread pool; anything that reads-then-writes a user's
# payments or subscriptions must hold that user's lock until it has committed.
# Users share a fixed set of stripes so the registry never grows.
LOCK_STRIPES = 64

_stripes = tuple(threading.RLock() for _ in range(LOCK_STRIPES))


def user_lock(user_id: int) -> threading.RLock:
    return _stripes[user_id % LOCK_STRIPES]

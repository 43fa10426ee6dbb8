# storefront/repos/cart_repo.py
import json
import threading
import time
from typing import Dict, Tuple

import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from storefront.domain.errors import StorageError
from storefront.domain.schemas import Cart, CartLine
from storefront.utils.logging import get_logger
from storefront.utils.settings import REDIS_URL, SESSION_TTL_SECONDS

logger = get_logger(__name__)


#tenacity retry, transport level only
def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RedisError),
    )


class MemoryCartRepo:
    """
    Session-keyed carts in process memory.
    Each access pushes the expiry forward, like a rolling session cookie.
    Requests run in the threadpool, so the dict is only touched under the lock.
    """

    def __init__(self, ttl_seconds: int = SESSION_TTL_SECONDS, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._carts: Dict[str, Tuple[Cart, float]] = {}
        self._lock = threading.RLock()

    def get(self, session_id: str) -> Cart | None:
        with self._lock:
            self.purge_expired()
            entry = self._carts.get(session_id)
            if entry is None:
                return None
            cart = entry[0]
            self._carts[session_id] = (cart, self.clock() + self.ttl_seconds)
            return cart

    def save(self, cart: Cart) -> None:
        with self._lock:
            self._carts[cart.session_id] = (cart, self.clock() + self.ttl_seconds)

    def purge_expired(self) -> int:
        with self._lock:
            now = self.clock()
            expired = [sid for sid, (_, exp) in self._carts.items() if exp <= now]
            for sid in expired:
                del self._carts[sid]
        if expired:
            logger.info(f"Expired {len(expired)} carts")
        return len(expired)


class RedisCartRepo:
    """
    Carts stored as JSON under cart:<session_id> with a TTL.
    Redis drops the key when the session expires.
    """

    def __init__(self, url: str | None = None, ttl_seconds: int = SESSION_TTL_SECONDS, client=None):
        self.ttl_seconds = ttl_seconds
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(session_id: str) -> str:
        return f"cart:{session_id}"

    def get(self, session_id: str) -> Cart | None:
        try:
            raw = self._read(self._key(session_id))
        except RedisError as e:
            logger.error(f"Failed to read cart for session {session_id}: {e}")
            raise StorageError("Failed to load cart") from e

        if raw is None:
            return None

        try:
            items = [
                CartLine(product_id=i["productId"], quantity=i["quantity"])
                for i in json.loads(raw)
            ]
        except (ValueError, TypeError, KeyError) as e:
            #unreadable value, start over; the next save overwrites it
            logger.warning(f"Discarding malformed cart for session {session_id}: {e}")
            items = []
        return Cart(session_id=session_id, items=items)

    def save(self, cart: Cart) -> None:
        payload = json.dumps(
            [{"productId": i.product_id, "quantity": i.quantity} for i in cart.items]
        )
        try:
            self._write(self._key(cart.session_id), payload)
        except RedisError as e:
            logger.error(f"Failed to save cart for session {cart.session_id}: {e}")
            raise StorageError("Failed to persist cart") from e

    @redis_retry()
    def _read(self, key: str) -> str | None:
        #GETEX refreshes the ttl on read
        return self.redis.getex(key, ex=self.ttl_seconds)

    @redis_retry()
    def _write(self, key: str, payload: str) -> None:
        self.redis.set(name=key, value=payload, ex=self.ttl_seconds)


def make_cart_repo(backend: str):
    if backend == "redis":
        return RedisCartRepo()
    if backend == "memory":
        return MemoryCartRepo()
    raise ValueError(f"Unknown cart backend: {backend}")

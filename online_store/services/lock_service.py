# online_store/services/lock_service.py
import uuid
from contextlib import contextmanager

import redis

from online_store.domain.errors import ConflictError
from online_store.utils.logging import get_logger
from online_store.utils.retry import redis_retry
from online_store.utils.settings import CART_LOCK_TTL_SECONDS, REDIS_SOCKET_TIMEOUT, REDIS_URL

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    -blokada koszyka na czas zmiany statusu (checkout / approve / reject)
    -zwalnianie locka tylko przez wlasciciela (token)
    -TTL, wiec lock padnietego procesu sam wygasa
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
            socket_timeout=REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=REDIS_SOCKET_TIMEOUT,
        )

    @staticmethod
    def _key(cart_id: int) -> str:
        return f"cart:{cart_id}:lock"

    @redis_retry()
    def acquire_cart_lock(self, cart_id: int, ttl: int = CART_LOCK_TTL_SECONDS) -> str | None:
        key = self._key(cart_id)
        token = uuid.uuid4().hex
        logger.info(f"Acquire lock {key}")
        #SET cart:1:lock "<token>" NX EX 30
        acquired = self.redis.set(name=key, value=token, nx=True, ex=ttl)
        return token if acquired else None

    @redis_retry()
    def release_cart_lock(self, cart_id: int, token: str) -> bool:
        key = self._key(cart_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, cart_id: int):
        token = self.acquire_cart_lock(cart_id)
        if token is None:
            logger.warning(f"Koszyk {cart_id} jest zablokowany przez inna operacje")
            raise ConflictError(f"Cart {cart_id} is being modified by another operation")
        try:
            yield
        finally:
            self.release_cart_lock(cart_id, token)

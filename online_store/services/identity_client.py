# online_store/services/identity_client.py
import requests

from online_store.utils.logging import get_logger
from online_store.utils.retry import http_retry
from online_store.utils.settings import IDENTITY_SERVICE_TIMEOUT, IDENTITY_SERVICE_URL

logger = get_logger(__name__)


class IdentityClient:
    """Zewnetrzny dostawca tozsamosci - pytamy go tylko o role admina."""

    def __init__(self, base_url: str | None = None, timeout: int = IDENTITY_SERVICE_TIMEOUT):
        self.base_url = (base_url if base_url is not None else IDENTITY_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    @http_retry()
    def is_admin(self, email: str) -> bool:
        if not self.enabled:
            return False

        url = f"{self.base_url}/users/is-admin/{email}"
        logger.info(f"IdentityClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return bool(resp.json())

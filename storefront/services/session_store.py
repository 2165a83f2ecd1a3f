# storefront/services/session_store.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import uuid

import redis
from pydantic import BaseModel

from storefront.domain.cart import CartStore
from storefront.domain.checkout import CheckoutAggregate, CheckoutSequencer, CheckoutStep
from storefront.domain.schemas import CartItem, DeliveryData, PersonalData
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, SESSION_BACKEND, SESSION_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SessionState(BaseModel):
    """Serializowalny stan sesji (koszyk + checkout)."""

    session_id: str
    items: List[CartItem] = []
    step: CheckoutStep = CheckoutStep.PERSONAL_INFO
    personal_data: Optional[PersonalData] = None
    delivery_data: Optional[DeliveryData] = None


@dataclass
class CheckoutSession:
    session_id: str
    cart: CartStore = field(default_factory=CartStore)
    checkout: CheckoutSequencer = field(default_factory=CheckoutSequencer)

    @classmethod
    def from_state(cls, state: SessionState) -> "CheckoutSession":
        return cls(
            session_id=state.session_id,
            cart=CartStore(state.items),
            checkout=CheckoutSequencer(
                step=state.step,
                aggregate=CheckoutAggregate(
                    personal_data=state.personal_data,
                    delivery_data=state.delivery_data,
                ),
            ),
        )

    def to_state(self) -> SessionState:
        return SessionState(
            session_id=self.session_id,
            items=self.cart.items,
            step=self.checkout.step,
            personal_data=self.checkout.aggregate.personal_data,
            delivery_data=self.checkout.aggregate.delivery_data,
        )


class SessionStore:
    """
    Wspolny kontrakt: create / load / save / delete.
    Jedna sesja = jeden pisarz (aktywna karta przegladarki), bez lockow.
    """

    def create(self) -> CheckoutSession:
        session = CheckoutSession(session_id=uuid.uuid4().hex)
        self.save(session)
        logger.info(f"Created session {session.session_id}")
        return session

    def load(self, session_id: str) -> CheckoutSession:
        raw = self._get(session_id)
        if raw is None:
            raise LookupError("Session not found or expired")
        return CheckoutSession.from_state(SessionState.model_validate_json(raw))

    def save(self, session: CheckoutSession) -> None:
        self._set(session.session_id, session.to_state().model_dump_json())

    def delete(self, session_id: str) -> None:
        self._delete(session_id)

    def _get(self, session_id: str) -> str | None:
        raise NotImplementedError

    def _set(self, session_id: str, payload: str) -> None:
        raise NotImplementedError

    def _delete(self, session_id: str) -> None:
        raise NotImplementedError


class RedisSessionStore(SessionStore):
    def __init__(self, url: str | None = None, ttl: int = SESSION_TTL_SECONDS, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self.ttl = ttl

    @staticmethod
    def _key(session_id: str) -> str:
        return f"session:{session_id}"

    @redis_retry()
    def _get(self, session_id: str) -> str | None:
        return self.redis.get(self._key(session_id))

    @redis_retry()
    def _set(self, session_id: str, payload: str) -> None:
        # kazdy zapis przedluza waznosc sesji
        self.redis.set(self._key(session_id), payload, ex=self.ttl)

    @redis_retry()
    def _delete(self, session_id: str) -> None:
        self.redis.delete(self._key(session_id))


class InMemorySessionStore(SessionStore):
    """Dla lokalnego developmentu (SESSION_BACKEND=memory), bez TTL."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def _get(self, session_id: str) -> str | None:
        return self._data.get(session_id)

    def _set(self, session_id: str, payload: str) -> None:
        self._data[session_id] = payload

    def _delete(self, session_id: str) -> None:
        self._data.pop(session_id, None)


def build_session_store(backend: str = SESSION_BACKEND) -> SessionStore:
    if backend == "redis":
        return RedisSessionStore()
    if backend == "memory":
        return InMemorySessionStore()
    raise ValueError(f"Unknown SESSION_BACKEND: {backend}")

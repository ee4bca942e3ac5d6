# playground/share/loader.py
# Load a shared session once per playground session

from __future__ import annotations

import logging
from enum import Enum

from playground.share.codec import parse_url
from playground.share.session import PlaygroundSession
from playground.share.validation import get_validated_store_item
from playground.store.manager import StoreManager
from playground.utils.logger import log_exception

logger = logging.getLogger(__name__)

LOADING_SCOPE = "init_share"


class LoaderState(Enum):
    IDLE = "idle"
    LOADING = "loading"


class ShareLoader:
    """
    Hydrates a PlaygroundSession from the share reference in its URL.

    States:
    - IDLE: nothing in flight. The first trigger with both editors attached
      consumes the one-shot and moves to LOADING.
    - LOADING: provider load in flight. Further triggers are no-ops.

    Any failure (provider lookup, load, apply) leaves the session as it was
    and returns to IDLE. Nothing is raised to the trigger.
    """

    def __init__(self, manager: StoreManager):
        self.manager = manager
        self._state = LoaderState.IDLE
        self._did_init = False

    @property
    def state(self) -> LoaderState:
        return self._state

    @property
    def did_init(self) -> bool:
        return self._did_init

    def _transition_to(self, new_state: LoaderState) -> None:
        if self._state != new_state:
            logger.debug(f"ShareLoader: {self._state.value} -> {new_state.value}")
            self._state = new_state

    async def init_share(self, session: PlaygroundSession, url: str) -> bool:
        """Load the share referenced by url into session.

        Returns True only when a share was loaded and applied.
        """
        # guard runs before the first await so concurrent triggers see it
        if self._did_init or self._state is LoaderState.LOADING:
            return False
        if not session.editors_ready:
            return False
        self._did_init = True

        item = parse_url(url)
        if item is None:
            logger.info("ShareLoader: no share item")
            return False

        self._transition_to(LoaderState.LOADING)
        session.set_loading(LOADING_SCOPE, True)
        try:
            raw = await self.manager.load(item.store_provider_id, item.value)
            logger.info(f"ShareLoader: loaded provider={item.store_provider_id.value}")
            session.hydrate(get_validated_store_item(raw))
            return True
        except Exception as e:
            log_exception(e, f"ShareLoader: loading share from {item.store_provider_id.value}")
            return False
        finally:
            session.set_loading(LOADING_SCOPE, False)
            self._transition_to(LoaderState.IDLE)

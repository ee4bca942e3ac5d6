# playground/handlers/share_handler.py
# Tornado handlers for the share API

import json

import tornado.web

from playground.config import get_settings
from playground.constants import STORE_PROVIDER_ID_VALUES, StoreProviderId
from playground.share.validation import get_validated_store_item
from playground.store.errors import STORE_FAILURES, ShareDecodeError, ShareNotFoundError
from playground.store.manager import StoreManager
from playground.utils.logger import json_error, json_response, log_exception, log_info


class _ShareHandler(tornado.web.RequestHandler):

    def initialize(self, manager: StoreManager):
        self.manager = manager

    def _provider_id(self, provider: str):
        if provider not in STORE_PROVIDER_ID_VALUES:
            json_error(self, "PROVIDER_NOT_FOUND", f"Unknown store provider '{provider}'", 404)
            return None
        return StoreProviderId(provider)


class ShareSaveHandler(_ShareHandler):
    """POST /api/share - validate and save a session, return its share link."""

    async def post(self):
        try:
            body = json.loads(self.request.body.decode('utf-8'))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log_info(f"ShareSaveHandler: invalid JSON - {e}")
            json_error(self, "VALIDATION_ERROR", "Invalid JSON body", 400)
            return

        if not isinstance(body, dict) or not isinstance(body.get("provider"), str):
            json_error(self, "VALIDATION_ERROR", "Body must be an object with a 'provider' string", 400)
            return

        provider_id = self._provider_id(body["provider"])
        if provider_id is None:
            return

        item = get_validated_store_item(body.get("state"))
        try:
            share_item, url = await self.manager.share(provider_id, item, get_settings().SHARE_BASE_URL)
        except STORE_FAILURES as e:
            log_exception(e, "ShareSaveHandler: error saving share")
            json_error(self, "STORE_ERROR", "Store provider unavailable", 503)
            return

        json_response(
            self,
            {"provider": provider_id.value, "value": share_item.value, "url": url},
            status=201,
        )


class ShareLoadHandler(_ShareHandler):
    """GET /api/share/<provider>/<value> - load a share and return it validated."""

    async def get(self, provider: str, value: str):
        provider_id = self._provider_id(provider)
        if provider_id is None:
            return

        try:
            raw = await self.manager.load(provider_id, value)
        except ShareNotFoundError as e:
            json_error(self, "NOT_FOUND", str(e), 404)
            return
        except ShareDecodeError as e:
            json_error(self, "VALIDATION_ERROR", str(e), 400)
            return
        except STORE_FAILURES as e:
            log_exception(e, "ShareLoadHandler: error loading share")
            json_error(self, "STORE_ERROR", "Store provider unavailable", 503)
            return

        json_response(self, get_validated_store_item(raw).to_payload())

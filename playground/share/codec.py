# playground/share/codec.py
# Embed a ShareItem in a playground URL and read it back

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from playground.constants import (
    SHARE_PARAM_PROVIDER,
    SHARE_PARAM_VALUE,
    STORE_PROVIDER_ID_VALUES,
    StoreProviderId,
)
from playground.share.models import ShareItem

logger = logging.getLogger(__name__)


def make_share_url(base_url: str, item: ShareItem) -> str:
    """Return base_url with the share reference in its fragment.

    Any fragment already on base_url is replaced; path and query are kept.
    """
    parts = urlsplit(base_url)
    fragment = urlencode({
        SHARE_PARAM_PROVIDER: item.store_provider_id.value,
        SHARE_PARAM_VALUE: item.value,
    })
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, fragment))


def _item_from_params(params: dict[str, list[str]]) -> Optional[ShareItem]:
    providers = params.get(SHARE_PARAM_PROVIDER)
    values = params.get(SHARE_PARAM_VALUE)
    if not providers or not values:
        return None
    provider, value = providers[0], values[0]
    if provider not in STORE_PROVIDER_ID_VALUES or not value:
        return None
    return ShareItem(store_provider_id=StoreProviderId(provider), value=value)


def parse_url(url: str) -> Optional[ShareItem]:
    """Decode the share reference of a playground URL.

    The fragment wins over the query string. Returns None when the URL
    carries no usable reference.
    """
    try:
        parts = urlsplit(url)
    except (TypeError, ValueError) as e:
        logger.info(f"parse_url: unparseable url - {e}")
        return None

    for section in (parts.fragment, parts.query):
        if not section:
            continue
        item = _item_from_params(parse_qs(section, keep_blank_values=False))
        if item is not None:
            return item
    return None

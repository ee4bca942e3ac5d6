# playground/routes/api_routes.py

import tornado.web

from playground import config
from playground.handlers.share_handler import ShareLoadHandler, ShareSaveHandler
from playground.observability.metrics import PrometheusMetricsHandler
from playground.store.manager import StoreManager


def make_app(manager: StoreManager):
    """
    Creates and configures the Tornado application instance.
    All share handlers use the one StoreManager passed in.
    """
    settings = {
        "debug": config.DEBUG,
        # Enable automatic gzip compression for eligible responses
        "compress_response": True,
    }

    return tornado.web.Application([
        (r"/api/share", ShareSaveHandler, {"manager": manager}),
        (r"/api/share/([^/]+)/([^/]+)", ShareLoadHandler, {"manager": manager}),
        # expose /metrics for Prometheus
        (r"/metrics", PrometheusMetricsHandler),
    ], **settings)

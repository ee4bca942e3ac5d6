# playground/main.py

import asyncio
import signal

import tornado.ioloop

import playground.config as config
from playground.db.base import async_engine
from playground.observability.logger import configure_logging
from playground.observability.tracing import init_tracing
from playground.routes.api_routes import make_app
from playground.store.manager import StoreManager
from playground.store.providers.redis_provider import RedisStoreProvider
from playground.store.registry import associate_providers
from playground.utils.logger import log_info

# A global list to hold shutdown tasks
shutdown_tasks = []


async def shutdown():
    """ Gracefully run all registered shutdown tasks. """
    log_info("Starting graceful shutdown...")
    await asyncio.gather(*[task() for task in shutdown_tasks])
    log_info("Shutdown complete.")
    tornado.ioloop.IOLoop.current().stop()


def handle_signal(sig, frame):
    """ Signal handler to initiate graceful shutdown. """
    sig_name = getattr(sig, "name", str(sig))  # handle int signum
    log_info(f"Received exit signal {sig_name}...")
    tornado.ioloop.IOLoop.current().add_callback_from_signal(shutdown)


async def main():
    """ Main entry point for the application startup. """
    # 0. Structured JSON logging and tracing as early as possible
    configure_logging(config)
    init_tracing(config, engine=async_engine, tornado=True)

    # 1. Build the provider registry once; a misconfigured provider stops startup here.
    providers = associate_providers(config.settings)
    manager = StoreManager(providers, timeout=config.settings.STORE_TIMEOUT_SECONDS)

    # 2. Release backend connections on shutdown.
    async def close_backends():
        for provider in providers.values():
            if isinstance(provider, RedisStoreProvider):
                await provider.close()
        await async_engine.dispose()
        log_info("Store backends closed.")
    shutdown_tasks.append(close_backends)

    # 3. Create and start the Tornado application.
    app = make_app(manager)
    app.listen(config.PORT, address=config.HOST)
    log_info(f"Server started at http://{config.HOST}:{config.PORT}")


if __name__ == "__main__":
    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)  # Handles Ctrl+C

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    loop.run_until_complete(main())
    loop.run_forever()

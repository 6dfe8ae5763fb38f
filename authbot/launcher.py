"""Entry point: load config, connect to Discord, shut down on SIGINT/SIGTERM."""

import asyncio
import signal
import sys
from typing import Optional, Sequence

import discord

from authbot.config import AppConfig, ConfigurationError, load_config
from authbot.adapters.discord.bot import AuthBot

EXIT_OK = 0
EXIT_FAILURE = 1


def _log(msg: str):
    print(msg, flush=True)


def _install_signal_handlers(shutdown: asyncio.Event):
    loop = asyncio.get_running_loop()

    def handle_shutdown(sig):
        _log(f"[authbot] received {sig.name}, shutting down")
        shutdown.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, handle_shutdown, sig)
        except NotImplementedError:
            # Windows: only SIGINT can be caught, via signal.signal
            if sig == signal.SIGINT:
                signal.signal(
                    signal.SIGINT,
                    lambda s, f: loop.call_soon_threadsafe(handle_shutdown, signal.SIGINT),
                )


async def run_bot(config: AppConfig, bot: Optional[AuthBot] = None) -> int:
    """Run until a shutdown signal arrives or the connection fails."""
    bot = bot or AuthBot(config)
    shutdown = asyncio.Event()
    _install_signal_handlers(shutdown)

    bot_task = asyncio.create_task(bot.start(config.token))
    wait_task = asyncio.create_task(shutdown.wait())
    try:
        done, _ = await asyncio.wait(
            {bot_task, wait_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if bot_task in done:
            bot_task.result()
            _log("[authbot] connection closed")
            return EXIT_OK
        _log("[authbot] shutdown requested")
        return EXIT_OK
    # ClientException covers LoginFailure and PrivilegedIntentsRequired
    except (discord.ClientException, discord.HTTPException, discord.GatewayNotFound) as e:
        _log(f"[authbot] Error connecting to discord: {e}")
        return EXIT_FAILURE
    finally:
        wait_task.cancel()
        if not bot.is_closed():
            await bot.close()
        if not bot_task.done():
            bot_task.cancel()
            try:
                await bot_task
            except asyncio.CancelledError:
                pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config(argv).validate()
    except ConfigurationError as e:
        _log(str(e))
        return EXIT_FAILURE

    _log(
        f"[authbot] starting: command={config.bot.command_prefix}{config.bot.command_name} "
        f"role={config.bot.default_role_name!r}"
    )
    _log("[authbot] Press Ctrl-C to shutdown")
    try:
        return asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        return EXIT_OK


def run():
    """Synchronous entry point for the ``authbot`` console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()

from __future__ import annotations
import asyncio, logging
from .arbitrage import ArbitrageLoop, TradeJournal
from .config import load_settings, setup_logging
from .counter import BinanceFuturesVenue
from .sdk import AsterSDK


async def main(config_path: str = "config.json"):
    setup_logging()
    settings = load_settings(config_path)
    logging.info("Arbitrage booting…")
    logging.info("ASTER=%s | symbol=%s | counter=%s | authenticated=%s",
                 settings.aster.base_url, settings.trading.symbol,
                 settings.trading.counter_symbol, settings.aster.is_authenticated)

    sdk = AsterSDK(settings.aster)
    venue = BinanceFuturesVenue(settings.binance_api_key, settings.binance_api_secret)
    loop = ArbitrageLoop(sdk, venue, settings.trading, journal=TradeJournal(settings.trading.log_dir))
    try:
        await loop.run()
    finally:
        await venue.close()
        await sdk.aclose()


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()

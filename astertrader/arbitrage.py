from __future__ import annotations
import asyncio, logging, time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from .config import TradingConfig
from .counter import generate_strategy_id
from .schemas import OrderBook, OrderStatus, QueryOrderParams
from .sdk import AsterSDK
from .utils import fmt_amount


class TradeJournal:
    """Append-only daily text log: `<log_dir>/arbitrage_<YYYY-MM-DD>.txt`, one line per event."""

    def __init__(self, log_dir: Union[str, Path] = "logs"):
        self.log_dir = Path(log_dir)

    def path_for(self, when: datetime) -> Path:
        return self.log_dir / f"arbitrage_{when.strftime('%Y-%m-%d')}.txt"

    async def record(self, message: str):
        await asyncio.to_thread(self._append, message)

    def _append(self, message: str):
        now = datetime.now(timezone.utc)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        with open(self.path_for(now), "a", encoding="utf-8") as f:
            f.write(f"[{now.isoformat()}] {message}\n")


def best_price(levels: Optional[Sequence[Sequence[Any]]]) -> Optional[float]:
    if not levels:
        return None
    try:
        px = float(levels[0][0])
    except (TypeError, ValueError, IndexError):
        return None
    return px if px > 0 else None


class ArbitrageLoop:
    """
    Polls Aster spot and the counter venue, and when the top-of-book ratio clears
    a threshold, takes the Aster leg at market and hedges on the counter venue
    only once the Aster order reports FILLED.

    Iterations are strictly sequential: fetch both books concurrently, run the
    buy check, run the sell check, sleep `loop_delay_ms`. No state survives an
    iteration. Errors end the iteration, never the loop.
    """

    def __init__(self, sdk: AsterSDK, counter: Any, cfg: TradingConfig,
                 journal: Optional[TradeJournal] = None,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.sdk = sdk
        self.counter = counter
        self.cfg = cfg
        self.journal = journal or TradeJournal(cfg.log_dir)
        self._sleep = sleep

    async def run(self, max_iterations: Optional[int] = None):
        logging.info("Arbitrage loop start: %s vs %s | buy>%.4f sell>%.4f amount=%s delay=%dms",
                     self.cfg.symbol, self.cfg.counter_symbol, self.cfg.buy_threshold,
                     self.cfg.sell_threshold, fmt_amount(self.cfg.once_amount), self.cfg.loop_delay_ms)
        n = 0
        while max_iterations is None or n < max_iterations:
            n += 1
            try:
                await self.run_once()
            except Exception as e:
                logging.exception("[ARB] iteration error: %s", e)
            await self._sleep(self.cfg.loop_delay_ms / 1000)

    async def run_once(self):
        cfg = self.cfg
        logging.debug("[ARB] fetching order books")
        counter_book, aster_book = await asyncio.gather(
            self.counter.fetch_order_book(cfg.counter_book_symbol, cfg.depth_limit),
            self.sdk.market.get_depth(cfg.symbol, cfg.depth_limit),
        )
        await self.handle_buy(counter_book, aster_book)
        await self.handle_sell(counter_book, aster_book)

    # -------- Aster buy -> counter sell --------
    async def handle_buy(self, counter_book: dict, aster_book: OrderBook):
        try:
            counter_bid = best_price(counter_book.get("bids"))
            aster_ask = best_price(aster_book.asks)
            if not counter_bid or not aster_ask:
                logging.debug("[ARB] buy check skipped: missing price level")
                return

            profit = counter_bid / aster_ask
            logging.info("[ARB] buy check: %.6f", profit)
            if profit <= self.cfg.buy_threshold:
                return

            started = time.monotonic()
            await self.journal.record(
                f"BUY opportunity profit={profit:.6f} counter_bid={counter_bid} aster_ask={aster_ask}"
            )
            filled = await self._take_aster_leg("BUY")
            if filled:
                await self._hedge("sell", "AS_BUY", started)
                await self.log_account_status()
        except Exception as e:
            logging.exception("[ARB] buy arbitrage error: %s", e)

    # -------- Aster sell -> counter buy --------
    async def handle_sell(self, counter_book: dict, aster_book: OrderBook):
        try:
            counter_ask = best_price(counter_book.get("asks"))
            aster_bid = best_price(aster_book.bids)
            if not counter_ask or not aster_bid:
                logging.debug("[ARB] sell check skipped: missing price level")
                return

            profit = aster_bid / counter_ask
            logging.info("[ARB] sell check: %.6f", profit)
            if profit <= self.cfg.sell_threshold:
                return

            started = time.monotonic()
            await self.journal.record(
                f"SELL opportunity profit={profit:.6f} aster_bid={aster_bid} counter_ask={counter_ask}"
            )
            filled = await self._take_aster_leg("SELL")
            if filled:
                await self._hedge("buy", "AS_SELL", started)
        except Exception as e:
            logging.exception("[ARB] sell arbitrage error: %s", e)

    # -------- legs --------
    async def _take_aster_leg(self, side: str) -> bool:
        spot = self.sdk.spot
        if spot is None:
            logging.warning("[ARB] %s opportunity ignored: Aster API keys not configured", side)
            return False

        qty = fmt_amount(self.cfg.once_amount)
        if side == "BUY":
            order = await spot.market_buy(self.cfg.symbol, qty)
        else:
            order = await spot.market_sell(self.cfg.symbol, qty)
        result = await spot.query_order(QueryOrderParams(symbol=self.cfg.symbol, order_id=order.order_id))
        logging.info("[ARB] Aster %s result: id=%s status=%s executed=%s avg=%s",
                     side, result.order_id, result.status, result.executed_qty, result.avg_price)
        if result.status != OrderStatus.FILLED.value:
            await self.journal.record(f"{side} order {result.order_id} not filled (status={result.status}), no hedge")
            return False
        return True

    async def _hedge(self, side: str, prefix: str, started: float):
        await self.counter.create_order(
            self.cfg.counter_symbol, "market", side, self.cfg.once_amount, None,
            {"newClientStrategyId": generate_strategy_id(prefix)},
        )
        elapsed_ms = int((time.monotonic() - started) * 1000)
        msg = f"{prefix} arbitrage complete: counter {side} {fmt_amount(self.cfg.once_amount)} in {elapsed_ms}ms"
        logging.info("[ARB] %s", msg)
        await self.journal.record(msg)

    async def log_account_status(self):
        if self.sdk.spot is not None:
            balance = await self.sdk.spot.get_balance(self.cfg.base_asset)
            logging.info("[ARB] Aster %s balance: %s", self.cfg.base_asset,
                         balance.model_dump() if balance else None)
        positions = await self.counter.fetch_positions([self.cfg.counter_symbol])
        if positions:
            logging.info("[ARB] counter position: %s", positions[0].get("info", positions[0]))

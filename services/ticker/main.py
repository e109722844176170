from core.config import Settings
from core.logging import configure, info, err
from core.ticker import Ticker, TickerConfig

def main():
    s = Settings()
    configure(s.LOG_LEVEL)
    ticker = Ticker(TickerConfig())
    info("starting ticker", service=s.SERVICE_NAME,
         tick_interval_ms=ticker.config.tick_interval_ms,
         report_interval=ticker.config.report_interval)
    try:
        ticker.run()
    except OSError as e:
        # Output stream failures are fatal.
        err("stdout_lost", error=str(e), tick=ticker.count)
        raise

if __name__ == "__main__":
    main()

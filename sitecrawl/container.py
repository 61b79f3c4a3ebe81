"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from sitecrawl import config as env
from sitecrawl.services.crawl_executor import CrawlExecutor
from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.fetch_dispatcher import FetchDispatcher
from sitecrawl.services.fetcher import HttpServiceFetcher
from sitecrawl.services.http_service import HttpService, build_session
from sitecrawl.services.link_extractor import LinkExtractor


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# USER_AGENT (str, default: "SiteCrawl/1.0 (site-crawler)")
#   Product string sent with every request.
#
# HTTP_TIMEOUT (int seconds | optional)
#   Per-request timeout. Unset means requests wait indefinitely, so a hanging
#   server holds its slot of the concurrency cap.
#
# FETCH_WORKERS (int | optional)
#   Size of the fetch worker pool and of the HTTP connection pool. Unset uses
#   the ThreadPoolExecutor default. Independent of the `-t` concurrency cap.
#
# SITECRAWL_POLL_INTERVAL (float seconds, default: 0.1)
#   How long the control loop waits for a completion before re-checking the
#   stop event.
ENV = {
    "USER_AGENT": env.user_agent(),
    "HTTP_TIMEOUT": env.http_timeout(),
    "FETCH_WORKERS": env.fetch_workers(),
    "SITECRAWL_POLL_INTERVAL": env.poll_interval_seconds(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SiteCrawl."""

    config = providers.Configuration(default=ENV)

    # One session per process so every fetch reuses the same connection pool.
    http_session = providers.Singleton(
        build_session,
        user_agent=config.USER_AGENT.as_(str),
        pool_size=config.FETCH_WORKERS,
    )

    http_service = providers.Singleton(
        HttpService,
        session=http_session,
        timeout=config.HTTP_TIMEOUT,
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    fetch_dispatcher = providers.Factory(
        FetchDispatcher,
        fetcher=page_fetcher,
        max_workers=config.FETCH_WORKERS,
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        dispatcher=fetch_dispatcher,
        link_extractor=link_extractor,
        poll_interval=config.SITECRAWL_POLL_INTERVAL.as_(float),
    )


def build_crawl_executor(container: Container, run_config) -> CrawlExecutor:
    """Create an executor for one run; the blacklist comes from the run's filters."""
    return container.crawl_executor(
        run_config=run_config,
        crawl_policy=CrawlPolicy(run_config.filters),
    )

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .config import CatalogConfig
from .embed import embed_strategy_for
from .errors import FetchError, ParseError
from .fallback import fallback_records
from .fetcher import CatalogFetcher
from .normalizer import CourseNormalizer, random_id, stable_id
from .parsers import RawRecord, canonical_record, parse_records
from .store import CatalogStore

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load courses."


@dataclass(slots=True)
class CatalogLoad:
    store: CatalogStore
    source: str
    error: str | None = None


def build_normalizer(config: CatalogConfig) -> CourseNormalizer:
    return CourseNormalizer(
        embed_strategy=embed_strategy_for(config.video_host),
        id_factory=stable_id if config.deterministic_ids else random_id,
    )


async def _fetch_records(config: CatalogConfig, url: str, client: httpx.AsyncClient | None) -> list[RawRecord]:
    text = await CatalogFetcher(config, client=client).fetch_text(url)
    records = parse_records(text, config.source_mode)
    return [canonical_record(r, config.source_mode) for r in records]


async def load_catalog(
    config: CatalogConfig,
    store: CatalogStore | None = None,
    client: httpx.AsyncClient | None = None,
) -> CatalogLoad:
    """Fetch, parse and normalize the catalog, then replace ``store`` with the result.

    Network failures fall back to the built-in dataset. A malformed table-query
    envelope does not: the store is emptied and the load carries an error
    message for the listing area instead.
    """
    store = store if store is not None else CatalogStore()
    normalizer = build_normalizer(config)

    if not config.sheet_url:
        logger.info("No sheet URL configured; using fallback courses")
        records, source = fallback_records(), "fallback"
    else:
        try:
            records, source = await _fetch_records(config, config.sheet_url, client), "remote"
        except FetchError as exc:
            logger.warning("Failed to fetch courses, using fallback data: %s", exc)
            records, source = fallback_records(), "fallback"
        except ParseError as exc:
            logger.error("Could not parse course data from %s: %s", config.sheet_url, exc)
            store.replace(())
            return CatalogLoad(store=store, source="failed", error=LOAD_FAILED_MESSAGE)

    store.replace(normalizer.normalize_all(records))
    logger.info("Loaded %s courses (%s)", len(store), source)
    return CatalogLoad(store=store, source=source)

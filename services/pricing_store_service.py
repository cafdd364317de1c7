"""
Pricing store: per-collection rate configuration, persisted across sessions.

The mapping is read once from the key-value store when the store is built
and written back in full after every mutation.
"""

from typing import Iterable, Optional
import structlog

from models.pricing import PricingConfig
from parsers.pricing_input_parser import (
    parse_rate,
    parse_percent,
    parse_pricing_state,
    dump_pricing_state,
)
from integrations.key_value_store import KeyValueStore
from exceptions import InvalidRateError

logger = structlog.get_logger(__name__)

DEFAULT_STORAGE_KEY = "jpm_pricing"


class PricingStore:
    """
    Mapping of collection id → PricingConfig.

    Invariants:
        - after reconcile(ids), every id has an entry (default {0, 0})
        - entries are never removed, even when a collection disappears
        - a rejected save() leaves the mapping untouched
    """

    def __init__(self, kv_store: KeyValueStore, storage_key: str = DEFAULT_STORAGE_KEY):
        self.kv_store = kv_store
        self.storage_key = storage_key
        self._entries: dict[str, PricingConfig] = self._load()

    # ===================
    # PERSISTENCE
    # ===================

    def _load(self) -> dict[str, PricingConfig]:
        raw: Optional[str]
        try:
            raw = self.kv_store.get(self.storage_key)
        except Exception as e:
            logger.warning("pricing_state_read_failed", key=self.storage_key, error=str(e))
            raw = None

        result = parse_pricing_state(raw)
        if not result.success:
            logger.warning(
                "pricing_state_corrupt",
                key=self.storage_key,
                error=result.error
            )
            return {}

        if result.dropped_keys:
            logger.warning(
                "pricing_state_entries_dropped",
                key=self.storage_key,
                dropped=result.dropped_keys
            )

        logger.info("pricing_state_loaded", key=self.storage_key, entries=len(result.entries))
        return result.entries

    def _persist(self) -> None:
        self.kv_store.set(self.storage_key, dump_pricing_state(self._entries))

    # ===================
    # READ OPERATIONS
    # ===================

    def get(self, collection_id: str) -> PricingConfig:
        """Config for a collection, {0, 0} when unknown."""
        config = self._entries.get(collection_id)
        return config.model_copy() if config else PricingConfig()

    def has(self, collection_id: str) -> bool:
        return collection_id in self._entries

    def is_valid(self, collection_id: str) -> bool:
        """True when the collection has a rate greater than zero."""
        config = self._entries.get(collection_id)
        return config is not None and config.is_valid

    def snapshot(self) -> dict[str, PricingConfig]:
        """Copy of the whole mapping."""
        return {key: config.model_copy() for key, config in self._entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def reconcile(self, collection_ids: Iterable[str]) -> list[str]:
        """
        Add a default entry for every collection not yet configured.

        Existing entries are never overwritten or removed. Running it twice
        with the same ids changes nothing the second time.

        Args:
            collection_ids: Ids of the currently loaded catalog

        Returns:
            Ids that received a default entry

        Raises:
            DatabaseError: Write failed; no defaults are kept in memory
        """
        added = []
        for collection_id in collection_ids:
            if collection_id not in self._entries:
                self._entries[collection_id] = PricingConfig()
                added.append(collection_id)

        if added:
            try:
                self._persist()
            except Exception:
                for collection_id in added:
                    del self._entries[collection_id]
                logger.warning("reconcile_persist_failed", added=len(added))
                raise
            logger.info("reconcile_added_defaults", added=len(added), total=len(self._entries))

        return added

    def save(self, collection_id: str, rate, percent=None) -> PricingConfig:
        """
        Store rate and percent for a collection.

        Args:
            collection_id: Collection GID
            rate: Rate per gram as typed (text or number); must be > 0
            percent: Markup percent as typed; non-numeric counts as 0

        Returns:
            The stored PricingConfig

        Raises:
            InvalidRateError: Rate missing, non-numeric or not positive
        """
        rate_result = parse_rate(rate)
        if not rate_result.success:
            logger.info("pricing_save_rejected", collection_id=collection_id, rate=rate)
            raise InvalidRateError(rate, rate_result.error)

        config = PricingConfig(
            rate_per_gram=rate_result.value,
            percent=parse_percent(percent),
        )
        previous = self._entries.get(collection_id)
        self._entries[collection_id] = config

        try:
            self._persist()
        except Exception:
            # keep memory and storage in step
            if previous is None:
                del self._entries[collection_id]
            else:
                self._entries[collection_id] = previous
            raise

        logger.info(
            "pricing_saved",
            collection_id=collection_id,
            rate_per_gram=config.rate_per_gram,
            percent=config.percent
        )
        return config.model_copy()

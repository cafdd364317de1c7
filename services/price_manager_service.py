"""
Price manager service.

Hosts the state of the price manager screen: the session catalog, the
collection selection and the pricing store. Every merchant action goes
through here.
"""

from datetime import datetime, timezone
from typing import Optional
import re
import structlog

from config import settings
from integrations.key_value_store import create_key_value_store
from models.base import Notice
from models.catalog import Collection, CollectionSummary
from models.pricing import PricingConfig, RateCard, MetalTheme
from models.selection import SelectionResponse
from models.price_update import PreviewResponse, PriceUpdateOutcome
from services.catalog_service import CatalogService
from services.pricing_store_service import PricingStore
from services.price_update_service import PriceUpdateService, get_price_update_service
from services.selection_service import SelectionStateMachine, TransitionResult
from services.collection_summary_service import summarize
from services.change_set_service import (
    build_changes,
    build_preview,
    PRICE_DEAD_BAND,
    DEFAULT_CURRENCY_SYMBOL,
)
from services.price_calculator import format_markup
from utils.text_utils import normalize_label
from exceptions import (
    CollectionNotFoundError,
    EmptySelectionError,
    SelectionNotConfirmedError,
    InvalidPricingError,
    NoVariantsError,
    ExternalServiceError,
)

logger = structlog.get_logger(__name__)

NO_CHANGES_MESSAGE = "No price changes detected."
UPDATE_FAILED_MESSAGE = "Failed to update some prices."
SET_RATE_HINT = "Set rate to enable updates"

_PLATINUM_RE = re.compile(r"\bplatinum\b|\bpt\d*\b")


def classify_metal(title: str) -> MetalTheme:
    """Card theme from the collection title ("Gold 24K" → GOLD)."""
    label = normalize_label(title) or ""
    if "24k" in label or "gold" in label:
        return MetalTheme.GOLD
    if "silver" in label or "925" in label:
        return MetalTheme.SILVER
    if _PLATINUM_RE.search(label):
        return MetalTheme.PLATINUM
    if "diamond" in label:
        return MetalTheme.DIAMOND
    return MetalTheme.DEFAULT


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PriceManagerService:
    """
    Screen state and actions.

    Flow:
        1. load catalog → pricing store reconciled with the collection ids
        2. toggle / select all → confirm locks the selection
        3. save pricing per collection → preview
        4. apply_prices() builds the change set and submits it
    """

    def __init__(
        self,
        catalog: CatalogService,
        pricing_store: PricingStore,
        updater: PriceUpdateService,
        selection: Optional[SelectionStateMachine] = None,
        dead_band: float = PRICE_DEAD_BAND,
        clamp_negative: bool = False,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    ):
        self.catalog = catalog
        self.pricing_store = pricing_store
        self.updater = updater
        self.selection = selection or SelectionStateMachine()
        self.dead_band = dead_band
        self.clamp_negative = clamp_negative
        self.currency_symbol = currency_symbol
        self.last_updated = _now()
        self._reconciled = False

    # ===================
    # CATALOG
    # ===================

    def collections(self) -> list[Collection]:
        """Session catalog; the first call also reconciles the pricing store."""
        collections = self.catalog.load()
        if not self._reconciled:
            self.pricing_store.reconcile(c.id for c in collections)
            self._reconciled = True
        return collections

    def refresh_catalog(self) -> list[Collection]:
        """Reload from Shopify and add defaults for new collections."""
        collections = self.catalog.refresh()
        added = self.pricing_store.reconcile(c.id for c in collections)
        self._reconciled = True
        logger.info("catalog_refreshed", collections=len(collections), new_pricing_entries=len(added))
        return collections

    def _require_collection(self, collection_id: str) -> Collection:
        for collection in self.collections():
            if collection.id == collection_id:
                return collection
        raise CollectionNotFoundError(collection_id)

    def catalog_summary(self) -> CollectionSummary:
        return summarize(self.collections())

    # ===================
    # SELECTION
    # ===================

    def selected_collections(self) -> list[Collection]:
        """Selected collections in catalog order."""
        state = self.selection.state
        return [c for c in self.collections() if state.contains(c.id)]

    def selection_summary(self) -> CollectionSummary:
        return summarize(self.selected_collections())

    def selection_response(self, result: Optional[TransitionResult] = None) -> SelectionResponse:
        state = self.selection.state
        return SelectionResponse(
            phase=state.phase,
            selected_ids=list(state.selected_ids),
            all_selected=self.selection.all_selected(c.id for c in self.collections()),
            summary=self.selection_summary(),
            accepted=result.accepted if result else True,
            notice=result.notice if result else None
        )

    def toggle_collection(self, collection_id: str) -> SelectionResponse:
        """
        Raises:
            CollectionNotFoundError: Id not in the catalog
        """
        self._require_collection(collection_id)
        return self.selection_response(self.selection.toggle(collection_id))

    def select_all(self) -> SelectionResponse:
        ids = [c.id for c in self.collections()]
        return self.selection_response(self.selection.select_all(ids))

    def deselect_all(self) -> SelectionResponse:
        return self.selection_response(self.selection.deselect_all())

    def toggle_all(self) -> SelectionResponse:
        ids = [c.id for c in self.collections()]
        return self.selection_response(self.selection.toggle_all(ids))

    def confirm_selection(self) -> SelectionResponse:
        """
        Raises:
            EmptySelectionError: Nothing selected; selection stays BROWSING
        """
        result = self.selection.confirm()
        if result.notice is not None and result.notice.error:
            raise EmptySelectionError()
        return self.selection_response(result)

    def reselect(self) -> SelectionResponse:
        return self.selection_response(self.selection.reselect())

    # ===================
    # PRICING
    # ===================

    def pricing_map(self) -> dict[str, PricingConfig]:
        self.collections()
        return self.pricing_store.snapshot()

    def get_pricing(self, collection_id: str) -> PricingConfig:
        """Values to prefill the edit form with."""
        self._require_collection(collection_id)
        return self.pricing_store.get(collection_id)

    def save_pricing(self, collection_id: str, rate, percent=None) -> PricingConfig:
        """
        Raises:
            CollectionNotFoundError: Id not in the catalog
            InvalidRateError: Rate not a positive number (nothing stored)
        """
        self._require_collection(collection_id)
        return self.pricing_store.save(collection_id, rate, percent)

    def invalid_collection_ids(self) -> list[str]:
        """Selected collections without a positive rate."""
        return [
            c.id for c in self.selected_collections()
            if not self.pricing_store.is_valid(c.id)
        ]

    def rate_cards(self) -> list[RateCard]:
        cards = []
        for collection in self.selected_collections():
            config = self.pricing_store.get(collection.id)
            is_invalid = not config.is_valid
            cards.append(RateCard(
                collection_id=collection.id,
                title=collection.title,
                rate_per_gram=config.rate_per_gram,
                percent=config.percent,
                markup_label=format_markup(config.percent),
                is_invalid=is_invalid,
                metal=classify_metal(collection.title),
                hint=SET_RATE_HINT if is_invalid else None
            ))
        return cards

    # ===================
    # PREVIEW & UPDATE
    # ===================

    def preview(self) -> PreviewResponse:
        """
        Raises:
            SelectionNotConfirmedError: Selection is not locked
        """
        if not self.selection.is_locked:
            raise SelectionNotConfirmedError()

        selected = self.selected_collections()
        pricing = self.pricing_store.snapshot()
        rows = build_preview(
            selected,
            pricing,
            self.dead_band,
            self.clamp_negative,
            self.currency_symbol
        )

        return PreviewResponse(
            data=rows,
            summary=summarize(selected),
            change_count=sum(1 for row in rows if row.will_change),
            invalid_collection_ids=self.invalid_collection_ids(),
            last_updated=self.last_updated
        )

    def apply_prices(self) -> PriceUpdateOutcome:
        """
        Build the change set for the locked selection and submit it.

        Raises:
            SelectionNotConfirmedError: Selection is not locked
            InvalidPricingError: A selected collection has no positive rate
            NoVariantsError: Selected collections have no variants
        """
        if not self.selection.is_locked:
            raise SelectionNotConfirmedError()

        invalid = self.invalid_collection_ids()
        if invalid:
            raise InvalidPricingError(invalid)

        selected = self.selected_collections()
        if summarize(selected).is_empty:
            raise NoVariantsError()

        changes = build_changes(selected, self.pricing_store.snapshot(), self.dead_band, self.clamp_negative)

        if not changes:
            logger.info("price_update_skipped", reason="no_changes")
            return PriceUpdateOutcome(
                submitted=False,
                change_count=0,
                ok=True,
                notice=Notice(error=False, message=NO_CHANGES_MESSAGE),
                last_updated=self.last_updated
            )

        logger.info("price_update_submitting", changes=len(changes))
        try:
            result = self.updater.apply(changes)
            ok, updated = result.ok, result.updated
        except ExternalServiceError as e:
            logger.error("price_update_failed", error=e.message)
            ok, updated = False, 0

        self.last_updated = _now()

        if ok:
            notice = Notice(error=False, message=f"Successfully updated {updated} variants.")
        else:
            notice = Notice(error=True, message=UPDATE_FAILED_MESSAGE)

        return PriceUpdateOutcome(
            submitted=True,
            change_count=len(changes),
            ok=ok,
            updated=updated,
            notice=notice,
            last_updated=self.last_updated
        )


# Singleton instance for convenience
_price_manager_service: Optional[PriceManagerService] = None


def build_price_manager_service() -> PriceManagerService:
    """Wire the service from settings."""
    kv_store = create_key_value_store(
        settings.storage_backend,
        storage_dir=settings.storage_dir,
        table=settings.supabase_kv_table
    )
    return PriceManagerService(
        catalog=CatalogService(),
        pricing_store=PricingStore(kv_store, settings.pricing_storage_key),
        updater=get_price_update_service(),
        dead_band=settings.price_dead_band,
        clamp_negative=settings.clamp_negative_prices,
        currency_symbol=settings.currency_symbol
    )


def get_price_manager_service() -> PriceManagerService:
    """Get or create PriceManagerService instance."""
    global _price_manager_service
    if _price_manager_service is None:
        _price_manager_service = build_price_manager_service()
    return _price_manager_service


def set_price_manager_service(service: Optional[PriceManagerService]) -> None:
    """Replace (or clear, with None) the shared instance."""
    global _price_manager_service
    _price_manager_service = service

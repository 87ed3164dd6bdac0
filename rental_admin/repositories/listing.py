"""
Listing repository: the in-memory store of listings and their audit trail.
Provides filtered, paginated reads and audited, lock-guarded mutations.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Any, Union
import math
import threading
import uuid
import logging

from rental_admin.models.listing import Listing, ListingStatus, EDITABLE_FIELDS
from rental_admin.models.audit import AuditEntry
from rental_admin.repositories.audit import AuditLog

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"

StatusFilter = Union[ListingStatus, str, None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ListingPage:
    """One page of listings plus pagination metadata."""

    items: List[Listing]
    total: int
    page: int
    limit: int
    total_pages: int


class ListingRepository:
    """
    Owns the listing collection and its audit log.

    Listings are kept in insertion order. Every read hands out copies, and
    every mutation (lookup, merge, audit append) happens inside one critical
    section guarded by a single re-entrant lock, so concurrent writers on the
    same listing cannot drop each other's changes and readers never observe a
    half-applied update. Writes are last-write-wins.
    """

    def __init__(
        self,
        listings: Iterable[Listing] = (),
        clock: Optional[Callable[[], datetime]] = None
    ):
        self._lock = threading.RLock()
        self._clock = clock or utc_now
        self._listings: Dict[int, Listing] = {}
        self._audit_log = AuditLog()
        for listing in listings:
            if listing.id in self._listings:
                raise ValueError(f"Duplicate listing id: {listing.id}")
            self._listings[listing.id] = listing.copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._listings)

    def create(self, listing_data: Dict[str, Any]) -> Listing:
        """
        Add a new listing, assigning its id and submission time.

        Args:
            listing_data: Listing fields except id (status defaults to pending)

        Returns:
            Copy of the stored listing
        """
        with self._lock:
            listing_id = max(self._listings, default=0) + 1
            data = dict(listing_data)
            data.setdefault("submitted_at", self._clock())
            data["price"] = Decimal(str(data["price"]))
            listing = Listing(id=listing_id, **data)
            self._listings[listing_id] = listing
            logger.debug(f"Created listing with id: {listing_id}")
            return listing.copy()

    def list(self, page: int = 1, limit: int = 10, status_filter: StatusFilter = None) -> ListingPage:
        """
        Get a page of listings, optionally filtered by status.

        Args:
            page: 1-based page number
            limit: Page size
            status_filter: Status to keep, or None / "all" for every listing

        Returns:
            ListingPage; pages past the end have no items

        Raises:
            ValueError: If page or limit is below 1 or the status is unknown
        """
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive integers")

        wanted = self._parse_status_filter(status_filter)

        with self._lock:
            matching = [
                listing for listing in self._listings.values()
                if wanted is None or listing.status == wanted
            ]

        start = (page - 1) * limit
        total = len(matching)
        return ListingPage(
            items=[listing.copy() for listing in matching[start:start + limit]],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit)
        )

    def get_by_id(self, listing_id: int) -> Optional[Listing]:
        """Get a copy of a listing by id, or None if it does not exist."""
        with self._lock:
            listing = self._listings.get(listing_id)
            if listing is None:
                logger.debug(f"Listing with id {listing_id} not found")
                return None
            return listing.copy()

    def update_status(
        self,
        listing_id: int,
        new_status: Union[ListingStatus, str],
        actor_email: str
    ) -> Optional[Listing]:
        """
        Set a listing's status and record the transition.

        The transition is recorded even when the status does not change.

        Returns:
            Updated listing, or None if no listing has this id (nothing recorded)
        """
        new_status = ListingStatus(new_status)

        with self._lock:
            current = self._listings.get(listing_id)
            if current is None:
                return None

            updated = replace(current, status=new_status, images=list(current.images))
            self._listings[listing_id] = updated
            self._record(
                listing_id,
                f'Status changed from "{current.status.value}" to "{new_status.value}"',
                actor_email
            )
            return updated.copy()

    def update_fields(
        self,
        listing_id: int,
        updates: Dict[str, Any],
        actor_email: str
    ) -> Optional[Listing]:
        """
        Shallow-merge field updates into a listing.

        Changed fields are detected by value equality, so an update that
        leaves every value as it was is applied but not recorded.

        Args:
            listing_id: Listing to update
            updates: Editable field values keyed by field name
            actor_email: Admin performing the edit

        Returns:
            Updated listing, or None if no listing has this id

        Raises:
            ValueError: If updates name a field that cannot be edited
        """
        invalid = [key for key in updates if key not in EDITABLE_FIELDS]
        if invalid:
            raise ValueError(f"Fields cannot be edited: {', '.join(invalid)}")

        values = dict(updates)
        if "price" in values:
            values["price"] = Decimal(str(values["price"]))
        if "images" in values:
            values["images"] = list(values["images"])

        with self._lock:
            current = self._listings.get(listing_id)
            if current is None:
                return None

            merged = replace(current, **values)
            changed = [key for key in values if getattr(current, key) != getattr(merged, key)]
            self._listings[listing_id] = merged

            if changed:
                self._record(listing_id, f"Listing updated ({', '.join(changed)})", actor_email)
            else:
                logger.debug(f"Edit of listing {listing_id} changed no fields; nothing recorded")
            return merged.copy()

    def count_by_status(self) -> Dict[str, int]:
        """Count listings per status, plus the overall total."""
        with self._lock:
            counts = {status.value: 0 for status in ListingStatus}
            for listing in self._listings.values():
                counts[listing.status.value] += 1
            counts["total"] = len(self._listings)
            return counts

    def audit_trail(self) -> List[AuditEntry]:
        """Get every audit entry, most recent first."""
        with self._lock:
            return self._audit_log.read_all()

    def audit_count(self) -> int:
        with self._lock:
            return len(self._audit_log)

    def _record(self, listing_id: int, action: str, actor_email: str) -> None:
        self._audit_log.record(AuditEntry(
            id=str(uuid.uuid4()),
            listing_id=listing_id,
            action=action,
            admin_email=actor_email,
            timestamp=self._clock()
        ))

    @staticmethod
    def _parse_status_filter(status_filter: StatusFilter) -> Optional[ListingStatus]:
        if status_filter is None or status_filter == ALL_STATUSES:
            return None
        return ListingStatus(status_filter)

"""
Stock Service - Ledger totals, summary queries and net weight

Current stock is never stored. Every call recomputes it as
opening stock + inward total - outward total from the full entry history.
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Any, Dict, Iterable, List, Optional, Tuple
from collections import OrderedDict
import math

from stockroom.core import ValidationFailure
from stockroom.models import Product, Container, InwardEntry, OutwardEntry
from stockroom.schemas.stock import StockSummary, StockSummaryPage, RackGroup, DashboardStats

GROUP_SCOPE_PAGE = "page"
GROUP_SCOPE_FILTERED = "filtered"
GROUP_SCOPES = (GROUP_SCOPE_PAGE, GROUP_SCOPE_FILTERED)


# ===================== LEDGER =====================

def net_weight(gross_weight: float, container: Optional[Any], container_quantity: int) -> float:
    """
    Gross weight minus the tare of the containers used.
    Without a container the gross weight comes back unchanged; negative results are not clamped.
    """
    if container is None:
        return gross_weight
    return round(gross_weight - container.weight * container_quantity, 2)

def totals_by_product(entries: Iterable[Any]) -> Dict[int, int]:
    """Sum entry quantities per product_id in a single pass"""
    totals: Dict[int, int] = {}
    for entry in entries:
        totals[entry.product_id] = totals.get(entry.product_id, 0) + entry.quantity
    return totals

def build_summary(
    products: Iterable[Any],
    inward_totals: Dict[int, int],
    outward_totals: Dict[int, int]
) -> List[StockSummary]:
    """One row per product, in product order"""
    rows = []
    for product in products:
        inward_total = int(inward_totals.get(product.id, 0) or 0)
        outward_total = int(outward_totals.get(product.id, 0) or 0)
        rows.append(StockSummary(
            product_id=product.id,
            product_name=product.name,
            rack=product.rack or "",
            opening_stock=product.opening_stock,
            inward_total=inward_total,
            outward_total=outward_total,
            current_stock=product.opening_stock + inward_total - outward_total
        ))
    return rows

def summarize(
    products: Iterable[Any],
    inward_entries: Iterable[Any],
    outward_entries: Iterable[Any]
) -> List[StockSummary]:
    """Pure ledger over already loaded records"""
    return build_summary(products, totals_by_product(inward_entries), totals_by_product(outward_entries))


# ===================== SUMMARY QUERIES =====================

def matches(row: StockSummary, search: Optional[str] = None, rack: Optional[str] = None) -> bool:
    """Name contains search (case-insensitive) AND rack equals rack. Empty values match everything."""
    if search and search.lower() not in row.product_name.lower():
        return False
    if rack and row.rack != rack:
        return False
    return True

def filter_summary(
    rows: Iterable[StockSummary],
    search: Optional[str] = None,
    rack: Optional[str] = None
) -> List[StockSummary]:
    return [row for row in rows if matches(row, search, rack)]

def total_pages(total_count: int, page_size: int) -> int:
    # An empty result still shows as one page
    return max(1, math.ceil(total_count / page_size))

def paginate(rows: List[Any], page: int, page_size: int) -> Tuple[List[Any], int, int]:
    """
    1-indexed slice of rows. Returns (page rows, total count, total pages).
    A page past the end is empty, not an error.
    """
    if page < 1:
        raise ValidationFailure(f"Page must be 1 or greater, got {page}")
    if page_size < 1:
        raise ValidationFailure(f"Page size must be 1 or greater, got {page_size}")

    start = (page - 1) * page_size
    return rows[start:start + page_size], len(rows), total_pages(len(rows), page_size)

def available_racks(rows: Iterable[StockSummary]) -> List[str]:
    """Distinct rack labels in first-seen order"""
    return list(OrderedDict.fromkeys(row.rack for row in rows))

def group_by_rack(rows: Iterable[StockSummary]) -> List[RackGroup]:
    """Group rows by rack label, keeping first-seen rack order and row order inside each group"""
    groups: "OrderedDict[str, List[StockSummary]]" = OrderedDict()
    for row in rows:
        groups.setdefault(row.rack, []).append(row)
    return [RackGroup(rack=rack, rows=members) for rack, members in groups.items()]


class StockService:
    """Stock/Inventory business logic"""

    @staticmethod
    def _totals(db: Session, model: Any, product_id: Optional[int] = None) -> Dict[int, int]:
        query = db.query(
            model.product_id,
            func.sum(model.quantity).label("total")
        )
        if product_id is not None:
            query = query.filter(model.product_id == product_id)
        return {row.product_id: int(row.total or 0) for row in query.group_by(model.product_id).all()}

    @staticmethod
    def get_stock_summary(db: Session) -> List[StockSummary]:
        """Full summary, one row per product in insertion order"""
        products = db.query(Product).order_by(Product.id).all()
        return build_summary(
            products,
            StockService._totals(db, InwardEntry),
            StockService._totals(db, OutwardEntry)
        )

    @staticmethod
    def get_product_stock(db: Session, product_id: int) -> Optional[StockSummary]:
        """Summary row for one product, None if the product does not exist"""
        product = db.get(Product, product_id)
        if not product:
            return None
        rows = build_summary(
            [product],
            StockService._totals(db, InwardEntry, product_id),
            StockService._totals(db, OutwardEntry, product_id)
        )
        return rows[0]

    @staticmethod
    def get_paginated_stock_summary(
        db: Session,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        rack: Optional[str] = None,
        group: bool = False,
        group_scope: str = GROUP_SCOPE_PAGE
    ) -> StockSummaryPage:
        """
        Filter, then paginate the summary.

        available_racks always comes from the unfiltered summary. With group=True
        the response also carries rack groups built from the current page only
        (group_scope="page") or from every filtered row (group_scope="filtered").
        """
        if group_scope not in GROUP_SCOPES:
            raise ValidationFailure(f"Unknown group scope {group_scope}, expected one of {', '.join(GROUP_SCOPES)}")

        summary = StockService.get_stock_summary(db)
        filtered = filter_summary(summary, search, rack)
        data, total_count, pages = paginate(filtered, page, page_size)

        groups = None
        if group:
            groups = group_by_rack(data if group_scope == GROUP_SCOPE_PAGE else filtered)

        return StockSummaryPage(
            data=data,
            total_count=total_count,
            total_pages=pages,
            page=page,
            page_size=page_size,
            available_racks=available_racks(summary),
            groups=groups
        )

    @staticmethod
    def calculate_net_weight(
        db: Session,
        gross_weight: float,
        container_id: Optional[int],
        container_quantity: int
    ) -> float:
        """Net weight for a movement; an unknown container id leaves the gross weight as is"""
        container = db.get(Container, container_id) if container_id is not None else None
        return net_weight(gross_weight, container, container_quantity)

    @staticmethod
    def get_dashboard_stats(db: Session, low_stock_threshold: int = 5) -> DashboardStats:
        summary = StockService.get_stock_summary(db)
        low_stock = [row for row in summary if row.current_stock <= low_stock_threshold]

        return DashboardStats(
            total_products=len(summary),
            total_stock=sum(row.current_stock for row in summary),
            low_stock_count=len(low_stock),
            rack_count=len(available_racks(summary)),
            low_stock_threshold=low_stock_threshold,
            low_stock_items=low_stock[:5]
        )

import sys
import os
import argparse

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from stockroom.core import Settings, get_settings, make_engine, make_session_factory
from stockroom.core.logging import configure_logging
from stockroom.services import StockService
from stockroom.services.seed_service import init_database


def print_report(settings: Settings, search=None, rack=None, page=1, page_size=None):
    engine = make_engine(settings)
    session_factory = make_session_factory(engine)

    if init_database(engine, session_factory):
        print("Seeded empty database with sample data")

    db = session_factory()
    try:
        result = StockService.get_paginated_stock_summary(
            db,
            page=page,
            page_size=page_size or settings.DEFAULT_PAGE_SIZE,
            search=search,
            rack=rack
        )

        print(f"Stock Summary - page {result.page} of {result.total_pages} ({result.total_count} products)")
        print("-" * 90)
        print(f"{'Product':<30} | {'Rack':<8} | {'Opening':>8} | {'Inward':>8} | {'Outward':>8} | {'Current':>8}")
        print("-" * 90)

        for row in result.data:
            flag = " LOW" if row.current_stock <= settings.LOW_STOCK_THRESHOLD else ""
            print(
                f"{row.product_name[:30]:<30} | {row.rack:<8} | {row.opening_stock:>8} | "
                f"{'+' + str(row.inward_total):>8} | {'-' + str(row.outward_total):>8} | {row.current_stock:>8}{flag}"
            )

        if not result.data:
            print("No products found matching your search criteria.")

        print("-" * 90)
        print(f"Racks: {', '.join(result.available_racks) or '-'}")
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the database and print the stock summary")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument("--search", help="Product name contains")
    parser.add_argument("--rack", help="Exact rack label")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int)
    args = parser.parse_args()

    settings = get_settings()
    if args.database_url:
        settings = Settings(DATABASE_URL=args.database_url)
    configure_logging(settings)

    print_report(settings, args.search, args.rack, args.page, args.page_size)

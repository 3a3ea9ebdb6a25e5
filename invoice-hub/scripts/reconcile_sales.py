"""
Find invoices saved without a sale record and optionally repair them.

Usage:
    python scripts/reconcile_sales.py          # report only
    python scripts/reconcile_sales.py --fix    # write the missing sale records
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.money import format_money
from repositories.document_store import SupabaseDocumentStore
from services.reconciliation_service import find_orphaned_invoices, reconcile_orphaned_invoices


def main() -> int:
    parser = argparse.ArgumentParser(description="Reconcile invoices that have no sale record.")
    parser.add_argument("--fix", action="store_true", help="Write the missing sale records")
    args = parser.parse_args()

    store = SupabaseDocumentStore()
    orphaned = find_orphaned_invoices(store)

    print("=" * 50)
    print("SALE RECORD RECONCILIATION")
    print("=" * 50)
    print(f"Invoices without a sale record: {len(orphaned)}")
    for invoice in orphaned:
        print(f"  {invoice.invoice_number}  {invoice.issue_date}  {format_money(invoice.total_amount)}  ({invoice.invoice_id})")
    print("=" * 50)

    if not orphaned or not args.fix:
        return 0

    created = reconcile_orphaned_invoices(store)
    print(f"[SUCCESS] Recorded {len(created)} missing sale(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Bill Ledger Verification Script

Verifies data integrity of the Excel bill ledger.
Run from project root: python scripts/verify.py

Author: Cafe API Maintainers
Version: 1.0.0
"""

import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd

from cafe_api.core.config import get_settings

EXCEL_FILE = str(get_settings().bills_excel_path)


def verify_ledger() -> bool:
    """Verify the bill ledger after a service."""

    print("=" * 60)
    print("🔍 BILL LEDGER VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📄 File: {EXCEL_FILE}")
    print("=" * 60)

    if not os.path.exists(EXCEL_FILE):
        print("\n❌ Ledger not found!")
        print("   Run the simulation first: python scripts/simulate.py")
        return False

    try:
        df = pd.read_excel(EXCEL_FILE, engine="openpyxl")
        print(f"\n✅ File loaded successfully!")
    except Exception as e:
        print(f"\n❌ Could not read ledger: {e}")
        return False

    print(f"\n📊 STATISTICS:")
    print(f"   Total Bills: {len(df)}")
    print(f"   Columns: {len(df.columns)}")

    ok = True

    required = ["bill_id", "order_id", "subtotal", "tax", "total"]
    missing = [col for col in required if col not in df.columns]
    if missing:
        print(f"\n⚠️ Missing Columns: {missing}")
        return False
    print(f"\n✅ All required columns present")

    duplicates = df["bill_id"].duplicated().sum()
    if duplicates > 0:
        print(f"⚠️ {duplicates} duplicate bill IDs found!")
        ok = False
    else:
        print(f"✅ No duplicate bill IDs")

    double_billed = df["order_id"].duplicated().sum()
    if double_billed > 0:
        print(f"⚠️ {double_billed} orders billed more than once!")
        ok = False
    else:
        print(f"✅ Every order billed once")

    # rounded total always equals rounded subtotal + rounded tax
    mismatched = df[(df["total"] - (df["subtotal"] + df["tax"])).abs() > 0.001]
    if len(mismatched) > 0:
        print(f"⚠️ {len(mismatched)} bills where total != subtotal + tax")
        ok = False
    else:
        print(f"✅ All totals add up")

    print(f"\n💰 REVENUE:")
    print(f"   Total: ${df['total'].sum():.2f}")
    print(f"   Tax collected: ${df['tax'].sum():.2f}")
    print(f"   Average bill: ${df['total'].mean():.2f}")

    print(f"\n📋 RECENT BILLS:")
    print("-" * 60)
    if len(df) > 0:
        cols = ["bill_id", "order_id", "table_id", "customer_name", "total"]
        cols = [c for c in cols if c in df.columns]
        print(df[cols].tail(5).to_string(index=False))

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE" if ok else "⚠️ VERIFICATION FOUND PROBLEMS")
    print("=" * 60)

    return ok


if __name__ == "__main__":
    sys.exit(0 if verify_ledger() else 1)

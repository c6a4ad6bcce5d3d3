"""
Dinner Service Simulation Script

Plays a full service against a running API: every free table orders,
the kitchen moves each item to preparing and served, then the table is
billed. All tables run at the same time.
Run from project root: python scripts/simulate.py

Author: Cafe API Maintainers
Version: 1.0.0
"""

import argparse
import asyncio
import os
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = os.getenv("CAFE_API_URL", "http://localhost:3000")
ROUNDS = 3

# Sample data for random customers
FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Wilson", "Taylor"]


def generate_random_customer() -> dict[str, str]:
    """Generate random customer info."""
    return {
        "customerName": f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        "customerPhone": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
    }


def generate_random_items(menu: list[dict[str, Any]]) -> list[dict[str, int]]:
    """Pick 1-4 distinct menu items with random quantities."""
    picks = random.sample(menu, k=min(len(menu), random.randint(1, 4)))
    return [
        {"foodItemId": item["id"], "quantity": random.randint(1, 3)}
        for item in picks
    ]


# =============================================================================
# ONE TABLE'S SERVICE
# =============================================================================

async def serve_table(
    client: httpx.AsyncClient,
    table: dict[str, Any],
    menu: list[dict[str, Any]],
) -> dict[str, Any]:
    """Order, cook, serve and bill one table."""
    start_time = time.time()
    result = {"table": table["name"], "success": False}

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json={"tableId": table["id"], "items": generate_random_items(menu)},
            timeout=30.0,
        )
        if response.status_code != 201:
            result["error"] = f"order: {response.text[:100]}"
            return result
        order = response.json()
        result["order_id"] = order["id"]

        for status in ("preparing", "served"):
            for item in order["items"]:
                await asyncio.sleep(random.uniform(0.05, 0.2))
                response = await client.patch(
                    f"{API_BASE_URL}/api/orders/{order['id']}",
                    json={"itemId": item["id"], "status": status},
                    timeout=30.0,
                )
                if response.status_code != 200:
                    result["error"] = f"item {item['id']} -> {status}: {response.text[:100]}"
                    return result

        response = await client.post(
            f"{API_BASE_URL}/api/bills",
            json={"orderId": order["id"], **generate_random_customer()},
            timeout=30.0,
        )
        if response.status_code != 201:
            result["error"] = f"bill: {response.text[:100]}"
            return result

        bill = response.json()
        result.update(success=True, bill_id=bill["id"], total=bill["total"])
        return result

    except Exception as e:
        result["error"] = str(e)[:100]
        return result

    finally:
        result["time"] = round(time.time() - start_time, 3)


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(rounds: int = ROUNDS) -> dict[str, Any]:
    """
    Run the dinner service simulation.

    Args:
        rounds: How many times every free table is seated and billed
    """
    print("=" * 70)
    print("☕ DINNER SERVICE SIMULATION")
    print("=" * 70)
    print(f"🔁 Rounds: {rounds}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    results = []
    start_time = time.time()

    async with httpx.AsyncClient() as client:
        menu = (await client.get(f"{API_BASE_URL}/api/food-items")).json()

        for round_num in range(1, rounds + 1):
            response = await client.get(
                f"{API_BASE_URL}/api/tables", params={"status": "available"}
            )
            tables = response.json()
            print(f"\n🚀 Round {round_num}: seating {len(tables)} tables...")

            tasks = [serve_table(client, table, menu) for table in tables]
            results.extend(await asyncio.gather(*tasks))

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Tables billed: {len(successful)}/{len(results)}")
    print(f"❌ Failed: {len(failed)}/{len(results)}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        total_revenue = sum(r["total"] for r in successful)

        print(f"\n📈 Service Metrics:")
        print(f"   Average table turn: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   💰 Total Revenue: ${total_revenue:.2f}")

    if failed:
        print(f"\n⚠️  Failure Details (showing first 5):")
        for f in failed[:5]:
            print(f"   {f['table']}: {f.get('error', 'Unknown error')}")

    print("\n" + "=" * 70)
    print("🔍 VERIFICATION STEPS")
    print("=" * 70)
    print("1. Run: python scripts/verify.py")
    print("2. Open data/bills.xlsx to check the ledger")
    print("=" * 70)

    return {
        "total": len(results),
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def preflight_checks() -> bool:
    """Check the API is up and has something to sell."""
    print("\n" + "=" * 70)
    print("🧪 PRE-FLIGHT CHECKS")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        print("\n1️⃣ Health Check...")
        try:
            response = await client.get(f"{API_BASE_URL}/health")
        except httpx.HTTPError as e:
            print(f"   ❌ API unreachable: {e}")
            return False
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text}")
            return False
        data = response.json()
        print(f"   ✅ Status: {data.get('status')}")
        print(f"   Store: {data.get('store')}")

        print("\n2️⃣ Menu...")
        menu = (await client.get(f"{API_BASE_URL}/api/food-items")).json()
        if not menu:
            print("   ❌ Menu is empty")
            return False
        print(f"   ✅ {len(menu)} items")

        print("\n3️⃣ Tables...")
        tables = (await client.get(f"{API_BASE_URL}/api/tables")).json()
        free = [t for t in tables if t["status"] == "available"]
        print(f"   ✅ {len(free)}/{len(tables)} available")
        if not free:
            print("   ⚠️ No free tables to seat")
            return False

    print("\n" + "=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Dinner Service Simulation Script")
    parser.add_argument("--rounds", type=int, default=ROUNDS, help="Number of seatings")
    parser.add_argument("--skip-checks", action="store_true", help="Skip pre-flight checks")
    args = parser.parse_args()

    if not args.skip_checks:
        if not asyncio.run(preflight_checks()):
            print("\n❌ Pre-flight checks failed. Fix issues before running simulation.")
            sys.exit(1)
        print("\n✅ Pre-flight checks passed!")

    asyncio.run(run_simulation(rounds=args.rounds))

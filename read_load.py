"""
read_load.py: simple async load script to hit redirects

Usage:
  python read_load.py --base http://127.0.0.1:8080 --in shorturls_created.jsonl --count 15000 --concurrency 200

Each request is checked for a 302 whose Location matches the URL recorded
by write_load.py.
"""
import argparse
import asyncio
import json
import random
import time
from datetime import datetime, timezone

import httpx

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

def _load_records(path):
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            if "id" in obj and "url" in obj:
                records.append(obj)
    return records

async def _hit_one(client: httpx.AsyncClient, base: str, rec: dict):
    try:
        r = await client.get(f"{base}/api/shorturl/{rec['id']}", follow_redirects=False, timeout=10)
    except httpx.HTTPError:
        return False
    return r.status_code == 302 and r.headers.get("location") == rec["url"]

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8080")
    parser.add_argument("--in", dest="records_file", default="shorturls_created.jsonl")
    parser.add_argument("--count", type=int, default=15000)
    parser.add_argument("--concurrency", type=int, default=200)
    args = parser.parse_args()

    records = _load_records(args.records_file)
    if not records:
        print(f"No ids found in {args.records_file}. Run write_load.py first.")
        return

    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            nonlocal success
            async with sem:
                ok = await _hit_one(client, args.base, random.choice(records))
                if ok:
                    success += 1

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   reads={args.count}, ok={success}, fail={args.count - success}")
    if dt > 0:
        print(f"RPS:   {success/dt:.1f} req/s")

if __name__ == "__main__":
    asyncio.run(main())

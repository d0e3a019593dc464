"""
write_load.py: simple async load script to shorten URLs

Usage:
  python write_load.py --base http://127.0.0.1:8080 --count 2000 --concurrency 100 --out shorturls_created.jsonl

After the run it checks that the ids handed back are distinct, which is what
the server promises under concurrent writers.
"""
import argparse
import asyncio
import json
import random
import string
import time
from datetime import datetime, timezone

import httpx

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

def _rand_host():
    tlds = ["com", "net", "org", "io", "ai"]
    names = ["example", "sample", "demo", "test", "alpha", "beta", "gamma"]
    return f"{random.choice(names)}.{random.choice(tlds)}"

def _rand_path(n=6):
    alphabet = string.ascii_letters + string.digits
    return "".join(random.choice(alphabet) for _ in range(n))

async def _create_one(client: httpx.AsyncClient, base: str, idx: int):
    url = f"https://{_rand_host()}/{_rand_path(8)}?q={idx}"
    try:
        r = await client.post(f"{base}/api/shorturl", data={"url": url}, timeout=10)
        r.raise_for_status()
    except httpx.HTTPError as exc:
        print(f"shorten failed for {url}: {exc!r}")
        return None
    short_id = r.json().get("short_url")
    if short_id is None:
        return None
    return {"id": short_id, "url": url}

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8080")
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--out", default="shorturls_created.jsonl")
    args = parser.parse_args()

    start_iso = _now_iso()
    t0 = time.perf_counter()
    created = []

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            async with sem:
                rec = await _create_one(client, args.base, i)
                if rec:
                    created.append(rec)

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    with open(args.out, "w", encoding="utf-8") as out_f:
        for rec in created:
            out_f.write(json.dumps(rec) + "\n")

    ids = [rec["id"] for rec in created]
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   writes={args.count}, ok={len(created)}, fail={args.count - len(created)}")
    print(f"IDS:   distinct={len(set(ids)) == len(ids)}, min={min(ids, default=None)}, max={max(ids, default=None)}")
    if dt > 0:
        print(f"TPS:   {len(created)/dt:.1f} req/s")

if __name__ == "__main__":
    asyncio.run(main())

"""Post sample call outcomes to the call-logging webhook of a running server.

Usage: API_KEY=... BASE_URL=http://localhost:5001 python scripts/send_test_calls.py
"""

import asyncio
import os
import sys

import httpx

BASE_URL = os.environ.get("BASE_URL", "http://localhost:5001")
API_KEY = os.environ.get("API_KEY", "")

TEST_CALLS = [
    {
        "name": "Sarah Johnson",
        "company": "TechCorp Inc.",
        "email": "sarah.johnson@techcorp.com",
        "phone": "+1 (555) 123-4567",
        "status": "completed",
        "notes": "Interested in enterprise package. Follow up next week for demo.",
        "recording_url": "https://example.com/recording1.mp3",
    },
    {
        "name": "Michael Chen",
        "company": "Startup.io",
        "email": "m.chen@startup.io",
        "phone": "+1 (555) 987-6543",
        "status": "pending",
        "notes": "Left voicemail. Requested callback for pricing information.",
    },
    {
        "name": "Emily Rodriguez",
        "company": "BizCompany LLC",
        "email": "e.rodriguez@bizcompany.com",
        "phone": "+1 (555) 456-7890",
        "status": "failed",
        "notes": "Line busy. Retry scheduled for tomorrow morning.",
    },
    {
        "name": "David Thompson",
        "company": "Consulting Pro",
        "email": "david@consulting.pro",
        "phone": "+1 (555) 321-0987",
        "status": "completed",
        "notes": "Scheduled meeting for next Tuesday to discuss implementation.",
        "recording_url": "https://example.com/recording2.mp3",
    },
]


async def send_test_calls() -> int:
    if not API_KEY:
        print("API_KEY is not set")
        return 1

    print(f"Sending {len(TEST_CALLS)} calls to {BASE_URL}/api/logCall")
    failures = 0

    async with httpx.AsyncClient(base_url=BASE_URL, timeout=10) as client:
        for i, call in enumerate(TEST_CALLS, start=1):
            resp = await client.post("/api/logCall", json=call, headers={"X-API-KEY": API_KEY})
            if resp.status_code == 201:
                print(f"{i}. {call['name']}: logged as {resp.json()['callId']}")
            else:
                failures += 1
                print(f"{i}. {call['name']}: {resp.status_code} - {resp.text}")

        resp = await client.post(
            "/api/logCall",
            json={"name": "Should Fail", "status": "completed"},
            headers={"X-API-KEY": "wrong-key"},
        )
        print(f"Wrong key check: {resp.status_code} (expected 401)")
        if resp.status_code != 401:
            failures += 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(send_test_calls()))

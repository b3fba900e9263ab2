"""Walk a running server through signup, login, a protected call, logout and token rejection.

Usage: BASE_URL=http://localhost:5001 python scripts/check_auth_flow.py
"""

import asyncio
import os
import secrets
import sys

import httpx

BASE_URL = os.environ.get("BASE_URL", "http://localhost:5001")


async def check_auth_flow() -> int:
    username = f"smoke_{secrets.token_hex(4)}"
    password = secrets.token_urlsafe(12)
    print(f"Checking auth flow against {BASE_URL} as {username}")

    async with httpx.AsyncClient(base_url=BASE_URL, timeout=10) as client:
        resp = await client.post("/api/auth/signup", json={"username": username, "password": password})
        if resp.status_code != 201:
            print(f"Signup failed: {resp.status_code} - {resp.text}")
            return 1
        print(f"1. Signup ok: {resp.json()['user']['username']}")

        resp = await client.post("/api/auth/login", json={"username": username, "password": password})
        if resp.status_code != 200:
            print(f"Login failed: {resp.status_code} - {resp.text}")
            return 1
        token = resp.json()["token"]
        headers = {"Authorization": f"Bearer {token}"}
        print("2. Login ok")

        resp = await client.get("/api/settings", headers=headers)
        if resp.status_code != 200:
            print(f"Protected endpoint failed: {resp.status_code} - {resp.text}")
            return 1
        print(f"3. Settings ok: {resp.json()}")

        resp = await client.post("/api/auth/logout", headers=headers)
        if resp.status_code != 200:
            print(f"Logout failed: {resp.status_code} - {resp.text}")
            return 1
        print(f"4. Logout ok: {resp.json()}")

        resp = await client.get("/api/settings", headers=headers)
        if resp.status_code != 401:
            print(f"Token still valid after logout ({resp.status_code})")
            return 1
        print("5. Token rejected after logout")

    print("Auth flow ok")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(check_auth_flow()))

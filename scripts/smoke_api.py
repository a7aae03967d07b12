"""
End-to-end smoke check against a running API.

Registers a throwaway user, opens two accounts and runs the transfer
scenario: A=500, B=100, A->B 200 succeeds, A->B 400 is rejected.
"""
import os
import sys
import json
import uuid
from typing import Tuple

import requests


API_BASE = os.environ.get("API_BASE", "http://localhost:8000")


def print_step(name: str, ok: bool, detail: str = "") -> None:
    status = "OK" if ok else "FAIL"
    line = f"[ {status} ] {name}"
    if detail:
        line += f" -> {detail}"
    print(line)


def ensure_json(resp: requests.Response) -> dict:
    try:
        return resp.json()
    except ValueError:
        return {"raw": resp.text}


def check_health() -> Tuple[bool, dict]:
    r = requests.get(f"{API_BASE}/health", timeout=10)
    return r.status_code == 200, ensure_json(r)


def register_user(email: str, password: str) -> Tuple[bool, dict]:
    payload = {"email": email, "password": password}
    r = requests.post(f"{API_BASE}/api/auth/register", json=payload, timeout=15)
    return r.status_code in (200, 201), ensure_json(r)


def login_user(email: str, password: str) -> Tuple[bool, dict]:
    data = {"username": email, "password": password}
    headers = {"Content-Type": "application/x-www-form-urlencoded"}
    r = requests.post(f"{API_BASE}/api/auth/jwt/login", data=data, headers=headers, timeout=15)
    return r.status_code == 200, ensure_json(r)


def open_account(token: str, name: str, opening_balance: str) -> Tuple[bool, dict]:
    headers = {"Authorization": f"Bearer {token}"}
    payload = {"name": name, "opening_balance": opening_balance}
    r = requests.post(f"{API_BASE}/api/account", json=payload, headers=headers, timeout=15)
    return r.status_code == 201, ensure_json(r)


def transfer(token: str, from_id: int, to_id: int, amount: str) -> Tuple[int, dict]:
    headers = {"Authorization": f"Bearer {token}"}
    payload = {"from_account_id": from_id, "to_account_id": to_id, "amount": amount}
    r = requests.post(f"{API_BASE}/api/transfer", json=payload, headers=headers, timeout=15)
    return r.status_code, ensure_json(r)


def main() -> int:
    email = os.environ.get("SMOKE_EMAIL", f"smoke_{uuid.uuid4().hex[:8]}@example.com")
    password = os.environ.get("SMOKE_PASSWORD", "Secret123!@#")

    ok, data = check_health()
    print_step("GET /health", ok, json.dumps(data))
    if not ok:
        return 1

    ok, data = register_user(email, password)
    print_step("POST /api/auth/register", ok, json.dumps(data))

    ok, data = login_user(email, password)
    print_step("POST /api/auth/jwt/login", ok, json.dumps(data))
    if not ok:
        return 2
    token = data.get("access_token")
    if not token:
        print_step("extract token", False, json.dumps(data))
        return 3

    ok_a, account_a = open_account(token, "A", "500.00")
    ok_b, account_b = open_account(token, "B", "100.00")
    print_step("POST /api/account x2", ok_a and ok_b, json.dumps([account_a, account_b]))
    if not (ok_a and ok_b):
        return 4

    code, data = transfer(token, account_a["id"], account_b["id"], "200.00")
    print_step("POST /api/transfer 200", code == 200, json.dumps(data))
    if code != 200:
        return 5

    code, data = transfer(token, account_a["id"], account_b["id"], "400.00")
    print_step("POST /api/transfer 400 rejected", code == 400, json.dumps(data))
    return 0 if code == 400 else 6


if __name__ == "__main__":
    sys.exit(main())

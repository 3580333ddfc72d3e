#!/usr/bin/env python3
"""
Publish an update record to the updates service

Usage:
    python scripts/push_update.py --device beryllium --romtype weekly \
        --datetime 1551462180 --filename potato_beryllium.zip --id 6f115c55 \
        --size 528541416 --url https://mirror.example.com/potato_beryllium.zip --version 2.1

Environment Variables:
    BASE_URL: Service base URL (default: http://localhost:3000)
    ADMIN_USER: Operator username
    ADMIN_PASS: Operator password
"""
import os
import sys
import argparse
import requests


def push_update(record: dict, base_url: str, admin_user: str, admin_pass: str) -> dict:
    """POST the record as JSON, return the decoded response body"""
    url = f"{base_url.rstrip('/')}/pushUpdate"
    response = requests.post(url, json=record, auth=(admin_user, admin_pass), timeout=30)

    if response.status_code == 401:
        raise PermissionError("Operator credentials were rejected")
    if response.status_code == 422:
        errors = response.json().get("errors", [])
        raise ValueError("; ".join(f"{e['field']}: {e['message']}" for e in errors))
    response.raise_for_status()
    return response.json()


def main():
    parser = argparse.ArgumentParser(description='Publish an update record')
    parser.add_argument('--device', required=True, help='Device codename (e.g., beryllium)')
    parser.add_argument('--romtype', required=True, help='Release type (e.g., weekly)')
    parser.add_argument('--datetime', required=True, help='Build date as UNIX timestamp')
    parser.add_argument('--filename', required=True, help='File name')
    parser.add_argument('--id', required=True, help='Build id')
    parser.add_argument('--size', required=True, help='File size in bytes')
    parser.add_argument('--url', required=True, help='Download URL')
    parser.add_argument('--version', required=True, help='Version string')
    parser.add_argument('--base-url', default=os.getenv('BASE_URL', 'http://localhost:3000'),
                        help='Service base URL')
    parser.add_argument('--admin-user', default=os.getenv('ADMIN_USER', 'admin'),
                        help='Operator username')
    parser.add_argument('--admin-pass', default=os.getenv('ADMIN_PASS'),
                        help='Operator password')

    args = parser.parse_args()

    if not args.admin_pass:
        print("Error: Operator password required. Set ADMIN_PASS environment variable or use --admin-pass")
        sys.exit(1)

    record = {
        'devicename': args.device,
        'romtype': args.romtype,
        'datetime': args.datetime,
        'filename': args.filename,
        'id': args.id,
        'size': args.size,
        'url': args.url,
        'version': args.version,
    }

    try:
        result = push_update(record, args.base_url, args.admin_user, args.admin_pass)
    except requests.exceptions.ConnectionError:
        print(f"[ERROR] Cannot connect to the service at {args.base_url}")
        print("   Start it with: python -m posp_updates.main")
        sys.exit(1)
    except (PermissionError, ValueError, requests.exceptions.RequestException) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    print(f"[SUCCESS] {result.get('response')}")


if __name__ == '__main__':
    main()

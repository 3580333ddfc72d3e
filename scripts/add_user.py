#!/usr/bin/env python3
"""
Add or replace an operator in the htpasswd credential file

Usage:
    python scripts/add_user.py --user admin [--file users.htpasswd]

The password is read from ADMIN_PASS or prompted for.
"""
import os
import sys
import argparse
import getpass

from posp_updates.services.auth import add_htpasswd_user


def main():
    parser = argparse.ArgumentParser(description='Add an operator to the htpasswd file')
    parser.add_argument('--user', required=True, help='Operator username')
    parser.add_argument('--file', default=os.getenv('HTPASSWD_FILE', 'users.htpasswd'),
                        help='Credential file')
    args = parser.parse_args()

    password = os.getenv('ADMIN_PASS') or getpass.getpass(f"Password for {args.user}: ")
    if not password:
        print("Error: empty password")
        sys.exit(1)

    try:
        add_htpasswd_user(args.file, args.user, password)
    except ValueError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    print(f"[SUCCESS] {args.user} written to {args.file}")


if __name__ == '__main__':
    main()

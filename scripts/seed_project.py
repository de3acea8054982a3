#!/usr/bin/env python3
"""Create a project from a CSV file and attach collaborators with column permissions.

Usage:
    export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
    export KEYCLOAK_REALM=colguard KEYCLOAK_CLIENT_ID=colguard-api KEYCLOAK_CLIENT_SECRET=colguard-api-secret
    export SEED_USER=admin SEED_PASSWORD=admin
    python scripts/seed_project.py folha.csv --name "Folha" \\
        --collaborator ana:Nome=READ_WRITE,Salario=HIDDEN --collaborator bruno
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import httpx

from colguard.client import ApiError, ColGuardClient


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def parse_collaborator(arg: str) -> tuple[str, dict[str, str]]:
    """'ana:Nome=READ_WRITE,Salario=HIDDEN' -> ('ana', {'Nome': ..., 'Salario': ...})."""
    user_id, _, levels = arg.partition(":")
    permissions = {}
    for item in filter(None, levels.split(",")):
        column, _, level = item.partition("=")
        permissions[column.strip()] = level.strip().upper()
    return user_id.strip(), permissions


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a ColGuard project from CSV")
    parser.add_argument("csv_file", type=Path, help="CSV file with a header row")
    parser.add_argument("--name", required=True, help="Project name")
    parser.add_argument("--description", default=None, help="Project description")
    parser.add_argument(
        "--collaborator",
        action="append",
        default=[],
        help="user_id[:Column=LEVEL,...]; may be repeated",
    )
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    keycloak_url = os.environ.get("KEYCLOAK_URL", "http://localhost:8080")
    realm = os.environ.get("KEYCLOAK_REALM", "colguard")
    client_id = os.environ.get("KEYCLOAK_CLIENT_ID", "colguard-api")
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "colguard-api-secret")
    user = os.environ.get("SEED_USER", "admin")
    password = os.environ.get("SEED_PASSWORD", "admin")

    print("Getting token...")
    token = get_token(keycloak_url, realm, client_id, client_secret, user, password)

    with ColGuardClient(api_url, token=token, timeout=60.0) as api:
        try:
            project = api.create_project(args.name, args.description)
            sheet = api.import_csv(project["id"], args.csv_file.read_bytes(), args.csv_file.name)
            print(
                f"Project {project['id']}: {len(sheet['columns'])} column(s), "
                f"{len(sheet['rows'])} row(s), {sheet['skipped_rows']} skipped"
            )
            for arg in args.collaborator:
                user_id, permissions = parse_collaborator(arg)
                api.add_collaborator(project["id"], user_id)
                if permissions:
                    api.set_permissions(project["id"], user_id, permissions)
                print(f"  + {user_id} {permissions or '(default access)'}")
        except ApiError as e:
            print(f"Seeding failed: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

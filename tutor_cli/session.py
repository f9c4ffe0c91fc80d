"""
Cookie persistence for the command line.

A browser keeps the backend's session cookie between page loads. The CLI runs
one request per process, so the cookie jar is written to a JSON file after
each command and loaded again before the next.

Functions:
    load_session(cookies: httpx.Cookies, path: Path) -> int:
        Adds the cookies stored in path to the jar. Returns how many were loaded.

    save_session(cookies: httpx.Cookies, path: Path):
        Writes the jar to path (mode 0600).

    clear_session(path: Path):
        Removes the stored session, if any.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import httpx


def load_session(cookies: httpx.Cookies, path: Path) -> int:
    if not path.exists():
        return 0
    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"[LOAD SESSION] Failed to parse {path}: {e}", file=sys.stderr)
        return 0
    try:
        if not isinstance(stored, list):
            raise TypeError(f"expected a list of cookies, got {type(stored).__name__}")
        entries = [
            (item["name"], item["value"], item.get("domain", ""), item.get("path", "/"))
            for item in stored
        ]
    except (KeyError, TypeError, AttributeError) as e:
        print(f"[LOAD SESSION] Malformed session in {path}: {e}", file=sys.stderr)
        return 0
    for name, value, domain, cookie_path in entries:
        cookies.set(name, value, domain=domain, path=cookie_path)
    return len(entries)


def save_session(cookies: httpx.Cookies, path: Path):
    stored = [
        {"name": c.name, "value": c.value, "domain": c.domain, "path": c.path}
        for c in cookies.jar
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(json.dumps(stored, indent=2))
    path.chmod(0o600)


def clear_session(path: Path):
    if path.exists():
        path.unlink()

"""
This module provides configuration management for the API client.

Classes:
    ClientConfig: Represents the client configuration, including the server base URL, API prefix, timeout,
        extra headers and the optional session file.

Functions:
    load_config(path: Path) -> Optional[ClientConfig]:
        Loads the client configuration from a YAML file. Returns None when the file is missing or invalid.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any
import yaml
import sys


@dataclass
class ClientConfig:
    base_url: str
    api_base: str = "/api"
    timeout: float = 10
    headers: Dict[str, str] | None = None
    session_file: Path | None = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ClientConfig":
        session_file = data.get("session_file")
        return ClientConfig(
            base_url=data["base_url"],
            api_base=data.get("api_base") or "/api",
            timeout=data.get("timeout") or 10,
            headers=data.get("headers"),
            session_file=Path(session_file).expanduser() if session_file else None,
        )


def load_config(path: Path) -> Optional[ClientConfig]:
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        print(f"[LOAD CONFIG] Failed to parse {path}: {e}", file=sys.stderr)
        return None
    try:
        return ClientConfig.from_dict(raw)
    except KeyError as ke:
        print(f"[LOAD CONFIG] Missing key {ke} in {path}", file=sys.stderr)
        return None

"""Stub provider that prints notifications to stdout as JSON lines."""

from __future__ import annotations

import json


def send(event, payload: dict, target):
    print(json.dumps({"event": event, "target": target, **payload}))

from __future__ import annotations

import hashlib
import json
import math
import random
from typing import Any, Mapping


AMBIENT_TEXT_NAMESPACE = "text.ambient"
TRIGGERED_TEXT_NAMESPACE = "text.triggered"


def _canonical(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _canonical(val) for key, val in sorted(value.items(), key=lambda item: str(item[0]))}
    if isinstance(value, (list, tuple, set, frozenset)):
        rows = [_canonical(item) for item in value]
        if isinstance(value, (set, frozenset)):
            return sorted(rows, key=lambda item: json.dumps(item, sort_keys=True, separators=(",", ":")))
        return rows
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Seed context cannot contain non-finite floats: {value!r}")
    return value


def derive_seed(namespace: str, context: Mapping[str, Any]) -> int:
    payload = {"namespace": str(namespace), "context": _canonical(context)}
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    digest = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
    return int(digest, 16) % (2**32)


def derive_rng(namespace: str, context: Mapping[str, Any]) -> random.Random:
    return random.Random(derive_seed(namespace, context))


def session_text_rngs(session_seed: int) -> tuple[random.Random, random.Random]:
    """Return ``(ambient_rng, trigger_rng)`` for one session seed.

    The two generators never share state, so ambient draws replay identically
    whether or not trigger events interleave.
    """

    context = {"session_seed": int(session_seed)}
    return derive_rng(AMBIENT_TEXT_NAMESPACE, context), derive_rng(TRIGGERED_TEXT_NAMESPACE, context)

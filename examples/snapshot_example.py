"""Example comparing two API responses with Minimal JSON Diff.

Two snapshots of the same resource are modelled with pydantic, diffed into a
JSON Patch, and the patch is applied back to the old snapshot.
"""

import json
from datetime import datetime, timezone

from pydantic import BaseModel

from minimal_json_diff import JsonPatch, diff_models, to_json_value


class Order(BaseModel):
    id: int
    status: str
    items: list[str]
    updated_at: datetime


def main():
    """Diff two order snapshots and replay the patch."""
    before = Order(
        id=7,
        status="pending",
        items=["apple", "pear", "plum"],
        updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    after = before.model_copy(
        update={
            "status": "shipped",
            "items": ["apple"],
            "updated_at": datetime(2025, 1, 2, tzinfo=timezone.utc),
        }
    )

    text = diff_models(before, after, indent=2)
    print(text)

    patched = JsonPatch.from_json(text).apply(to_json_value(before))
    assert patched == to_json_value(after)
    print(json.dumps(patched, indent=2))


if __name__ == "__main__":
    main()

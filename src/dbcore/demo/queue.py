"""
Fixed-capacity FIFO queue guarded by contracts.

The invariant keeps ``count`` within ``capacity``; ``enqueue`` and
``dequeue`` capture the old count so their postconditions can check that it
moved by exactly one.
"""

from __future__ import annotations

from typing import Any, List, Optional

from dbcore import OldState, ensure, require, run_strict


class BoundedQueue:
    def __init__(self, capacity: int) -> None:
        require(capacity > 0, "Queue capacity must be positive")
        self.capacity = capacity
        self.items: List[Optional[Any]] = [None] * capacity
        self.head = 0
        self.tail = 0
        self.count = 0

    def invariant(self) -> None:
        require(self.count <= self.capacity, "Queue count exceeds capacity")
        require(0 <= self.head < self.capacity, "Queue head out of range")
        require(0 <= self.tail < self.capacity, "Queue tail out of range")

    def __len__(self) -> int:
        return self.count

    def enqueue(self, item: Any) -> None:
        old = OldState(count=self.count, item=item)

        def body(ctx: OldState, q: BoundedQueue) -> None:
            require(q.count < q.capacity, "Cannot enqueue to a full queue")

            q.items[q.tail] = ctx.item
            q.tail = (q.tail + 1) % q.capacity
            q.count += 1

            ensure(q.count == ctx.count + 1, "Enqueue failed to increment count")

        run_strict(self, old, body)

    def dequeue(self) -> Any:
        old = OldState(count=self.count)

        def body(ctx: OldState, q: BoundedQueue) -> Any:
            require(q.count > 0, "Cannot dequeue from an empty queue")

            item = q.items[q.head]
            q.items[q.head] = None
            q.head = (q.head + 1) % q.capacity
            q.count -= 1

            ensure(q.count == ctx.count - 1, "Dequeue failed to decrement count")
            return item

        return run_strict(self, old, body)

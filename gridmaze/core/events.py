from typing import List, NamedTuple, Union

from gridmaze.core.grid import Snapshot

# Event Types
EVT_INIT = 0x01
EVT_CARVE = 0x02
EVT_BACKTRACK = 0x03
EVT_VISIT = 0x04
EVT_PATH = 0x05

EVENT_NAMES = {
    EVT_INIT: "init",
    EVT_CARVE: "carve",
    EVT_BACKTRACK: "backtrack",
    EVT_VISIT: "visit",
    EVT_PATH: "path",
}


class Step(NamedTuple):
    kind: int
    snapshot: Snapshot

    @property
    def name(self) -> str:
        return EVENT_NAMES[self.kind]


class StepRecorder:
    """
    Observer that keeps every emitted snapshot in memory.
    Accepts bare Snapshots (on_step callbacks) or Steps (iterating run()).
    """

    def __init__(self):
        self.snapshots: List[Snapshot] = []
        self.kinds: List[int] = []

    def __call__(self, item: Union[Step, Snapshot]):
        if isinstance(item, Step):
            self.kinds.append(item.kind)
            item = item.snapshot
        self.snapshots.append(item)

    def __len__(self):
        return len(self.snapshots)

    @property
    def last(self) -> Snapshot:
        return self.snapshots[-1]

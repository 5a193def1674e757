"""Lane allocation for the single forward pass over a commit list."""


class LaneAllocator:
    """
    Tracks which lanes are free and which are reserved during one topology build.

    A lane is either free (None) or reserved for the hash expected to appear
    next on it. At most one reservation exists per lane, and every reserved
    hash sits on exactly one lane.

    Colors are handed out per lane the first time the lane is used and kept
    for the rest of the build, so two lanes never share a color index.
    """

    def __init__(self) -> None:
        self._lanes: list[str | None] = []
        self._reserved: dict[str, int] = {}
        self._colors: dict[int, int] = {}
        self._next_color = 0

    @property
    def lane_count(self) -> int:
        """Number of lanes opened so far, free or not."""
        return len(self._lanes)

    def expected_at(self, lane: int) -> str | None:
        """Hash reserved on a lane, or None if the lane is free."""
        if lane >= len(self._lanes):
            return None
        return self._lanes[lane]

    def reserved_lane(self, commit_hash: str) -> int | None:
        return self._reserved.get(commit_hash)

    def take_lane(self, commit_hash: str) -> int:
        """Place a commit: use its reserved lane, else the lowest free one.

        The lane is free again afterwards; the caller reserves it for a
        parent if the line continues.
        """
        lane = self._reserved.pop(commit_hash, None)
        if lane is None:
            lane = self.find_free_lane()
            self._open(lane)
        self._lanes[lane] = None
        self.color_of(lane)
        return lane

    def reserve(self, commit_hash: str, lane: int) -> None:
        """Reserve a free lane for a hash that has not been visited yet."""
        self._open(lane)
        # One reservation per lane: callers only reserve lanes that take_lane,
        # release or find_*_lane just reported free
        assert self._lanes[lane] is None, f"lane {lane} already reserved for {self._lanes[lane]}"
        self._lanes[lane] = commit_hash
        self._reserved[commit_hash] = lane

    def release(self, commit_hash: str) -> int | None:
        """Drop a hash's reservation, freeing its lane. Returns the freed lane."""
        lane = self._reserved.pop(commit_hash, None)
        if lane is not None:
            self._lanes[lane] = None
        return lane

    def find_free_lane(self) -> int:
        """Lowest free lane, or one past the last lane if all are reserved."""
        for lane, expected in enumerate(self._lanes):
            if expected is None:
                return lane
        return len(self._lanes)

    def find_adjacent_lane(self, near_lane: int) -> int:
        """Free lane next to ``near_lane``: right first, then left, then lowest free."""
        right = near_lane + 1
        if right >= len(self._lanes) or self._lanes[right] is None:
            return right

        left = near_lane - 1
        if left >= 0 and self._lanes[left] is None:
            return left

        return self.find_free_lane()

    def color_of(self, lane: int) -> int:
        """Color index of a lane, assigning the next one on first use."""
        color = self._colors.get(lane)
        if color is None:
            color = self._next_color
            self._colors[lane] = color
            self._next_color += 1
        return color

    def _open(self, lane: int) -> None:
        while len(self._lanes) <= lane:
            self._lanes.append(None)

import logging
from typing import List, Optional, Sequence

from .models import Edit, EditScript, make_insert, make_delete

logger = logging.getLogger(__name__)


class MyersDiff:
    """Shortest edit script between two line sequences.

    Follows "An O(ND) Difference Algorithm and Its Variations" (Myers, 1986):
    a forward search for the furthest reaching path on every diagonal, one
    snapshot of ``V`` per edit distance, then a backtrack from ``(n, m)``.
    """

    def __init__(self, original: Sequence[str], modified: Sequence[str]):
        self.original = original
        self.modified = modified
        self.n = len(original)
        self.m = len(modified)
        self.offset = self.n + self.m + 1
        self._trace: List[List[int]] = []
        self._edit_distance: Optional[int] = None

    def compute(self) -> EditScript:
        if self.n == 0 and self.m == 0:
            self._edit_distance = 0
            return []
        if self.n == 0:
            self._edit_distance = self.m
            return [make_insert(0, j) for j in range(self.m)]
        if self.m == 0:
            self._edit_distance = self.n
            return [make_delete(i, 0) for i in range(self.n)]
        if list(self.original) == list(self.modified):
            self._edit_distance = 0
            return []
        self._trace = self._find_path()
        script = self._trace_path()
        logger.debug("myers: n=%d m=%d d=%d", self.n, self.m, self._edit_distance)
        return script

    def _go_down(self, v: List[int], k: int, d: int) -> bool:
        off = self.offset
        return k == -d or (k != d and v[off + k - 1] < v[off + k + 1])

    def _find_path(self) -> List[List[int]]:
        n, m, off = self.n, self.m, self.offset
        a, b = self.original, self.modified
        v = [0] * (2 * off + 1)
        trace: List[List[int]] = []
        for d in range(n + m + 1):
            for k in range(-d, d + 1, 2):
                if self._go_down(v, k, d):
                    x = v[off + k + 1]
                else:
                    x = v[off + k - 1] + 1
                y = x - k
                while x < n and y < m and a[x] == b[y]:
                    x += 1
                    y += 1
                v[off + k] = x
                if x >= n and y >= m:
                    trace.append(v[:])
                    self._edit_distance = d
                    return trace
            trace.append(v[:])
        return trace

    def _trace_path(self) -> EditScript:
        off = self.offset
        x, y = self.n, self.m
        script_reversed: List[Edit] = []
        for d in range(len(self._trace) - 1, 0, -1):
            v = self._trace[d - 1]
            k = x - y
            if self._go_down(v, k, d):
                prev_k = k + 1
            else:
                prev_k = k - 1
            prev_x = v[off + prev_k]
            prev_y = prev_x - prev_k
            if prev_k == k + 1:
                script_reversed.append(make_insert(prev_x, prev_y))
            else:
                script_reversed.append(make_delete(prev_x, prev_y))
            x, y = prev_x, prev_y
        script_reversed.reverse()
        return script_reversed

    def get_edit_distance(self) -> int:
        if self._edit_distance is None:
            self.compute()
        return self._edit_distance or 0


def shortest_edit_script(a: Sequence[str], b: Sequence[str]) -> EditScript:
    return MyersDiff(a, b).compute()


def edit_distance(a: Sequence[str], b: Sequence[str]) -> int:
    return MyersDiff(a, b).get_edit_distance()

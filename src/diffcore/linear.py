import logging
from typing import List, Optional, Sequence, Tuple

from .models import EditScript, make_insert, make_delete

logger = logging.getLogger(__name__)

Box = Tuple[int, int, int, int]


class LinearSpaceMyers:
    """Divide-and-conquer Myers diff in O(n + m) space.

    Every box is split at a point of an optimal path found by the
    bidirectional middle-snake search; pending boxes wait on an explicit
    stack so long inputs never grow the Python call stack.
    """

    def __init__(self, original: Sequence[str], modified: Sequence[str]):
        self.original = original
        self.modified = modified
        self.n = len(original)
        self.m = len(modified)

    def compute(self) -> EditScript:
        script: EditScript = []
        stack: List[Box] = [(0, self.n, 0, self.m)]
        splits = 0
        while stack:
            x_lo, x_hi, y_lo, y_hi = self._trim(*stack.pop())
            if x_lo < x_hi and y_lo < y_hi:
                split = self._find_split(x_lo, x_hi, y_lo, y_hi)
                if split is not None and split not in ((x_lo, y_lo), (x_hi, y_hi)):
                    x, y = split
                    splits += 1
                    stack.append((x, x_hi, y, y_hi))
                    stack.append((x_lo, x, y_lo, y))
                    continue
            script.extend(make_delete(i, y_lo) for i in range(x_lo, x_hi))
            script.extend(make_insert(x_hi, j) for j in range(y_lo, y_hi))
        logger.debug("linear myers: n=%d m=%d splits=%d edits=%d",
                     self.n, self.m, splits, len(script))
        return script

    def _trim(self, x_lo: int, x_hi: int, y_lo: int, y_hi: int) -> Box:
        a, b = self.original, self.modified
        while x_lo < x_hi and y_lo < y_hi and a[x_lo] == b[y_lo]:
            x_lo += 1
            y_lo += 1
        while x_lo < x_hi and y_lo < y_hi and a[x_hi - 1] == b[y_hi - 1]:
            x_hi -= 1
            y_hi -= 1
        return x_lo, x_hi, y_lo, y_hi

    def _find_split(self, x_lo: int, x_hi: int, y_lo: int, y_hi: int) -> Optional[Tuple[int, int]]:
        a, b = self.original, self.modified
        n = x_hi - x_lo
        m = y_hi - y_lo
        max_d = (n + m + 1) // 2
        off = max_d + 1
        size = 2 * off + 1
        vf = [-1] * size
        vb = [-1] * size
        vf[off + 1] = 0
        vb[off + 1] = 0
        delta = n - m
        odd = delta % 2 != 0
        # diagonals that ran off the box are never extended again
        f_start = f_end = b_start = b_end = 0
        for d in range(max_d + 1):
            for k in range(-d + f_start, d + 1 - f_end, 2):
                if k == -d or (k != d and vf[off + k - 1] < vf[off + k + 1]):
                    x = vf[off + k + 1]
                else:
                    x = vf[off + k - 1] + 1
                y = x - k
                while x < n and y < m and a[x_lo + x] == b[y_lo + y]:
                    x += 1
                    y += 1
                vf[off + k] = x
                if x > n:
                    f_end += 2
                elif y > m:
                    f_start += 2
                elif odd:
                    c = off + delta - k
                    if 0 <= c < size and vb[c] != -1 and x >= n - vb[c]:
                        return x_lo + x, y_lo + y
            for c in range(-d + b_start, d + 1 - b_end, 2):
                if c == -d or (c != d and vb[off + c - 1] < vb[off + c + 1]):
                    xr = vb[off + c + 1]
                else:
                    xr = vb[off + c - 1] + 1
                yr = xr - c
                while xr < n and yr < m and a[x_hi - 1 - xr] == b[y_hi - 1 - yr]:
                    xr += 1
                    yr += 1
                vb[off + c] = xr
                if xr > n:
                    b_end += 2
                elif yr > m:
                    b_start += 2
                elif not odd:
                    k = off + delta - c
                    if 0 <= k < size and vf[k] != -1:
                        x = vf[k]
                        y = x - (k - off)
                        if n - xr <= x <= n and y <= m:
                            return x_lo + x, y_lo + y
        return None


def linear_edit_script(a: Sequence[str], b: Sequence[str]) -> EditScript:
    return LinearSpaceMyers(a, b).compute()

"""
Closed-form counting formulas.

Each function returns an exact Python integer; callers range-check results
that must fit in 64 bits. Arguments are non-negative counts.
"""
import math
from typing import List


def combinations(n: int, k: int) -> int:
    """Subsets of size ``k`` of an ``n``-set, C(n, k)."""
    return math.comb(n, k)


def falling(n: int, k: int) -> int:
    """Falling factorial n (n-1) ... (n-k+1): ordered selections of ``k`` from ``n``."""
    return math.perm(n, k)


def multichoose(n: int, k: int) -> int:
    """Multisets of size ``k`` drawn from ``n`` kinds, C(n+k-1, k)."""
    if n == 0:
        return 1 if k == 0 else 0
    return math.comb(n + k - 1, k)


def multichoose_onto(n: int, k: int) -> int:
    """Multisets of size ``k`` from ``n`` kinds using every kind, C(k-1, n-1)."""
    if n == 0 or k == 0:
        return 1 if n == k else 0
    return math.comb(k - 1, n - 1)


def permutations_with_repetition(n: int, k: int) -> int:
    """Sequences of length ``k`` over ``n`` symbols, n^k."""
    return n**k


def injection(n: int, k: int) -> int:
    """Ways to place ``n`` balls injectively into ``k`` identical boxes."""
    return 1 if n <= k else 0


def stirling2(n: int, k: int) -> int:
    """Stirling number of the second kind: partitions of an ``n``-set into ``k`` blocks."""
    if k > n:
        return 0
    # row[j] holds S(i, j) for the current i
    row: List[int] = [1] + [0] * k
    for _ in range(n):
        for j in range(k, 0, -1):
            row[j] = j * row[j] + row[j - 1]
        row[0] = 0
    return row[k]


def onto_functions(n: int, k: int) -> int:
    """Surjections from an ``n``-set onto a ``k``-set, k! S(n, k)."""
    return math.factorial(k) * stirling2(n, k)


def multi_stirling2(n: int, k: int) -> int:
    """Partitions of an ``n``-set into at most ``k`` blocks."""
    return sum(stirling2(n, i) for i in range(k + 1))


def integer_partition(n: int, k: int) -> int:
    """Partitions of the integer ``n`` into exactly ``k`` positive parts."""
    if k > n:
        return 0
    # table[i][j] = p(i, j); p(i, j) = p(i-1, j-1) + p(i-j, j)
    table = [[0] * (k + 1) for _ in range(n + 1)]
    table[0][0] = 1
    for i in range(1, n + 1):
        for j in range(1, min(i, k) + 1):
            table[i][j] = table[i - 1][j - 1] + table[i - j][j]
    return table[n][k]


def multi_partition(n: int, k: int) -> int:
    """Partitions of the integer ``n`` into at most ``k`` positive parts."""
    return sum(integer_partition(n, i) for i in range(k + 1))

"""Levenshtein edit distance and the normalized similarity built on it."""


def levenshtein_distance(a: str, b: str) -> int:
    """Classic dynamic-programming edit distance.

    An empty side costs the full length of the other side.
    """
    if not a or not b:
        return max(len(a), len(b))
    if a == b:
        return 0

    rows = len(b) + 1
    cols = len(a) + 1
    matrix = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,      # insertion
                    matrix[i - 1][j] + 1,      # deletion
                )
    return matrix[rows - 1][cols - 1]


def string_similarity(a: str, b: str) -> float:
    """Return 1 - distance / longest length, in [0, 1].

    Two empty strings (or any identical pair) score 1.0; an empty string
    against a non-empty one scores 0.0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    longest = max(len(a), len(b))
    return 1.0 - levenshtein_distance(a, b) / longest

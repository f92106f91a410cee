"""Move sequences and small helpers shared by the tests."""

# Column order that fills a 6x7 grid in 42 alternating moves without ever
# giving either player four in a line.
TIE_SEQUENCE = [0, 2, 1, 3, 4, 6, 5] * 6

# Player one builds (5,0),(4,1),(3,2),(2,3) with player two filling underneath.
DIAGONAL_WIN_SEQUENCE = [0, 1, 1, 2, 3, 2, 2, 3, 6, 3, 3]

# 4x4 grid: player two's last token fills the grid and completes column 3.
FULL_AND_WON_4X4_SEQUENCE = [0, 2, 2, 0, 2, 2, 0, 3, 0, 3, 1, 3, 1, 1, 1, 3]


def play_all(match, columns):
    """Play each column in turn and return the list of accept/reject results."""
    return [match.play_round(col) for col in columns]

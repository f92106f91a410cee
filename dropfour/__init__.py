"""
dropfour - Rules engine for a two-player gravity-drop grid game

Players take turns dropping tokens into the columns of a fixed-size grid; a token falls
to the lowest empty cell of its column, and the first player to line up four tokens in a
row, column or diagonal wins. A full grid with no line is a tie.
"""

# Version number
__version__ = '0.1.0'

import random

DIGITS = frozenset(range(1, 10))


# =========================================================================
# MOVE VALIDATOR
# Row / column / box uniqueness for a single placed digit.
# =========================================================================
def is_valid_placement(grid, row, col, digit):
    """
    Checks whether `digit` at (row, col) clashes with another cell.
    The target cell itself is excluded, so the digit may already be
    written there.
    """
    # Check Row
    for j in range(9):
        if j != col and grid[row][j] == digit:
            return False
    # Check Column
    for i in range(9):
        if i != row and grid[i][col] == digit:
            return False
    # Check Subgrid
    box_row, box_col = row - row % 3, col - col % 3
    for i in range(box_row, box_row + 3):
        for j in range(box_col, box_col + 3):
            if (i != row or j != col) and grid[i][j] == digit:
                return False
    return True


def can_place(grid, row, col, digit):
    """Stricter check used while filling: the digit must not appear anywhere in row, column or box."""
    for i in range(9):
        if grid[row][i] == digit or grid[i][col] == digit:
            return False

    box_row, box_col = 3 * (row // 3), 3 * (col // 3)
    for i in range(box_row, box_row + 3):
        for j in range(box_col, box_col + 3):
            if grid[i][j] == digit:
                return False

    return True


def invalid_cells(grid, clues):
    """Rebuilds the set of user-entered cells that break uniqueness."""
    cells = set()
    for i in range(9):
        for j in range(9):
            value = grid[i][j]
            if value != 0 and clues[i][j] == 0 and not is_valid_placement(grid, i, j, value):
                cells.add((i, j))
    return cells


# =========================================================================
# COMPLETION CHECKER
# =========================================================================
def is_complete(grid, solution):
    """True iff every cell of grid equals the same cell of solution."""
    for row in range(9):
        for col in range(9):
            if grid[row][col] != solution[row][col]:
                return False
    return True


def is_solved_grid(grid):
    """True if every row, column and box is a permutation of 1..9."""
    for i in range(9):
        if set(grid[i]) != DIGITS:
            return False
        if {grid[r][i] for r in range(9)} != DIGITS:
            return False
    for box_row in range(0, 9, 3):
        for box_col in range(0, 9, 3):
            box = {grid[box_row + i][box_col + j] for i in range(3) for j in range(3)}
            if box != DIGITS:
                return False
    return True


def matches_solution(puzzle, solution):
    """Every clue of the puzzle equals the solution cell underneath it."""
    return all(puzzle[r][c] in (0, solution[r][c]) for r in range(9) for c in range(9))


# =========================================================================
# HINTS & FORMATTING
# =========================================================================
def get_hint(grid, solution, rng=random):
    """Reveal a random empty cell: returns (row, col, value) or None."""
    empty_cells = [(row, col, solution[row][col])
                   for row in range(9) for col in range(9)
                   if grid[row][col] == 0]
    if not empty_cells:
        return None
    return rng.choice(empty_cells)


def format_time(seconds):
    """Format a duration as MM:SS."""
    seconds = int(seconds)
    minutes = seconds // 60
    return f"{minutes:02d}:{seconds % 60:02d}"


def valid_digit(digit):
    return isinstance(digit, int) and not isinstance(digit, bool) and 1 <= digit <= 9

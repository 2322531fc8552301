class DailySudokuError(Exception):
    """Base class for all daily sudoku errors."""


class GenerationError(DailySudokuError):
    """Raised when no solved grid could be produced after every retry."""


class CatalogError(DailySudokuError):
    """Raised when the puzzle catalog cannot be read or holds a bad record."""

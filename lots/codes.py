"""
Lots — Code Generator

Pure functions that build the human-readable lot code:

    LOT + DDMONYY + <unit code> + <sequence letters> + <loaded liters>

e.g. unit 4T1, 2025-11-25, first lot of the day, 3400 L:
``LOT25NOV254T1A3400``. The code is display-only; callers use the
structured fields on the lot rather than parsing it back.

@file lots/codes.py
"""

from datetime import date

# Fixed English abbreviations; strftime('%b') follows the process locale.
MONTH_ABBREVIATIONS = (
    'JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
    'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC',
)


def seq_index_to_letters(n: int) -> str:
    """
    Bijective base-26: 1 -> A, 26 -> Z, 27 -> AA, 28 -> AB, 53 -> BA.
    Returns '' for n < 1.
    """
    if n is None or n < 1:
        return ''
    letters = []
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord('A') + rem))
    return ''.join(reversed(letters))


def format_load_date(load_date: date) -> str:
    """2025-11-25 -> '25NOV25'."""
    return f'{load_date.day:02d}{MONTH_ABBREVIATIONS[load_date.month - 1]}{load_date.year % 100:02d}'


def gen_lot_code(unit_code: str, load_date: date, seq_index: int, loaded_liters: int) -> str:
    return f'LOT{format_load_date(load_date)}{unit_code}{seq_index_to_letters(seq_index)}{loaded_liters}'


def debit_code_change(lot_code: str, used_liters: int) -> str:
    """Source-side annotation after a draw: LOT...-<used>."""
    return f'{lot_code}-{used_liters}'


def credit_code_change(lot_code: str, added_liters: int) -> str:
    """Destination-side annotation after a top-up: LOT...+(<added>)."""
    return f'{lot_code}+({added_liters})'

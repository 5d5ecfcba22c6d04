"""
Tests — Lot code generator: bijective base-26 letters and the LOT code format.

@file lots/tests/test_codes.py
"""

from datetime import date

import pytest

from lots.codes import (
    credit_code_change,
    debit_code_change,
    format_load_date,
    gen_lot_code,
    seq_index_to_letters,
)


class TestSeqIndexToLetters:

    @pytest.mark.parametrize('n, expected', [
        (1, 'A'),
        (2, 'B'),
        (26, 'Z'),
        (27, 'AA'),
        (28, 'AB'),
        (52, 'AZ'),
        (53, 'BA'),
        (702, 'ZZ'),
        (703, 'AAA'),
    ])
    def test_bijective_base26(self, n, expected):
        assert seq_index_to_letters(n) == expected

    @pytest.mark.parametrize('n', [0, -1, None])
    def test_non_positive_is_empty(self, n):
        assert seq_index_to_letters(n) == ''


class TestGenLotCode:

    def test_reference_example(self):
        assert gen_lot_code('4T1', date(2025, 11, 25), 1, 3400) == 'LOT25NOV254T1A3400'

    def test_second_lot_same_day(self):
        assert gen_lot_code('4T1', date(2025, 11, 25), 2, 500) == 'LOT25NOV254T1B500'

    def test_date_is_zero_padded(self):
        assert format_load_date(date(2026, 1, 5)) == '05JAN26'

    def test_code_change_strings(self):
        code = 'LOT25NOV254T1A3400'
        assert debit_code_change(code, 1000) == 'LOT25NOV254T1A3400-1000'
        assert credit_code_change(code, 250) == 'LOT25NOV254T1A3400+(250)'

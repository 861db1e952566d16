"""Tests for the REPL history and the batch statistics reader."""

import io

import pytest

from radixcalc_pkg.history import History
from radixcalc_pkg.number import Number
from radixcalc_pkg.stats import mean, read_numbers, standard_deviation
from radixcalc_pkg.types import Message


class TestHistory:
    def test_records_in_order(self):
        history = History()
        history.add("1+1", "2")
        history.add("2*3", "6")
        assert history.entries() == [("1+1", "2"), ("2*3", "6")]
        assert list(history) == history.entries()
        assert len(history) == 2

    def test_limit_drops_oldest(self):
        history = History(limit=2)
        for i in range(4):
            history.add(str(i), str(i))
        assert history.entries() == [("2", "2"), ("3", "3")]

    def test_toggle_recording(self):
        history = History()
        assert history.recording
        assert history.toggle_recording() is False
        history.add("1", "1")
        assert len(history) == 0
        assert history.toggle_recording() is True
        history.add("1", "1")
        assert len(history) == 1

    def test_clear(self):
        history = History()
        history.add("1", "1")
        history.clear()
        assert history.entries() == []


class TestReadNumbers:
    def test_whitespace_separated(self):
        stream = io.StringIO("1 2\t3\r\n 40\n")
        assert read_numbers(stream) == [Number(1), Number(2), Number(3), Number(40)]

    def test_empty_stream(self):
        assert read_numbers(io.StringIO("")) == []

    @pytest.mark.parametrize("text,bad", [("1 -2", "-"), ("1.5", "."), ("7 x", "x")])
    def test_non_digit(self, text, bad):
        with pytest.raises(Message) as exc_info:
            read_numbers(io.StringIO(text))
        assert exc_info.value.message == f"{bad} is not a digit"

    def test_unreadable_stream(self):
        class Broken(io.StringIO):
            def read(self, *args):
                raise OSError("device gone")

        with pytest.raises(Message) as exc_info:
            read_numbers(Broken())
        assert "device gone" in exc_info.value.message


class TestStatistics:
    def test_mean(self):
        assert mean([Number(1), Number(2), Number(4)]) == Number(7, 3)

    def test_mean_of_nothing(self):
        with pytest.raises(Message):
            mean([])

    def test_exact_deviation(self):
        assert standard_deviation([Number(1), Number(2), Number(3)]) == 1

    def test_irrational_deviation(self):
        values = [Number(v) for v in (2, 4, 4, 4, 5, 5, 7, 9)]
        result = standard_deviation(values)
        assert result == Number(32, 7).sqrt()
        assert result.to_string(precision=6) == "2.13809"

    def test_constant_input(self):
        assert standard_deviation([Number(5)] * 4) == 0

    @pytest.mark.parametrize("values", [[], [Number(3)]])
    def test_too_few_numbers(self, values):
        with pytest.raises(Message):
            standard_deviation(values)

import pytest

from spendwise.functional import Left, Nothing, Right, Some, first_error, maybe_first


def test_maybe_map_and_bind():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    assert Nothing().map(lambda x: x * 2).get_or_else(0) == 0

    def half(x):
        return Some(x // 2) if x % 2 == 0 else Nothing()

    assert Some(4).bind(half) == Some(2)
    assert Some(3).bind(half).is_none()
    assert Nothing().bind(half).is_none()


def test_maybe_first():
    assert maybe_first([1, 2, 3, 4], lambda x: x > 2) == Some(3)
    assert maybe_first([], lambda x: True) == Nothing()
    assert maybe_first([1], lambda x: x > 5).is_none()


def test_either_map_and_bind():
    def safe_divide(x):
        if x == 0:
            return Left({"error": "invalid_input", "message": "Division by zero"})
        return Right(10 // x)

    assert Right(2).bind(safe_divide) == Right(5)
    assert Right(0).bind(safe_divide).get_error()["message"] == "Division by zero"

    left = Left({"error": "original"})
    assert left.map(lambda x: x * 2).is_left()
    assert left.bind(safe_divide).get_error() == {"error": "original"}
    assert left.get_or_else(7) == 7


def test_right_has_no_error():
    with pytest.raises(ValueError):
        Right(1).get_error()


def test_first_error_picks_first_failure():
    assert first_error(None, None) == Right(None)
    assert first_error(None, {"error": "a"}, {"error": "b"}) == Left({"error": "a"})

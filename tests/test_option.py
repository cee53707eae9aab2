"""Tests for Option type (Some and Nothing)."""

import pytest
from gdoptional import Err, Error, HostError, Nothing, Ok, Option, Panic, Some
from hypothesis import given
from hypothesis import strategies as st
from strategies import json_payloads, payloads


class TestOptionCreation:
    """Tests for Some / Nothing construction."""

    def test_some_creation(self):
        """Some wraps a value."""
        some = Some(42)
        assert some.value == 42
        assert some.present is True

    def test_some_with_none(self):
        """Some(None) is a present value, not Nothing."""
        some = Some(None)
        assert some.is_some()
        assert some != Nothing()

    def test_nothing_creation(self):
        """Nothing() holds no value."""
        nothing = Nothing()
        assert nothing.is_none()
        assert nothing.value is None

    def test_classmethod_constructors(self):
        """Option.some / Option.none mirror Some / Nothing."""
        assert Option.some(1) == Some(1)
        assert Option.none() == Nothing()

    def test_from_nullable(self):
        """from_nullable maps None to Nothing and anything else to Some."""
        assert Option.from_nullable(None) == Nothing()
        assert Option.from_nullable(0) == Some(0)

    def test_repr(self):
        """Options render like their constructors."""
        assert repr(Some('a')) == "Some('a')"
        assert repr(Nothing()) == 'Nothing'


class TestOptionEquality:
    """Tests for Option equality."""

    def test_some_equality(self):
        assert Some(42) == Some(42)
        assert Some(42) != Some(43)

    def test_nothing_equality(self):
        assert Nothing() == Nothing()

    def test_some_not_equal_to_nothing(self):
        assert Some(42) != Nothing()


class TestOptionQuerying:
    """Tests for is_some(), is_none() and is_some_and()."""

    def test_some_is_some(self):
        assert Some(42).is_some() is True
        assert Some(42).is_none() is False

    def test_nothing_is_none(self):
        assert Nothing().is_some() is False
        assert Nothing().is_none() is True

    def test_is_some_and(self):
        assert Some(4).is_some_and(lambda x: x > 3) is True
        assert Some(2).is_some_and(lambda x: x > 3) is False

    def test_is_some_and_skips_predicate_on_nothing(self):
        calls = []
        assert Nothing().is_some_and(lambda x: calls.append(x) or True) is False
        assert calls == []

    def test_is_some_and_returns_bool(self):
        assert Some([1]).is_some_and(lambda xs: xs) is True
        assert Some([]).is_some_and(lambda xs: xs) is False


class TestOptionUnwrap:
    """Tests for unwrap, expect, unwrap_or, unwrap_or_else."""

    def test_some_unwrap(self):
        assert Some(42).unwrap() == 42

    def test_nothing_unwrap_panics(self):
        """Nothing.unwrap() panics."""
        with pytest.raises(Panic, match='Called unwrap on Nothing'):
            Nothing().unwrap()

    def test_panic_is_not_an_exception(self):
        """A generic except Exception does not catch a panic."""
        with pytest.raises(Panic):
            try:
                Nothing().unwrap()
            except Exception:  # noqa: BLE001
                pytest.fail('Panic must not be caught as Exception')

    def test_nothing_unwrap_warns_before_panicking(self, log_events):
        """A discouraging warning precedes the critical panic entry."""
        with pytest.raises(Panic):
            Nothing().unwrap()
        levels = [e['level'] for e in log_events]
        assert levels == ['warning', 'critical']

    def test_some_expect(self):
        assert Some(1).expect('must exist') == 1

    def test_nothing_expect_asserts(self):
        """expect on Nothing is a debug assertion carrying the message."""
        with pytest.raises(AssertionError, match='must exist'):
            Nothing().expect('must exist')

    def test_unwrap_or(self):
        assert Some(42).unwrap_or(0) == 42
        assert Nothing().unwrap_or(0) == 0

    def test_unwrap_or_else(self):
        calls = []

        def factory():
            calls.append(1)
            return 0

        assert Some(42).unwrap_or_else(factory) == 42
        assert calls == []
        assert Nothing().unwrap_or_else(factory) == 0
        assert calls == [1]


class TestOptionTransform:
    """Tests for map, map_or, and_then, or_else, filter."""

    def test_some_map(self):
        assert Some(21).map(lambda x: x * 2) == Some(42)

    def test_nothing_map_never_calls_mapper(self):
        """map on Nothing stays Nothing and never invokes the mapper."""
        calls = []
        assert Nothing().map(lambda x: calls.append(x)).is_none()
        assert calls == []

    def test_map_returning_none_stays_some(self):
        """A mapper returning None yields Some(None), not Nothing."""
        assert Some(1).map(lambda _: None) == Some(None)

    def test_map_or(self):
        assert Some(2).map_or(0, lambda x: x + 1) == 3
        assert Nothing().map_or(0, lambda x: x + 1) == 0

    def test_and_then(self):
        def half(x):
            return Some(x // 2) if x % 2 == 0 else Nothing()

        assert Some(4).and_then(half) == Some(2)
        assert Some(3).and_then(half) == Nothing()
        assert Nothing().and_then(half) == Nothing()

    def test_and_then_contract(self):
        """and_then callbacks must return an Option."""
        with pytest.raises(AssertionError, match='must return an Option'):
            Some(1).and_then(lambda x: x)

    def test_or_else(self):
        assert Some(1).or_else(lambda: Some(2)) == Some(1)
        assert Nothing().or_else(lambda: Some(2)) == Some(2)

    def test_or_else_contract(self):
        with pytest.raises(AssertionError):
            Nothing().or_else(lambda: 2)

    def test_filter(self):
        assert Some(4).filter(lambda x: x > 3) == Some(4)
        assert Some(2).filter(lambda x: x > 3) == Nothing()
        assert Nothing().filter(lambda x: True) == Nothing()

    def test_and_or_xor(self):
        assert Some(1).and_(Some(2)) == Some(2)
        assert Nothing().and_(Some(2)) == Nothing()
        assert Some(1).or_(Some(2)) == Some(1)
        assert Nothing().or_(Some(2)) == Some(2)
        assert Some(1).xor(Nothing()) == Some(1)
        assert Nothing().xor(Some(2)) == Some(2)
        assert Some(1).xor(Some(2)) == Nothing()

    def test_zip(self):
        assert Some(1).zip(Some('a')) == Some((1, 'a'))
        assert Some(1).zip(Nothing()) == Nothing()

    def test_flatten(self):
        assert Some(Some(1)).flatten() == Some(1)
        assert Some(Nothing()).flatten() == Nothing()
        assert Nothing().flatten() == Nothing()

    def test_combinators_return_new_holders(self):
        """Taking from a combinator result leaves the source intact."""
        source = Some(1)
        source.or_(Nothing()).take()
        assert source == Some(1)


class TestOptionSlot:
    """Tests for take, replace and get_or_insert_with."""

    def test_take_empties_holder(self):
        slot = Some('jump')
        assert slot.take() == Some('jump')
        assert slot.is_none()
        assert slot.take() == Nothing()

    def test_take_on_nothing(self):
        slot = Nothing()
        assert slot.take() == Nothing()
        assert slot.is_none()

    def test_replace(self):
        slot = Some(1)
        assert slot.replace(2) == Some(1)
        assert slot == Some(2)

    def test_replace_fills_nothing(self):
        slot = Nothing()
        assert slot.replace(5) == Nothing()
        assert slot == Some(5)

    def test_get_or_insert_with(self):
        slot = Nothing()
        assert slot.get_or_insert_with(lambda: 3) == 3
        assert slot == Some(3)
        assert slot.get_or_insert_with(lambda: 4) == 3


class TestOptionLookup:
    """Tests for arr_get and dict_get."""

    def test_arr_get_in_range(self):
        assert Option.arr_get([1, 2, 3], 1) == Some(2)
        assert Option.arr_get([1, 2, 3], -1) == Some(3)

    def test_arr_get_out_of_range(self):
        assert Option.arr_get([1, 2, 3], 3) == Nothing()
        assert Option.arr_get([1, 2, 3], -4) == Nothing()
        assert Option.arr_get([], 0) == Nothing()

    def test_dict_get(self):
        assert Option.dict_get({'a': 1}, 'a') == Some(1)
        assert Option.dict_get({'a': None}, 'a') == Some(None)
        assert Option.dict_get({'a': 1}, 'b') == Nothing()


class TestOptionConversion:
    """Tests for ok_or and ok_or_else."""

    def test_ok_or(self):
        assert Some(1).ok_or('missing') == Ok(1)
        assert Nothing().ok_or('missing') == Err('missing')

    def test_ok_or_else_is_lazy(self):
        calls = []

        def make():
            calls.append(1)
            return 'missing'

        assert Some(1).ok_or_else(make) == Ok(1)
        assert calls == []
        assert Nothing().ok_or_else(make) == Err('missing')


class TestOptionDictForm:
    """Tests for to_dict / from_dict."""

    def test_to_dict(self):
        assert Some(1).to_dict() == {'Some': 1}
        assert Nothing().to_dict() == {'None': True}

    def test_from_dict(self):
        assert Option.from_dict({'Some': 1}) == Ok(Some(1))
        assert Option.from_dict({'None': False}) == Ok(Nothing())

    def test_from_dict_rejects_both_keys(self):
        result = Option.from_dict({'Some': 1, 'None': True})
        assert result.is_err()
        assert result.error.kind == HostError.ERR_INVALID_DATA

    def test_from_dict_rejects_neither_key(self):
        assert Option.from_dict({}).is_err()

    def test_from_dict_rejects_extra_keys(self):
        result = Option.from_dict({'Some': 1, 'extra': 2})
        assert result.matches_err(HostError.ERR_INVALID_DATA)
        assert result.error.details == {'keys': ['Some', 'extra']}

    def test_from_dict_rejects_non_mapping(self):
        result = Option.from_dict(['Some', 1])
        assert isinstance(result.error, Error)
        assert result.error.details == {'type': 'list'}


class TestOptionProperties:
    """Property-based tests for Option laws."""

    @given(payloads)
    def test_some_unwrap_identity(self, v):
        assert Some(v).unwrap() == v

    @given(st.integers())
    def test_map_composes(self, v):
        def f(x):
            return x * 3 + 1

        assert Some(v).map(f).unwrap() == f(v)

    @given(json_payloads)
    def test_dict_round_trip(self, v):
        assert Option.from_dict(Some(v).to_dict()).unwrap().unwrap() == v

    @given(payloads)
    def test_take_then_empty(self, v):
        slot = Some(v)
        assert slot.take() == Some(v)
        assert slot == Nothing()

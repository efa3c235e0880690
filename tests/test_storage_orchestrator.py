"""
Tests for the encode/decode orchestrator
"""

import pytest

from digitcache import DigitCache
from orchestration import StorageOrchestrator
from pistorage.errors import (
    DecodeLimitError,
    EmptyMessageError,
    InvalidBaseError,
    InvalidCodePointError,
    InvalidDigitError,
    RangeError,
    SequenceNotFoundError,
    UnknownConstantError
)

# First base-256 digits of pi are 0x24 0x3F 0x6A ('$', '?', 'j')
PI_256_HEAD = "$?j"
# First base-16 digits of pi are 2, 4, 3, F
PI_16_HEAD = "\x02\x04\x03\x0f"


@pytest.fixture
def orchestrator():
    return StorageOrchestrator(search_limit=2000)


def test_encode_empty_message(orchestrator):
    with pytest.raises(EmptyMessageError):
        orchestrator.encode("")


def test_encode_head_of_pi_base_256(orchestrator):
    assert orchestrator.encode(PI_256_HEAD) == {
        'constant': 'pi',
        'base': 256,
        'start': 0,
        'length': 3
    }


def test_encode_prefers_smallest_base_on_tie(orchestrator):
    assert orchestrator.encode(PI_16_HEAD) == {
        'constant': 'pi',
        'base': 16,
        'start': 0,
        'length': 4
    }


@pytest.mark.parametrize("message", [PI_256_HEAD, PI_16_HEAD, "A", "z"])
def test_round_trip(orchestrator, message):
    encoding = orchestrator.encode(message)
    assert orchestrator.decode(**encoding) == message


def test_sequential_and_threaded_agree():
    sequential = StorageOrchestrator(search_limit=2000, max_workers=1)
    threaded = StorageOrchestrator(search_limit=2000, max_workers=8)
    assert sequential.encode("A") == threaded.encode("A")


def test_tie_break_prefers_earliest_constant(monkeypatch):
    orchestrator = StorageOrchestrator(constants=['e', 'pi'], bases=[64, 16], max_workers=1)

    def fake_search(sequence, constant, base):
        return {'found': True, 'start': 5}

    monkeypatch.setattr(orchestrator, '_search', fake_search)
    assert orchestrator.encode("ab") == {'constant': 'e', 'base': 16, 'start': 5, 'length': 2}


def test_smaller_encoding_beats_declaration_order(monkeypatch):
    orchestrator = StorageOrchestrator(constants=['pi', 'e'], bases=[16], max_workers=1)
    starts = {'pi': 4096, 'e': 15}

    def fake_search(sequence, constant, base):
        return {'found': True, 'start': starts[constant]}

    monkeypatch.setattr(orchestrator, '_search', fake_search)
    # 4096 is "1000" in base 16 (4 digits), 15 is "F" (1 digit)
    assert orchestrator.encode("x")['constant'] == 'e'


def test_encode_not_found_is_an_error():
    orchestrator = StorageOrchestrator(constants=['pi'], bases=[16], search_limit=50)
    # Code point 0x4E16 can never be a base-16 digit
    with pytest.raises(SequenceNotFoundError) as exc_info:
        orchestrator.encode("世")
    assert exc_info.value.candidates == 1
    assert exc_info.value.search_limit == 50


def test_encode_limit_shorter_than_message():
    orchestrator = StorageOrchestrator(search_limit=3)
    with pytest.raises(SequenceNotFoundError):
        orchestrator.encode("long message")


def test_decode_known_digits(orchestrator):
    assert orchestrator.decode('pi', 256, 0, 3) == PI_256_HEAD
    assert orchestrator.decode('pi', 256, 0, 0) == ""


def test_decode_negative_start(orchestrator):
    with pytest.raises(RangeError):
        orchestrator.decode("pi", 10, -1, 3)


def test_decode_negative_length(orchestrator):
    with pytest.raises(RangeError):
        orchestrator.decode("pi", 10, 0, -3)


def test_decode_unknown_constant(orchestrator):
    with pytest.raises(UnknownConstantError):
        orchestrator.decode("xi", 10, 0, 3)


def test_decode_unknown_constant_checked_before_range(orchestrator):
    with pytest.raises(UnknownConstantError):
        orchestrator.decode("xi", 10, -1, 3)


def test_decode_invalid_base(orchestrator):
    with pytest.raises(InvalidBaseError):
        orchestrator.decode("pi", 1, 0, 3)


def test_render_and_parse_encoding(orchestrator):
    encoding = {'constant': 'pi', 'base': 16, 'start': 1234, 'length': 2}
    rendered = orchestrator.render_encoding(encoding)
    assert rendered == {'constant': 'pi', 'base': 16, 'start': '4D2', 'length': '2'}
    assert orchestrator.parse_rendered('pi', 16, '4d2', '2') == encoding


def test_find_digit_string_in_e(orchestrator):
    # e = 2.71828...
    assert orchestrator.find_digit_string("71828") == {'found': True, 'start': 0, 'position': 1}
    assert orchestrator.find_digit_string("1828", 'e', 10)['position'] == 2


def test_find_digit_string_hex(orchestrator):
    # pi = 3.243F6A88...
    assert orchestrator.find_digit_string("6a88", 'pi', 16)['start'] == 4


def test_find_digit_string_rejects_bad_input(orchestrator):
    with pytest.raises(InvalidDigitError):
        orchestrator.find_digit_string("")
    with pytest.raises(InvalidDigitError):
        orchestrator.find_digit_string("12a4", 'e', 10)


def test_shared_cache_is_reused():
    cache = DigitCache()
    first = StorageOrchestrator(search_limit=500, cache=cache)
    second = StorageOrchestrator(search_limit=500, cache=cache)

    first.digits('pi', 10, 300)
    computed = cache.get_stats()['digits_computed']
    second.digits('pi', 10, 300)

    assert cache.get_stats()['digits_computed'] == computed
    assert second.get_cache_stats()['cache_hits'] >= 1


@pytest.mark.parametrize("kwargs, error", [
    ({'constants': ['tau']}, UnknownConstantError),
    ({'bases': [1]}, InvalidBaseError),
    ({'constants': []}, ValueError),
    ({'search_limit': -5}, RangeError),
    ({'max_workers': 0}, RangeError),
    ({'max_decode_digits': -1}, RangeError),
])
def test_invalid_configuration(kwargs, error):
    with pytest.raises(error):
        StorageOrchestrator(**kwargs)


def test_decode_bounded_by_search_limit(orchestrator):
    assert orchestrator.max_decode_digits == 2000
    with pytest.raises(DecodeLimitError) as exc_info:
        orchestrator.decode('pi', 256, 200000, 2)
    assert exc_info.value.limit == 2000
    assert "max_decode_digits" in str(exc_info.value)
    assert orchestrator.get_cache_stats()['digits_computed'] == 0


def test_decode_limit_is_inclusive(orchestrator):
    assert len(orchestrator.decode('pi', 16, 1998, 2)) == 2
    with pytest.raises(RangeError):
        orchestrator.decode('pi', 16, 1999, 2)


def test_explicit_decode_limit():
    orchestrator = StorageOrchestrator(search_limit=10, max_decode_digits=300)
    assert len(orchestrator.decode('e', 256, 290, 10)) == 10
    with pytest.raises(DecodeLimitError):
        orchestrator.decode('e', 256, 291, 10)


def test_unbounded_decode_limit():
    orchestrator = StorageOrchestrator(search_limit=10, max_decode_digits=None)
    assert orchestrator.decode('pi', 256, 0, 3) == PI_256_HEAD


def test_decode_rejects_surrogate_digits(orchestrator, monkeypatch):
    monkeypatch.setattr(orchestrator.generator, 'read', lambda *args: [0xDFB7])
    with pytest.raises(InvalidCodePointError):
        orchestrator.decode('pi', 65536, 0, 1)


def test_encode_rejects_lone_surrogate(orchestrator):
    with pytest.raises(InvalidCodePointError):
        orchestrator.encode("\udfb7")

"""Tests for the edit session state machine."""

import pytest

from conftest import make_save_bytes
from malk.codec import NoBufferLoadedError, BadMagicError, StateError, SaveFields
from malk.session import SaveSession


class TestEmptySession:
    def test_initial_state(self):
        session = SaveSession()
        assert not session.is_loaded
        assert session.buffer is None
        assert session.current_fields() is None

    def test_encode_without_decode(self):
        session = SaveSession()
        with pytest.raises(NoBufferLoadedError, match='no loaded file'):
            session.encode(SaveFields())
        assert session.buffer is None

    def test_no_buffer_is_state_error(self):
        assert issubclass(NoBufferLoadedError, StateError)

    def test_failed_decode_stays_empty(self):
        session = SaveSession()
        with pytest.raises(BadMagicError):
            session.decode(b'\x00' * 8000)
        assert not session.is_loaded
        assert session.current_fields() is None


class TestLoadedSession:
    def test_decode(self, sample_save_bytes):
        session = SaveSession()
        fields = session.decode(sample_save_bytes)
        assert session.is_loaded
        assert session.buffer == sample_save_bytes
        assert session.current_fields() == fields

    def test_edits_do_not_touch_buffer(self, sample_save_bytes):
        session = SaveSession()
        fields = session.decode(sample_save_bytes)
        fields.coins = 1
        assert session.buffer == sample_save_bytes
        assert session.current_fields().coins == 123456

    def test_encode(self, sample_save_bytes):
        session = SaveSession()
        fields = session.decode(sample_save_bytes)
        fields.last_level = 4
        data = session.encode(fields)
        assert len(data) == len(sample_save_bytes)
        assert data[4373] == 3
        assert data[10] == 4
        assert session.buffer == data
        assert session.current_fields().last_level == 4

    def test_encode_default_fields(self, sample_save_bytes):
        session = SaveSession()
        session.decode(sample_save_bytes)
        data = session.encode()
        assert data[4393:4396] == sample_save_bytes[4393:4396]

    def test_failed_decode_keeps_last_good(self, sample_save_bytes):
        session = SaveSession()
        session.decode(sample_save_bytes)
        with pytest.raises(BadMagicError):
            session.decode(b'\x01' + sample_save_bytes[1:])
        assert session.is_loaded
        assert session.buffer == sample_save_bytes
        assert session.current_fields().gags == 42

    def test_failed_encode_keeps_buffer(self, sample_save_bytes):
        session = SaveSession()
        fields = session.decode(sample_save_bytes)
        fields.gags = 10
        fields.coins = None
        with pytest.raises(TypeError):
            session.encode(fields)
        assert session.is_loaded
        assert session.buffer == sample_save_bytes
        assert session.current_fields().gags == 42

    def test_decode_copies_input(self, sample_save_bytes):
        data = bytearray(sample_save_bytes)
        session = SaveSession()
        session.decode(data)
        data[601] = 0
        assert session.current_fields().gags == 42
        assert session.buffer[601] == 42

    def test_unedited_round_trip_keeps_out_of_range(self):
        data = bytearray(make_save_bytes())
        data[601] = 100
        data[4381] = 9
        session = SaveSession()
        session.decode(data)
        out = session.encode()
        assert out[601] == 100
        assert out[4381] == 9

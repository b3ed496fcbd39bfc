"""Tests for the save layout table."""

from malk.constants import (
    LAYOUT, FIELDS, CARD_FIELDS, TIMESTAMP_FIELDS,
    MAX_READ_OFFSET, MIN_SAVE_SIZE, SAVE_MAX_SIZE, BIG, LITTLE,
)


class TestLayoutTable:
    def test_names_unique(self):
        assert len(FIELDS) == len(LAYOUT)

    def test_no_overlapping_offsets(self):
        seen = set()
        for field in LAYOUT:
            for off in field.all_offsets:
                assert off not in seen, f"{field.name} overlaps at {off}"
                seen.add(off)

    def test_offsets_inside_max_size(self):
        for field in LAYOUT:
            assert max(field.all_offsets) < SAVE_MAX_SIZE

    def test_magic_byte_not_owned(self):
        for field in LAYOUT:
            assert 0 not in field.all_offsets

    def test_ranges_fit_width(self):
        for field in LAYOUT:
            stored_max = field.max_value - field.display_shift
            assert 0 <= field.min_value - field.display_shift
            assert stored_max < 256 ** field.width

    def test_byteorder(self):
        for field in LAYOUT:
            assert field.byteorder in (BIG, LITTLE)


class TestKnownOffsets:
    def test_year(self):
        assert FIELDS['year'].offset == 1
        assert FIELDS['year'].width == 2
        assert FIELDS['year'].byteorder == BIG

    def test_timestamp_bytes(self):
        assert [FIELDS[n].offset for n in TIMESTAMP_FIELDS[1:]] == [4, 5, 6, 7, 8]

    def test_coins(self):
        coins = FIELDS['coins']
        assert list(coins.offsets) == [4393, 4394, 4395]
        assert coins.byteorder == LITTLE
        assert coins.max_value == 9_999_999

    def test_progress(self):
        assert FIELDS['gags'].offset == 601
        assert FIELDS['last_level'].offset == 4373
        assert FIELDS['last_level'].mirror == 10
        assert FIELDS['last_mission'].offset == 4377
        assert FIELDS['last_mission'].mirror == 11
        assert FIELDS['unlocked_level'].offset == 4381
        assert FIELDS['unlocked_level'].mirror is None

    def test_cards(self):
        assert [FIELDS[n].offset for n in CARD_FIELDS] == list(range(7187, 7194))

    def test_min_size(self):
        assert MAX_READ_OFFSET == 7193
        assert MIN_SAVE_SIZE == 7194

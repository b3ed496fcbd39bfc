"""Save file layout for The Simpsons: Hit & Run.

Every field the editor owns is listed in LAYOUT. The codec reads and
writes only the offsets named here; all other bytes in the file are
opaque and passed through unchanged.
"""

from typing import NamedTuple

# ============================================================================
# File-level constants
# ============================================================================

SAVE_MAGIC = 0xBA           # Byte 0 of every save file
SAVE_MAX_SIZE = 8192        # Largest save file the game writes

BIG = 'big'
LITTLE = 'little'


class Field(NamedTuple):
    """One entry in the layout table.

    display_shift is added to the stored value on decode and removed on
    encode (levels and missions are stored zero-based, shown one-based).
    mirror, when set, is a second offset that receives the displayed value
    on encode. The game uses it for the load-game screen; it is never read.
    """
    name: str
    offset: int
    width: int
    byteorder: str
    min_value: int
    max_value: int
    label: str
    description: str = ''
    display_shift: int = 0
    mirror: int | None = None

    @property
    def offsets(self) -> range:
        return range(self.offset, self.offset + self.width)

    @property
    def all_offsets(self) -> tuple:
        if self.mirror is None:
            return tuple(self.offsets)
        return tuple(self.offsets) + (self.mirror,)


# ============================================================================
# Layout table
# ============================================================================

CARD_LEVELS = 7
CARDS_PER_LEVEL = 7
CARD_MASK = (1 << CARDS_PER_LEVEL) - 1  # 0x7F
CARDS_OFFSET = 0x1C13

LAYOUT = (
    Field('year',   0x01, 2, BIG, 0, 0xFFFF, 'Year',
          'Timestamp at the moment of save creation.'),
    Field('month',  0x04, 1, BIG, 0, 0xFF, 'Month'),
    Field('day',    0x05, 1, BIG, 0, 0xFF, 'Day'),
    Field('hour',   0x06, 1, BIG, 0, 0xFF, 'Hour'),
    Field('minute', 0x07, 1, BIG, 0, 0xFF, 'Minute'),
    Field('second', 0x08, 1, BIG, 0, 0xFF, 'Second'),

    Field('gags', 0x259, 1, BIG, 0, 84, 'Gags',
          'Total number of gags discovered across all levels.'),
    Field('coins', 0x1129, 3, LITTLE, 0, 9_999_999, 'Coins',
          'Number of coins currently held by the player.'),

    Field('last_level', 0x1115, 1, BIG, 1, 7, 'Last level played',
          'Last level loaded by the player. Should not exceed the last level unlocked.',
          display_shift=1, mirror=0x0A),
    Field('last_mission', 0x1119, 1, BIG, 1, 8, 'Last mission selected',
          'Last mission selected on the last level played. '
          '1-7 (1-8 for L1, as the first mission is the tutorial).',
          display_shift=1, mirror=0x0B),
    Field('unlocked_level', 0x111D, 1, BIG, 1, 7, 'Last level unlocked',
          'Last level unlocked by the player.',
          display_shift=1),
) + tuple(
    Field(f'cards_l{lvl}', CARDS_OFFSET + lvl - 1, 1, BIG, 0, CARD_MASK,
          f'Cards L{lvl}', f'Collector cards found on level {lvl}, one bit per card.')
    for lvl in range(1, CARD_LEVELS + 1)
)

FIELDS = {f.name: f for f in LAYOUT}

TIMESTAMP_FIELDS = ('year', 'month', 'day', 'hour', 'minute', 'second')
CARD_FIELDS = tuple(f'cards_l{lvl}' for lvl in range(1, CARD_LEVELS + 1))

# Highest offset decode reads; a buffer must be longer than this.
MAX_READ_OFFSET = max(max(f.offsets) for f in LAYOUT)
# Highest offset encode writes (mirrors included).
MAX_WRITE_OFFSET = max(max(f.all_offsets) for f in LAYOUT)
MIN_SAVE_SIZE = max(MAX_READ_OFFSET, MAX_WRITE_OFFSET) + 1

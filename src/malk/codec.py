"""Save file codec: validate, decode and encode the fields in LAYOUT.

decode_fields() reads a raw buffer into a SaveFields record without
touching the buffer. encode_fields() writes a SaveFields record back into
a buffer, changing only the offsets named in the layout table.
"""

from dataclasses import dataclass, asdict, fields as dc_fields

from .constants import (
    LAYOUT, FIELDS, SAVE_MAGIC, SAVE_MAX_SIZE, MIN_SAVE_SIZE,
    CARDS_PER_LEVEL, CARD_FIELDS, Field,
)


# ============================================================================
# Errors
# ============================================================================

class SaveError(Exception):
    """Base class for everything the codec raises."""


class FormatError(SaveError, ValueError):
    """The buffer is not a save file the codec can read."""


class OversizedFileError(FormatError):
    def __init__(self, size: int):
        super().__init__(f'oversized file ({size} bytes, max {SAVE_MAX_SIZE})')
        self.size = size


class BadMagicError(FormatError):
    def __init__(self, found: int | None = None):
        if found is None:
            msg = 'not a recognized save file (empty)'
        else:
            msg = f'not a recognized save file (magic ${found:02X}, expected ${SAVE_MAGIC:02X})'
        super().__init__(msg)
        self.found = found


class TruncatedFileError(FormatError):
    def __init__(self, size: int):
        super().__init__(f'truncated file ({size} bytes, need {MIN_SAVE_SIZE})')
        self.size = size


class StateError(SaveError, RuntimeError):
    """The session is not in a state that allows the operation."""


class NoBufferLoadedError(StateError):
    def __init__(self):
        super().__init__('no loaded file')


# ============================================================================
# Decoded field set
# ============================================================================

@dataclass
class SaveFields:
    """Editable values decoded from a save file.

    Level and mission values are one-based, as the game displays them.
    """
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    gags: int = 0
    coins: int = 0
    last_level: int = 1
    last_mission: int = 1
    unlocked_level: int = 1
    cards_l1: int = 0
    cards_l2: int = 0
    cards_l3: int = 0
    cards_l4: int = 0
    cards_l5: int = 0
    cards_l6: int = 0
    cards_l7: int = 0

    @property
    def timestamp(self) -> str:
        """Save timestamp as YYYY-MM-DD HH:MM:SS (no calendar validation)."""
        return (f'{self.year:04d}-{self.month:02d}-{self.day:02d} '
                f'{self.hour:02d}:{self.minute:02d}:{self.second:02d}')

    @property
    def cards(self) -> list[int]:
        return [getattr(self, name) for name in CARD_FIELDS]

    def get_cards(self, level: int) -> int:
        return getattr(self, _card_field(level))

    def set_cards(self, level: int, mask: int) -> None:
        setattr(self, _card_field(level), mask)

    def to_dict(self) -> dict:
        return asdict(self)

    def update(self, values: dict) -> list[str]:
        """Apply a name -> value dict. Returns the keys that were ignored."""
        known = {f.name for f in dc_fields(self)}
        ignored = []
        for key, val in values.items():
            if key not in known:
                ignored.append(key)
                continue
            if isinstance(val, bool) or not isinstance(val, int):
                raise TypeError(f'{key} must be an integer, got {val!r}')
            setattr(self, key, val)
        return ignored


def _card_field(level: int) -> str:
    name = f'cards_l{level}'
    if name not in FIELDS:
        raise ValueError(f'Level must be 1-{len(CARD_FIELDS)}, got {level}')
    return name


# ============================================================================
# Validation
# ============================================================================

def check_buffer(data) -> None:
    """Raise the appropriate FormatError if data is not a readable save."""
    size = len(data)
    if size > SAVE_MAX_SIZE:
        raise OversizedFileError(size)
    if size < 1:
        raise BadMagicError()
    if data[0] != SAVE_MAGIC:
        raise BadMagicError(data[0])
    if size < MIN_SAVE_SIZE:
        raise TruncatedFileError(size)


def clamp(field: Field, value: int) -> int:
    """Clamp value to the field's game range."""
    return max(field.min_value, min(field.max_value, value))


def clamp_storable(field: Field, value: int) -> int:
    """Clamp value to what the field's bytes can hold."""
    low = field.display_shift
    high = 256 ** field.width - 1 + field.display_shift
    return max(low, min(high, value))


def validate_fields(fields: SaveFields) -> list[str]:
    """Return warnings for values the game would not produce.

    Nothing here blocks an encode; see resolve_value() for what gets written.
    """
    warnings = []
    for field in LAYOUT:
        value = getattr(fields, field.name)
        if not field.min_value <= value <= field.max_value:
            warnings.append(f'{field.label} {value} outside '
                            f'{field.min_value}-{field.max_value}')
    if fields.last_level > fields.unlocked_level:
        warnings.append(f'Last level played {fields.last_level} exceeds '
                        f'last level unlocked {fields.unlocked_level}')
    return warnings


# ============================================================================
# Decode / encode
# ============================================================================

def read_field(data, field: Field) -> int:
    raw = int.from_bytes(bytes(data[field.offset:field.offset + field.width]),
                         field.byteorder)
    return raw + field.display_shift


def resolve_value(field: Field, value: int, current: int) -> int:
    """Return the value encode will write for field.

    A value equal to what the buffer already holds is kept as-is, even if
    it is outside the game range. A changed value is clamped to the game
    range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'{field.name} must be an integer, got {value!r}')
    if value == current:
        return clamp_storable(field, value)
    return clamp(field, value)


def resolve_fields(fields: SaveFields, data) -> SaveFields:
    """Return the field values encode_fields() would write into data."""
    check_buffer(data)
    return SaveFields(**{
        field.name: resolve_value(field, getattr(fields, field.name), read_field(data, field))
        for field in LAYOUT
    })


def write_field(buf: bytearray, field: Field, value: int) -> None:
    """Write value (and its mirror) into buf. value must fit the field's bytes."""
    stored = value - field.display_shift
    buf[field.offset:field.offset + field.width] = stored.to_bytes(field.width, field.byteorder)
    if field.mirror is not None:
        buf[field.mirror] = value & 0xFF


def decode_fields(data) -> SaveFields:
    """Decode every layout field from data. data is not modified."""
    check_buffer(data)
    return SaveFields(**{field.name: read_field(data, field) for field in LAYOUT})


def encode_fields(fields: SaveFields, buf: bytearray) -> None:
    """Write every layout field into buf in place.

    buf must already be a valid save buffer; its length is unchanged.
    Values are resolved before anything is written, so a bad value leaves
    buf untouched.
    """
    resolved = resolve_fields(fields, buf)
    for field in LAYOUT:
        write_field(buf, field, getattr(resolved, field.name))


# ============================================================================
# Collector card helpers
# ============================================================================

def card_bits(mask: int) -> str:
    """Render a card mask with card 1 (bit 0) first, e.g. 5 -> '1010000'."""
    return f'{mask & ((1 << CARDS_PER_LEVEL) - 1):0{CARDS_PER_LEVEL}b}'[::-1]


def parse_card_bits(text: str) -> int:
    """Inverse of card_bits(). Accepts a 7-char 0/1 string, card 1 first."""
    text = text.strip()
    if len(text) != CARDS_PER_LEVEL or set(text) - {'0', '1'}:
        raise ValueError(f'Card bits must be {CARDS_PER_LEVEL} characters of 0/1, got {text!r}')
    return int(text[::-1], 2)


def card_count(mask: int) -> int:
    return bin(mask & ((1 << CARDS_PER_LEVEL) - 1)).count('1')


def set_card(mask: int, card: int, unlocked: bool = True) -> int:
    """Set or clear one card (1-based, scrapbook order) in a level mask."""
    if not 1 <= card <= CARDS_PER_LEVEL:
        raise ValueError(f'Card must be 1-{CARDS_PER_LEVEL}, got {card}')
    bit = 1 << (card - 1)
    return mask | bit if unlocked else mask & ~bit
